import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core.config import settings
from core.database import Base, engine
from core.errors import register_error_handlers
from core.security import security
from routers import (
    auth as auth_router,
    custom_words as custom_words_router,
    user_check as user_check_router,
    user_words as user_words_router,
    words as words_router,
)

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # schema changes go through alembic; this only fills in a fresh database
    Base.metadata.create_all(bind=engine)
    logger.info("Vocabulary API started")
    yield
    logger.info("Vocabulary API shutting down")


app = FastAPI(title="VocabularyAPI", lifespan=lifespan)
security.handle_errors(app)
register_error_handlers(app)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router, prefix="/api")
app.include_router(user_check_router.router, prefix="/api")
app.include_router(words_router.router, prefix="/api")
app.include_router(user_words_router.router, prefix="/api")
app.include_router(custom_words_router.router, prefix="/api")


@app.get("/status")
async def status():
    return {"status": "ok"}


if __name__ == "__main__":
    uvicorn.run("main:app", reload=True, host="127.0.0.1", port=8000)
