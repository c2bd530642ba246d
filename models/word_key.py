import enum
from typing import NamedTuple


class WordStatus(str, enum.Enum):
    UNMARKED = "unmarked"
    UNKNOWN = "unknown"
    KNOWN = "known"


class WordKey(NamedTuple):
    """Business identity of a catalog word, shared by words and progress rows."""

    category: str
    subcategory: str
    local_id: int
