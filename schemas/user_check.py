from datetime import date

from schemas.common import CamelModel


class CheckIn(CamelModel):
    date: date
