from __future__ import annotations

from pydantic import BaseModel


class DateRange(BaseModel):
    """Inclusive range of ISO dates (YYYY-MM-DD).

    ``start <= end`` is expected but not enforced.
    """

    start: str
    end: str
