"""Shared field validators."""
from datetime import datetime
from typing import Annotated

from pydantic import AfterValidator

from app.utils.clock import ensure_utc, utc_now


def not_in_future(value: datetime) -> datetime:
    """Reject timestamps later than now; naive values are read as UTC."""
    value = ensure_utc(value)
    if value > utc_now():
        raise ValueError("timestamp cannot be in the future")
    return value


PastOrPresentDatetime = Annotated[datetime, AfterValidator(not_in_future)]
UtcDatetime = Annotated[datetime, AfterValidator(ensure_utc)]
