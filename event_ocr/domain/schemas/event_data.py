from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RawEventData(BaseModel):
    """Event fields as found on the page; every field is independently optional."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = None
    date: Optional[str] = None
    time: Optional[str] = None
    location: Optional[str] = None
    description: Optional[str] = None
    raw_text: Optional[str] = None


class DateComponents(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    month: int = Field(..., ge=1, le=12)
    day: int = Field(..., ge=1, le=31)


class TimeComponents(BaseModel):
    model_config = ConfigDict(frozen=True)

    start_hour: int = Field(..., ge=0, le=23)
    start_minute: int = Field(..., ge=0, le=59)
    end_hour: Optional[int] = Field(default=None, ge=0, le=23)
    end_minute: Optional[int] = Field(default=None, ge=0, le=59)

    @property
    def is_range(self) -> bool:
        return self.end_hour is not None and self.end_minute is not None


class StructuredDateTime(BaseModel):
    """Calendar-ready date/time: epoch milliseconds plus plain components.

    month is 1-12 and hour is 0-23, the form calendar insertion APIs expect.
    """

    model_config = ConfigDict(frozen=True)

    start_date_time: Optional[int] = None  # epoch ms
    end_date_time: Optional[int] = None  # epoch ms
    all_day: bool = False
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: Optional[int] = None
    minute: Optional[int] = None

    @model_validator(mode="after")
    def validate_consistency(self) -> "StructuredDateTime":
        if self.all_day and (self.hour is not None or self.minute is not None):
            raise ValueError("all-day events carry no hour/minute")
        if (
            self.start_date_time is not None
            and self.end_date_time is not None
            and self.end_date_time < self.start_date_time
        ):
            raise ValueError("end_date_time precedes start_date_time")
        return self
