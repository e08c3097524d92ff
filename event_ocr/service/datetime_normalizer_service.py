from __future__ import annotations

from datetime import datetime, timedelta, timezone, tzinfo
from typing import Optional

from dateutil import tz as dateutil_tz

from event_ocr.domain.ports.DateTime_normalizer_provider import DateTime_normalizer_provider
from event_ocr.domain.schemas.event_data import StructuredDateTime
from event_ocr.lib.logger import get_logger
from .date_parser_service import DateParserService
from .time_parser_service import TimeParserService


_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
DAY_MS = 24 * 60 * 60 * 1000


def epoch_ms(dt: datetime) -> int:
    return (dt - _EPOCH) // timedelta(milliseconds=1)


class DateTimeNormalizerService(DateTime_normalizer_provider):
    """Combine extracted date and time phrases into a `StructuredDateTime`.

    Timestamps are resolved in the local timezone unless one is injected.
    A date without a usable time becomes an all-day event spanning 24 hours;
    a single time leaves the end open for the caller to default.
    """

    def __init__(
        self,
        tz: Optional[tzinfo] = None,
        date_parser: Optional[DateParserService] = None,
        time_parser: Optional[TimeParserService] = None,
    ) -> None:
        self.logger = get_logger("normalize")
        self.tz = tz or dateutil_tz.tzlocal()
        self.date_parser = date_parser or DateParserService()
        self.time_parser = time_parser or TimeParserService()

    @staticmethod
    def _resolve(dt: datetime) -> datetime:
        # wall times skipped by a DST jump move forward to a real instant
        return dateutil_tz.resolve_imaginary(dt)

    def normalize(
        self, date_str: Optional[str], time_str: Optional[str], now: Optional[datetime] = None
    ) -> Optional[StructuredDateTime]:
        if date_str is None:
            return None

        now = now or datetime.now(self.tz)
        date_parts = self.date_parser.parse(date_str, now.year, today=now.date())
        if date_parts is None:
            self.logger.info("normalize: date %r could not be parsed", date_str)
            return None

        time_parts = self.time_parser.parse(time_str) if time_str is not None else None
        all_day = time_parts is None

        if time_parts is not None:
            wall = datetime(
                date_parts.year, date_parts.month, date_parts.day,
                time_parts.start_hour, time_parts.start_minute, tzinfo=self.tz,
            )
        else:
            wall = datetime(date_parts.year, date_parts.month, date_parts.day, tzinfo=self.tz)
        try:
            start = self._resolve(wall)
        except OverflowError:
            self.logger.info("normalize: %s is outside the representable range", date_parts)
            return None
        start_ms = epoch_ms(start)

        end_ms: Optional[int] = None
        if all_day:
            end_ms = start_ms + DAY_MS
        elif time_parts.is_range:
            end_wall = wall.replace(hour=time_parts.end_hour, minute=time_parts.end_minute)
            try:
                end_ms = epoch_ms(self._resolve(end_wall))
                if end_ms < start_ms:
                    # overnight range such as "10:00 PM - 1:00 AM"
                    end_ms = epoch_ms(self._resolve(end_wall + timedelta(days=1)))
            except OverflowError:
                self.logger.info("normalize: end of %s is outside the representable range", time_parts)
                end_ms = None

        result = StructuredDateTime(
            start_date_time=start_ms,
            end_date_time=end_ms,
            all_day=all_day,
            year=date_parts.year,
            month=date_parts.month,
            day=date_parts.day,
            hour=None if all_day else time_parts.start_hour,
            minute=None if all_day else time_parts.start_minute,
        )
        self.logger.info(
            "normalize: date=%s time=%s all_day=%s start=%s end=%s",
            date_parts, time_parts, all_day, start.isoformat(), end_ms,
        )
        return result
