from __future__ import annotations

import re
from typing import List, NamedTuple, Optional, Sequence, Tuple

from event_ocr.domain.schemas.geometry import TextBlock
from event_ocr.lib.logger import get_logger


class NamedPattern(NamedTuple):
    name: str
    regex: re.Pattern[str]


_MONTH = (
    r"(?:Jan(?:uary)?|Feb(?:ruary)?|Mar(?:ch)?|Apr(?:il)?|May|Jun(?:e)?|Jul(?:y)?"
    r"|Aug(?:ust)?|Sep(?:t(?:ember)?)?|Oct(?:ober)?|Nov(?:ember)?|Dec(?:ember)?)"
)
_MONTH_PREFIX = r"(?:Jan|Feb|Mar|Apr|May|Jun|Jul|Aug|Sep|Oct|Nov|Dec)[a-z]*"
_WEEKDAY = r"(?:Monday|Tuesday|Wednesday|Thursday|Friday|Saturday|Sunday)"
_ORDINAL = r"\d{1,2}(?:st|nd|rd|th)"


# Priority order, not position in the text, decides which date wins: a bare
# ordinal found by an earlier entry pre-empts a fuller date matched later on.
DATE_PATTERNS: Tuple[NamedPattern, ...] = (
    NamedPattern("ordinal_month", re.compile(rf"\b{_ORDINAL} {_MONTH}\b", re.I)),
    NamedPattern("month_day_year", re.compile(rf"\b{_MONTH}\s*\d{{1,2}}(,)?\s*\d{{4}}\b", re.I)),
    # No trailing boundary: "Jan 21st" yields "Jan 21".
    NamedPattern("month_day", re.compile(rf"\b{_MONTH_PREFIX} \d{{1,2}}", re.I)),
    NamedPattern("numeric", re.compile(r"\b\d{1,2}[/-]\d{1,2}[/-]\d{2,4}\b")),
    NamedPattern("iso", re.compile(r"\b\d{4}[/-]\d{1,2}[/-]\d{1,2}\b")),
    NamedPattern("weekday_month_day", re.compile(rf"\b{_WEEKDAY},? {_MONTH_PREFIX} \d{{1,2}}\b", re.I)),
    NamedPattern("ordinal", re.compile(rf"\b{_ORDINAL}\b", re.I)),
    NamedPattern("month_ordinal", re.compile(rf"\b{_MONTH_PREFIX} {_ORDINAL}\b", re.I)),
    NamedPattern("ordinal_month_prefix", re.compile(rf"\b{_ORDINAL} {_MONTH_PREFIX}\b", re.I)),
)

TIME_PATTERNS: Tuple[NamedPattern, ...] = (
    # 9 - 11:30 PM, 9:00AM - 11:30AM, 9:00 to 10:00 PM
    NamedPattern(
        "range",
        re.compile(r"\b\d{1,2}(?::\d{2})?\s*(?:AM|PM)?\s*(?:-|to)\s*\d{1,2}:\d{2}\s*(?:AM|PM)?\b", re.I),
    ),
    # 9AM, 3:30 PM
    NamedPattern("single", re.compile(r"\b\d{1,2}(?::\d{0,2})?\s*(?:AM|PM)\b", re.I)),
)

LOCATION_KEYWORDS: Tuple[str, ...] = ("at ", "venue:", "location:", "@", "address:")

ADDRESS_PATTERNS: Tuple[NamedPattern, ...] = (
    NamedPattern(
        "virtual_venue",
        re.compile(r"\b(online|virtual|zoom|google meet|teams|discord|webinar|livestream)\b", re.I),
    ),
    # "<number> AM/PM" is a clock time, never a street number.
    NamedPattern(
        "street_address",
        re.compile(
            r"(?!\b\d+\s*(?:AM|PM)\b)\b\d+\s+(?:[A-Za-z0-9]+(?:\s+[A-Za-z0-9]+)*)\s+"
            r"(?:Street|St|Avenue|Ave|Road|Rd|Boulevard|Blvd|Lane|Ln|Drive|Dr)\b",
            re.I,
        ),
    ),
)


class PatternExtractorService:
    """Locate date, time and location substrings with ordered regex lists.

    All methods are pure and return at most one string (or None).
    """

    def __init__(self) -> None:
        self.logger = get_logger("extract.patterns")

    def extract_date(self, text: str) -> Optional[str]:
        for entry in DATE_PATTERNS:
            m = entry.regex.search(text)
            if m:
                self.logger.debug("date matched by %s: %r", entry.name, m.group(0))
                return m.group(0).strip()
        return None

    def extract_time(self, text: str) -> Optional[str]:
        for entry in TIME_PATTERNS:
            m = entry.regex.search(text)
            if m:
                self.logger.debug("time matched by %s: %r", entry.name, m.group(0))
                return m.group(0).strip()
        return None

    def extract_time_from_blocks(
        self, blocks: Sequence[TextBlock]
    ) -> Tuple[Optional[str], List[TextBlock]]:
        """Return the first block's time and every block that contains a time."""
        time: Optional[str] = None
        matched: List[TextBlock] = []
        for block in blocks:
            found = self.extract_time(block.text)
            if found is None:
                continue
            if time is None:
                time = found
            matched.append(block)
        return time, matched

    def extract_location(self, text: str, lines: Sequence[str]) -> Optional[str]:
        lower_text = text.lower()

        for keyword in LOCATION_KEYWORDS:
            if keyword not in lower_text:
                continue
            # The remainder is taken from the line, not the joined text.
            line = next((ln for ln in lines if keyword in ln.lower()), None)
            if line is None:
                continue
            start = line.lower().index(keyword) + len(keyword)
            location = line[start:].strip()
            if location:
                self.logger.debug("location via keyword %r: %r", keyword, location)
                return location

        for entry in ADDRESS_PATTERNS:
            m = entry.regex.search(text)
            if m:
                self.logger.debug("location matched by %s: %r", entry.name, m.group(0))
                return m.group(0).strip()
        return None

    def matches_date_or_time(self, text: str) -> bool:
        return any(p.regex.search(text) for p in DATE_PATTERNS) or any(
            p.regex.search(text) for p in TIME_PATTERNS
        )
