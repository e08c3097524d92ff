from typing import Dict, Optional

from pydantic import BaseModel, Field

from .event_data import RawEventData, StructuredDateTime


class MetaInfo(BaseModel):
    request_id: Optional[str] = None
    block_count: int = 0
    timings_ms: Dict[str, int] = Field(default_factory=dict)


class EventResultData(BaseModel):
    """Both output contracts of one extraction pass.

    `raw` pre-fills the editable event form; `structured` feeds calendar
    insertion and is null when no date could be parsed.
    """

    meta: MetaInfo = Field(default_factory=MetaInfo)
    raw: RawEventData = Field(default_factory=RawEventData)
    structured: Optional[StructuredDateTime] = None
