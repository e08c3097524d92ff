from __future__ import annotations

import re
from dataclasses import astuple, dataclass, fields
from typing import Dict, List, Optional, Sequence, Tuple

from event_ocr.domain.schemas.geometry import TextBlock
from event_ocr.lib.logger import get_logger
from .pattern_extractor_service import PatternExtractorService


DEFAULT_TOP_N = 3
MIN_TITLE_LENGTH = 3  # candidates need strictly more characters than this
TOPMOST_TOLERANCE = 50
WIDE_ASPECT_RATIO = 2.0
DIGIT_HEAVY_RATIO = 0.5

W_ALL_CAPS = 3.0
W_CENTEREDNESS = 2.0
W_VERTICAL_POSITION = 1.5
W_LENGTH = 1.0
W_HEIGHT_RATIO = 1.0
W_WORD_COUNT = 1.0
W_SENTENCE_LIKE = -1.0
W_DATE_OR_TIME = -2.0
W_TOPMOST = 0.5
W_WIDE = 0.5
W_TITLE_CASE = 0.5
W_DIGIT_HEAVY = -1.0

TITLE_WEIGHTS: Dict[str, float] = {
    "all_caps": W_ALL_CAPS,
    "centeredness": W_CENTEREDNESS,
    "vertical_position": W_VERTICAL_POSITION,
    "length_band": W_LENGTH,
    "height_ratio": W_HEIGHT_RATIO,
    "word_count_band": W_WORD_COUNT,
    "sentence_like": W_SENTENCE_LIKE,
    "date_or_time": W_DATE_OR_TIME,
    "topmost": W_TOPMOST,
    "wide": W_WIDE,
    "title_case": W_TITLE_CASE,
    "digit_heavy": W_DIGIT_HEAVY,
}


@dataclass(frozen=True)
class TitleFeatures:
    """Per-candidate feature vector; booleans count as 0/1, ratios are in [0, 1]."""

    all_caps: bool = False
    centeredness: float = 0.0
    vertical_position: float = 0.0  # 1 at the top edge, 0 at the bottom
    length_band: float = 0.0
    height_ratio: float = 0.0
    word_count_band: float = 0.0
    sentence_like: bool = False
    date_or_time: bool = False
    topmost: bool = False
    wide: bool = False
    title_case: bool = False
    digit_heavy: bool = False


def score_features(features: TitleFeatures, weights: Dict[str, float] = TITLE_WEIGHTS) -> float:
    score = 0.0
    for f, value in zip(fields(features), astuple(features)):
        score += weights.get(f.name, 0.0) * float(value)
    return score


def length_band(length: int) -> float:
    if length < 5:
        return 0.0
    if 10 <= length <= 40:
        return 1.0
    if 5 <= length <= 60:
        return 0.5
    return 0.0


def word_count_band(count: int) -> float:
    if count == 1:
        return 0.2
    if 2 <= count <= 8:
        return 0.5
    if 9 <= count <= 12:
        return 0.3
    return 0.0


def _clip(value: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, value))


def _is_title_case_word(word: str) -> bool:
    return bool(word) and word[0].isupper() and any(ch.islower() for ch in word[1:])


class TitleScorerService:
    """Pick the block most likely to be the event title.

    The tallest blocks (height stands in for font size) are scored on layout
    and text features; the best total wins, and on equal totals the earlier
    candidate in height order is kept.
    """

    def __init__(self, patterns: Optional[PatternExtractorService] = None, top_n: int = DEFAULT_TOP_N) -> None:
        self.logger = get_logger("extract.title")
        self.patterns = patterns or PatternExtractorService()
        self.top_n = top_n

    def select(self, blocks: Sequence[TextBlock]) -> Optional[TextBlock]:
        scored = self.score_candidates(blocks)
        if not scored:
            return None
        best_block, _, best_score = scored[0]
        for block, _, score in scored[1:]:
            if score > best_score:
                best_block, best_score = block, score
        self.logger.debug("title: %r (score=%.2f)", best_block.text, best_score)
        return best_block

    def score_candidates(
        self, blocks: Sequence[TextBlock]
    ) -> List[Tuple[TextBlock, TitleFeatures, float]]:
        if not blocks:
            return []

        boxes = [b.bounding_box for b in blocks if b.bounding_box is not None]
        image_width = max((bb.right for bb in boxes), default=0)
        image_height = max((bb.bottom for bb in boxes), default=0)
        topmost = min((bb.top for bb in boxes), default=None)

        ranked = sorted(
            blocks,
            key=lambda b: b.bounding_box.height if b.bounding_box else 0,
            reverse=True,
        )
        candidates = [b for b in ranked[: self.top_n] if len(b.text) > MIN_TITLE_LENGTH]
        if not candidates:
            return []

        first_box = ranked[0].bounding_box
        max_height = first_box.height if first_box else 1

        scored = []
        for block in candidates:
            feats = self.features(block, image_width, image_height, max_height, topmost)
            score = score_features(feats)
            self.logger.debug("title candidate %r: score=%.2f %s", block.text, score, feats)
            scored.append((block, feats, score))
        return scored

    def features(
        self,
        block: TextBlock,
        image_width: int,
        image_height: int,
        max_height: int,
        topmost: Optional[int],
    ) -> TitleFeatures:
        text = block.text
        bbox = block.bounding_box

        centeredness = 0.0
        vertical_position = 0.0
        height_ratio = 0.0
        is_topmost = False
        wide = False
        if bbox is not None:
            if image_width > 0:
                center = image_width / 2
                centeredness = 1.0 - _clip(abs(bbox.center_x - center) / center)
            if image_height > 0:
                vertical_position = 1.0 - _clip(bbox.top / image_height)
            if max_height > 0:
                height_ratio = _clip(bbox.height / max_height)
            if topmost is not None:
                is_topmost = bbox.top <= topmost + TOPMOST_TOLERANCE
            if bbox.height > 0:
                wide = bbox.width / bbox.height > WIDE_ASPECT_RATIO
            else:
                # zero-height line: infinitely wide unless it is also zero-width
                wide = bbox.width > 0

        words = re.split(r"\s+", text)
        title_case_words = sum(1 for w in words if _is_title_case_word(w))
        digits = sum(1 for ch in text if ch.isdigit())
        letters = sum(1 for ch in text if ch.isalpha())

        return TitleFeatures(
            all_caps=all(ch.isupper() or not ch.isalpha() for ch in text),
            centeredness=centeredness,
            vertical_position=vertical_position,
            length_band=length_band(len(text)),
            height_ratio=height_ratio,
            word_count_band=word_count_band(len(words)),
            sentence_like=text.endswith(".") or text.count(".") > 1,
            date_or_time=self.patterns.matches_date_or_time(text),
            topmost=is_topmost,
            wide=wide,
            # integer half, so 1 of 3 words is enough
            title_case=len(words) > 1 and title_case_words >= len(words) // 2,
            digit_heavy=letters > 0 and digits / letters > DIGIT_HEAVY_RATIO,
        )
