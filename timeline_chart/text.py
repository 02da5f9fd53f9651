"""
Text bundles — the two fixed caption sets ("th" and "en").

Selection is external input; anything else falls back to the default bundle.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "th"


@dataclass(frozen=True)
class TextBundle:
    """Every string the chart draws that does not come from the data."""
    language: str
    axis_label: str
    premium_end: str
    at_age: str
    coverage: str
    subtitle: str


BUNDLES: dict[str, TextBundle] = {
    "th": TextBundle(
        language="th",
        axis_label="สิ้นปีกรมธรรม์ที่",
        premium_end="ชำระเบี้ยครบ",
        at_age="ครบอายุ",
        coverage="ความคุ้มครองชีวิต : จำนวนที่มากกว่าระหว่าง 100% ของทุนประกันภัย",
        subtitle="หรือ มูลค่าเวนคืนเงินสด หรือ เบี้ยประกันภัยสะสม",
    ),
    "en": TextBundle(
        language="en",
        axis_label="End of Year",
        premium_end="Premium Payment Finished",
        at_age="At age",
        coverage="Death coverage*",
        subtitle="or Cash Value or Accumulated Premium",
    ),
}


def get_text_bundle(language: str | None) -> TextBundle:
    """Return the bundle for `language`, or the default bundle."""
    tag = (language or "").strip().lower()
    bundle = BUNDLES.get(tag)
    if bundle is None:
        logger.warning("Unsupported language %r, using %r",
                       language, DEFAULT_LANGUAGE)
        bundle = BUNDLES[DEFAULT_LANGUAGE]
    return bundle
