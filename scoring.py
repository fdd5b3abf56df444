"""Score tiering shared by every section that displays a 0-100 score."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional

from labels import label

GOOD_THRESHOLD = 80
MEDIUM_THRESHOLD = 60

# circumference of the r=52 ring drawn by the overall score section
RING_CIRCUMFERENCE = 326.73


class ScoreTier(str, Enum):
    GOOD = "good"
    MEDIUM = "medium"
    POOR = "poor"


@dataclass(frozen=True)
class TierStyle:
    """Palette and indicator used wherever a score is drawn."""

    tier: ScoreTier
    color: str
    background: str
    border: str
    icon: str
    label: str
    ring_offset: float


TIER_PALETTE: Dict[ScoreTier, Dict[str, str]] = {
    ScoreTier.GOOD: {"color": "#10b981", "background": "#ecfdf5", "border": "#a7f3d0", "icon": "✅"},
    ScoreTier.MEDIUM: {"color": "#f59e0b", "background": "#fffbeb", "border": "#fde68a", "icon": "⚠️"},
    ScoreTier.POOR: {"color": "#ef4444", "background": "#fef2f2", "border": "#fecaca", "icon": "❌"},
}


def clamp_score(score: Optional[float]) -> float:
    if score is None:
        return 0.0
    try:
        value = float(score)
    except OverflowError:
        # ints beyond float range
        return 100.0 if score > 0 else 0.0
    except (TypeError, ValueError):
        return 0.0
    if value != value:  # NaN
        return 0.0
    return max(0.0, min(100.0, value))


def score_tier(score: Optional[float]) -> ScoreTier:
    value = clamp_score(score)
    if value >= GOOD_THRESHOLD:
        return ScoreTier.GOOD
    if value >= MEDIUM_THRESHOLD:
        return ScoreTier.MEDIUM
    return ScoreTier.POOR


def tier_style(score: Optional[float], locale: Optional[str] = None) -> TierStyle:
    value = clamp_score(score)
    tier = score_tier(value)
    palette = TIER_PALETTE[tier]
    return TierStyle(
        tier=tier,
        color=palette["color"],
        background=palette["background"],
        border=palette["border"],
        icon=palette["icon"],
        label=label(f"tier_{tier.value}", locale),
        ring_offset=round(RING_CIRCUMFERENCE * (1 - value / 100.0), 2),
    )


def format_score(score: Optional[float]) -> str:
    value = clamp_score(score)
    return str(int(round(value)))
