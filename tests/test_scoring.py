import pytest

from scoring import RING_CIRCUMFERENCE, ScoreTier, clamp_score, format_score, score_tier, tier_style


@pytest.mark.parametrize(
    "score, tier",
    [
        (0, ScoreTier.POOR),
        (59, ScoreTier.POOR),
        (59.9, ScoreTier.POOR),
        (60, ScoreTier.MEDIUM),
        (79, ScoreTier.MEDIUM),
        (80, ScoreTier.GOOD),
        (100, ScoreTier.GOOD),
    ],
)
def test_tier_boundaries(score, tier):
    assert score_tier(score) is tier


def test_out_of_range_and_garbage_scores_are_clamped():
    assert clamp_score(None) == 0.0
    assert clamp_score("n/a") == 0.0
    assert clamp_score(float("nan")) == 0.0
    assert clamp_score(-4) == 0.0
    assert clamp_score(140) == 100.0
    assert score_tier(140) is ScoreTier.GOOD
    assert score_tier(None) is ScoreTier.POOR


def test_tier_style_palette():
    good = tier_style(92, "en")
    assert good.color == "#10b981"
    assert good.label == "Excellent"
    assert tier_style(65).color == "#f59e0b"
    assert tier_style(12).color == "#ef4444"


def test_ring_offset_tracks_score():
    assert tier_style(100).ring_offset == 0.0
    assert tier_style(0).ring_offset == pytest.approx(RING_CIRCUMFERENCE)
    assert tier_style(50).ring_offset == pytest.approx(RING_CIRCUMFERENCE / 2, abs=0.01)


def test_format_score_rounds():
    assert format_score(72.6) == "73"
    assert format_score(None) == "0"


def test_scores_beyond_float_range_are_clamped():
    assert clamp_score(10**400) == 100.0
    assert clamp_score(-(10**400)) == 0.0
    assert score_tier(10**400) is ScoreTier.GOOD
    assert format_score(10**400) == "100"
