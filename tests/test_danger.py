"""Tests for commitwatch.danger module."""

import pytest

from commitwatch.danger import (
    Classification,
    Limits,
    Severity,
    classify,
    danger_ratio,
    format_indicator,
    format_status_code,
    format_tooltip,
    make_progress_bar,
)
from commitwatch.git.diff import DiffStats

LIMITS = Limits(max_files=10, max_lines=1000, warn_ratio=0.7)


class TestClassify:
    """Tests for classify."""

    def test_warn_example(self):
        """8 files, 650 lines against 10/1000 -> ratio 0.8 -> warn."""
        result = classify(DiffStats(files=8, lines=650), LIMITS)
        assert result.ratio == pytest.approx(0.8)
        assert result.severity == Severity.WARN

    def test_ok_when_small(self):
        result = classify(DiffStats(files=1, lines=10), LIMITS)
        assert result.severity == Severity.OK

    def test_lines_dimension_can_dominate(self):
        result = classify(DiffStats(files=1, lines=1500), LIMITS)
        assert result.ratio == pytest.approx(1.5)
        assert result.severity == Severity.CRITICAL

    def test_exact_warn_ratio_is_warn(self):
        result = classify(DiffStats(files=7, lines=0), LIMITS)
        assert result.ratio == 0.7
        assert result.severity == Severity.WARN

    def test_exact_one_is_critical(self):
        result = classify(DiffStats(files=10, lines=0), LIMITS)
        assert result.ratio == 1.0
        assert result.severity == Severity.CRITICAL

    def test_zero_limit_disables_dimension(self):
        limits = Limits(max_files=0, max_lines=100, warn_ratio=0.7)
        result = classify(DiffStats(files=500, lines=10), limits)
        assert result.ratio == pytest.approx(0.1)
        assert result.severity == Severity.OK

    def test_both_limits_zero_is_not_configured(self):
        limits = Limits(max_files=0, max_lines=0, warn_ratio=0.7)
        result = classify(DiffStats(files=500, lines=5000), limits)
        assert result == Classification(Severity.NOT_CONFIGURED, 0.0)

    def test_empty_change_set(self):
        result = classify(DiffStats(), LIMITS)
        assert result.ratio == 0.0
        assert result.severity == Severity.OK

    def test_warn_ratio_zero_warns_immediately(self):
        limits = Limits(max_files=10, max_lines=1000, warn_ratio=0.0)
        assert classify(DiffStats(), limits).severity == Severity.WARN


class TestMonotonic:
    """Growing the change set never lowers ratio or severity."""

    ORDER = [Severity.OK, Severity.WARN, Severity.CRITICAL]

    def test_files_and_lines(self):
        previous_ratio = -1.0
        previous_rank = -1
        for files in range(0, 15):
            for lines in (0, 300, 699, 700, 999, 1000, 2000):
                result = classify(DiffStats(files=files, lines=lines), LIMITS)
                rank = self.ORDER.index(result.severity)
                if lines == 0:
                    # Compare along the files axis
                    assert result.ratio >= previous_ratio
                    assert rank >= previous_rank
                    previous_ratio, previous_rank = result.ratio, rank
                smaller = classify(DiffStats(files=files, lines=max(0, lines - 1)), LIMITS)
                assert result.ratio >= smaller.ratio
                assert rank >= self.ORDER.index(smaller.severity)


class TestDangerRatio:
    """Tests for danger_ratio."""

    def test_takes_max(self):
        assert danger_ratio(DiffStats(files=2, lines=900), LIMITS) == pytest.approx(0.9)


class TestProgressBar:
    """Tests for make_progress_bar."""

    def test_empty(self):
        assert make_progress_bar(0) == "[░░░░░░░░░░]"

    def test_partial(self):
        assert make_progress_bar(0.8) == "[████████░░]"

    def test_rounds_half_up(self):
        assert make_progress_bar(0.25) == "[███░░░░░░░]"

    def test_clamps_above_one(self):
        assert make_progress_bar(3.0) == "[██████████]"

    def test_clamps_below_zero(self):
        assert make_progress_bar(-0.5) == "[░░░░░░░░░░]"

    def test_custom_length(self):
        assert make_progress_bar(0.5, length=4) == "[██░░]"

    def test_nan_is_empty(self):
        assert make_progress_bar(float("nan")) == "[░░░░░░░░░░]"


class TestFormatIndicator:
    """Tests for format_indicator and friends."""

    STATS = DiffStats(files=8, lines=650)

    def classification(self):
        return classify(self.STATS, LIMITS)

    def test_progress_mode(self):
        text = format_indicator(self.STATS, LIMITS, self.classification(), "progress")
        assert text == "🟡 [████████░░] 80%"

    def test_both_mode(self):
        text = format_indicator(self.STATS, LIMITS, self.classification(), "both")
        assert text == "🟡 [████████░░] 80% · 8/10 f | 650/1000 l"

    def test_text_mode(self):
        text = format_indicator(self.STATS, LIMITS, self.classification(), "text")
        assert text == "🟡 8/10 f | 650/1000 l"

    def test_percent_capped_at_100(self):
        stats = DiffStats(files=30, lines=0)
        text = format_indicator(stats, LIMITS, classify(stats, LIMITS), "progress")
        assert text == "🔴 [██████████] 100%"

    def test_not_configured(self):
        limits = Limits(max_files=0, max_lines=0, warn_ratio=0.7)
        text = format_indicator(self.STATS, limits, classify(self.STATS, limits))
        assert text == "🔘 Bloat: n/a"

    def test_tooltip(self):
        assert format_tooltip(self.STATS, LIMITS) == (
            "Files changed: 8 / 10\nLines changed: 650 / 1000"
        )

    def test_status_code_spaces(self):
        assert format_status_code(" M") == "·M"
        assert format_status_code("??") == "??"
        assert format_status_code("") == "·"
