"""Tests for theme CSS, transitions, gauge and band table."""
import pytest

from presentation import (
    BAND_COLORS,
    CARD_KEY,
    DARK_PALETTE,
    LIGHT_PALETTE,
    MESSAGE_RESET_KEY,
    RESULT_EXIT_KEY,
    RESULT_KEY,
    Transition,
    band_table,
    build_css,
    build_gauge,
    is_category,
    palette_for,
    result_transition,
    theme_icon,
)
from widget_state import FieldChanged, ResetRequested, Submitted, ThemeToggled, WidgetState, reduce

RESULT = WidgetState(height="1.75", weight="70", bmi="22.86", message="Normal weight")


class TestTheme:
    def test_palette_and_icon(self) -> None:
        assert palette_for(False) is LIGHT_PALETTE
        assert palette_for(True) is DARK_PALETTE
        assert theme_icon(False) == "☀️"
        assert theme_icon(True) == "🌙"

    def test_css_uses_palette(self) -> None:
        assert LIGHT_PALETTE["card_bg"] in build_css(False)
        assert DARK_PALETTE["card_bg"] in build_css(True)
        assert DARK_PALETTE["card_bg"] not in build_css(False)

    def test_css_targets_keyed_containers(self) -> None:
        css = build_css(False)
        for key in (CARD_KEY, RESULT_KEY, RESULT_EXIT_KEY):
            assert f".st-key-{key}" in css
        assert css.strip().startswith("<style>")

    def test_css_transitions_are_half_a_second(self) -> None:
        css = build_css(True)
        assert "bmi-card-in 0.5s" in css
        assert "bmi-result-in 0.5s" in css
        assert "bmi-result-out 0.5s" in css
        assert "scale(0.9)" in css
        assert "translateY(-10px)" in css

    def test_departing_block_collapses(self) -> None:
        css = build_css(False)
        exit_frames = css.split("@keyframes bmi-result-out")[1].split("\n}")[0]
        assert "opacity: 0" in exit_frames
        assert "max-height: 0" in exit_frames
        assert "margin: 0" in exit_frames
        assert "overflow: hidden" in css.split(f".st-key-{RESULT_EXIT_KEY}")[1]

    def test_message_reset_shares_reset_styling(self) -> None:
        assert f".st-key-{MESSAGE_RESET_KEY} button" in build_css(True)


class TestResultTransition:
    """Enter/exit fire only when the result block's presence changes."""

    def test_enter_on_first_result(self) -> None:
        before = WidgetState(height="1.75", weight="70")
        assert result_transition(before, reduce(before, Submitted())) is Transition.ENTER

    def test_exit_on_reset(self) -> None:
        assert result_transition(RESULT, reduce(RESULT, ResetRequested())) is Transition.EXIT

    def test_no_transition_on_recalculate(self) -> None:
        after = reduce(reduce(RESULT, FieldChanged("weight", "80")), Submitted())
        assert result_transition(RESULT, after) is None

    def test_no_transition_on_error_keeping_result(self) -> None:
        after = reduce(reduce(RESULT, FieldChanged("height", "")), Submitted())
        assert result_transition(RESULT, after) is None

    def test_no_transition_on_theme_toggle(self) -> None:
        assert result_transition(RESULT, reduce(RESULT, ThemeToggled())) is None
        assert result_transition(WidgetState(), reduce(WidgetState(), ThemeToggled())) is None

    def test_no_transition_on_error_from_empty(self) -> None:
        assert result_transition(WidgetState(), reduce(WidgetState(), Submitted())) is None


class TestGauge:
    def test_gauge_for_finite_bmi(self) -> None:
        fig = build_gauge("22.86")
        indicator = fig.data[0]
        assert indicator.value == pytest.approx(22.86)
        assert len(indicator.gauge.steps) == 4
        assert fig.layout.transition.duration == 500

    def test_band_colors_in_order(self) -> None:
        steps = build_gauge("30.86", dark_mode=True).data[0].gauge.steps
        assert [s.color for s in steps] == list(BAND_COLORS.values())
        assert steps[0].range == (0, 18.5)
        assert steps[-1].range == (29.9, 40.0)

    def test_axis_grows_with_large_bmi(self) -> None:
        fig = build_gauge("55.00")
        assert fig.data[0].gauge.axis.range == (0, 55.0)

    @pytest.mark.parametrize("bmi", ["NaN", "Infinity", "-Infinity"])
    def test_no_gauge_for_non_finite(self, bmi) -> None:
        assert build_gauge(bmi) is None


class TestBandTable:
    def test_rows(self) -> None:
        df = band_table()
        assert list(df.columns) == ["Category", "BMI range", "Current"]
        assert df["Category"].tolist() == ["Underweight", "Normal weight", "Overweight", "Obese"]
        assert df["BMI range"].tolist() == [
            "below 18.5",
            "18.5 to 24.9",
            "24.9 to 29.9",
            "29.9 and above",
        ]
        assert (df["Current"] == "").all()

    def test_marks_current_category(self) -> None:
        df = band_table("Overweight")
        assert df.loc[df["Current"] == "◀", "Category"].tolist() == ["Overweight"]


def test_is_category() -> None:
    assert is_category("Obese")
    assert not is_category("Please enter valid height and weight")
    assert not is_category(None)
