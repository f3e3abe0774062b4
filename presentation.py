"""
Look and motion of the BMI widget.

Builds the theme CSS (including the enter/exit keyframes), decides which
transition a state change should play, and prepares the gauge figure and the
band reference table. Nothing here calls Streamlit.
"""
from enum import Enum
from typing import Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go

from bmi_logic import CATEGORIES, band_bounds, coerce_number
from widget_state import WidgetState, shows_result

# ------------------------ WIDGET KEYS ------------------------
# Keyed containers/widgets render with a `st-key-<key>` class the CSS targets.
CARD_KEY = "bmi_card"
RESULT_KEY = "bmi_result"
RESULT_EXIT_KEY = "bmi_result_exit"
MESSAGE_KEY = "bmi_message"
THEME_KEY = "theme_toggle"
SUBMIT_KEY = "calculate"
RESET_KEY = "reset"
MESSAGE_RESET_KEY = "bmi_message_reset"

TRANSITION_SECONDS = 0.5
THEME_FADE_MS = 300

# ------------------------ COLOR PALETTE ------------------------
LIGHT_PALETTE = {
    "card_bg": "#ffffff",
    "text": "#111827",
    "muted": "#6b7280",
    "input_bg": "#f3f4f6",
    "border": "#d1d5db",
    "toggle_bg": "#d1d5db",
    "primary": "#3b82f6",
    "primary_hover": "#2563eb",
    "reset": "#6b7280",
    "reset_hover": "#4b5563",
}

DARK_PALETTE = {
    "card_bg": "#1f2937",
    "text": "#ffffff",
    "muted": "#9ca3af",
    "input_bg": "#374151",
    "border": "#4b5563",
    "toggle_bg": "#374151",
    "primary": "#3b82f6",
    "primary_hover": "#2563eb",
    "reset": "#6b7280",
    "reset_hover": "#4b5563",
}

BAND_COLORS = {
    "Underweight": "#60a5fa",
    "Normal weight": "#22c55e",
    "Overweight": "#eab308",
    "Obese": "#ef4444",
}

GAUGE_MAX = 40.0


def palette_for(dark_mode: bool) -> dict:
    return DARK_PALETTE if dark_mode else LIGHT_PALETTE


def theme_icon(dark_mode: bool) -> str:
    return "🌙" if dark_mode else "☀️"


# ------------------------ TRANSITIONS ------------------------

class Transition(Enum):
    ENTER = "enter"
    EXIT = "exit"


def result_transition(before: WidgetState, after: WidgetState) -> Optional[Transition]:
    """Transition the result block plays between two states, if its presence changed."""
    was_shown, is_shown = shows_result(before), shows_result(after)
    if is_shown and not was_shown:
        return Transition.ENTER
    if was_shown and not is_shown:
        return Transition.EXIT
    return None


def build_css(dark_mode: bool) -> str:
    p = palette_for(dark_mode)
    d = f"{TRANSITION_SECONDS}s"
    return f"""
<style>
@keyframes bmi-card-in {{
    from {{ opacity: 0; transform: scale(0.9); }}
    to {{ opacity: 1; transform: scale(1); }}
}}
@keyframes bmi-result-in {{
    from {{ opacity: 0; transform: translateY(-10px); }}
    to {{ opacity: 1; transform: translateY(0); }}
}}
@keyframes bmi-result-out {{
    from {{ opacity: 1; transform: translateY(0); max-height: 40rem; }}
    to {{ opacity: 0; transform: translateY(-10px); max-height: 0; margin: 0; padding: 0; }}
}}
.st-key-{CARD_KEY} {{
    max-width: 24rem;
    margin: 0 auto;
    padding: 1.5rem;
    border-radius: 0.5rem;
    box-shadow: 0 10px 15px -3px rgba(0, 0, 0, 0.1), 0 4px 6px -4px rgba(0, 0, 0, 0.1);
    text-align: center;
    background: {p['card_bg']};
    color: {p['text']};
    transition: all {THEME_FADE_MS}ms;
    animation: bmi-card-in {d} ease-out;
}}
.st-key-{CARD_KEY} h1, .st-key-{CARD_KEY} p, .st-key-{CARD_KEY} label {{
    color: {p['text']};
}}
.st-key-{CARD_KEY} input {{
    background: {p['input_bg']};
    color: {p['text']};
    border-color: {p['border']};
}}
.st-key-{CARD_KEY} button {{
    transition: transform 150ms, background {THEME_FADE_MS}ms;
}}
.st-key-{THEME_KEY} button {{
    border-radius: 9999px;
    background: {p['toggle_bg']};
}}
.st-key-{THEME_KEY} button:hover {{ transform: scale(1.1); }}
.st-key-{THEME_KEY} button:active {{ transform: scale(0.9); }}
.st-key-{SUBMIT_KEY} button {{
    width: 100%;
    background: {p['primary']};
    color: #ffffff;
}}
.st-key-{SUBMIT_KEY} button:hover {{ background: {p['primary_hover']}; transform: scale(1.05); }}
.st-key-{SUBMIT_KEY} button:active {{ transform: scale(0.95); }}
.st-key-{RESET_KEY} button, .st-key-{MESSAGE_RESET_KEY} button {{
    background: {p['reset']};
    color: #ffffff;
}}
.st-key-{RESET_KEY} button:hover, .st-key-{MESSAGE_RESET_KEY} button:hover {{ background: {p['reset_hover']}; transform: scale(1.05); }}
.st-key-{RESET_KEY} button:active, .st-key-{MESSAGE_RESET_KEY} button:active {{ transform: scale(0.95); }}
.st-key-{RESULT_KEY}, .st-key-{MESSAGE_KEY} {{
    animation: bmi-result-in {d} ease-out both;
}}
.st-key-{RESULT_EXIT_KEY} {{
    overflow: hidden;
    animation: bmi-result-out {d} ease-in forwards;
    pointer-events: none;
}}
</style>
"""


# ------------------------ GAUGE & BAND TABLE ------------------------

def build_gauge(bmi_text: str, dark_mode: bool = False) -> Optional[go.Figure]:
    """
    Semicircular gauge of the BMI over the four bands.

    Returns None for NaN / infinite results, which have no place on the dial.
    """
    value = float(coerce_number(bmi_text))
    if not np.isfinite(value):
        return None

    p = palette_for(dark_mode)
    axis_max = max(GAUGE_MAX, value)
    steps = [
        {"range": [max(lower, 0.0), min(upper, axis_max)], "color": BAND_COLORS[label]}
        for label, lower, upper in band_bounds()
    ]

    fig = go.Figure(
        go.Indicator(
            mode="gauge+number",
            value=value,
            number={"font": {"size": 40, "color": p["text"]}, "valueformat": ".2f"},
            gauge={
                "axis": {"range": [0, axis_max], "tickcolor": p["muted"]},
                "bar": {"color": "rgba(0,0,0,0)"},
                "bgcolor": p["input_bg"],
                "borderwidth": 0,
                "steps": steps,
                "threshold": {
                    "line": {"color": p["text"], "width": 4},
                    "thickness": 0.8,
                    "value": value,
                },
            },
        )
    )
    fig.update_layout(
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font={"color": p["text"]},
        height=220,
        margin=dict(l=20, r=20, t=20, b=10),
        transition={"duration": int(TRANSITION_SECONDS * 1000), "easing": "cubic-in-out"},
    )
    return fig


def _describe_range(lower: float, upper: float) -> str:
    if np.isinf(lower):
        return f"below {upper}"
    if np.isinf(upper):
        return f"{lower} and above"
    return f"{lower} to {upper}"


def band_table(current: Optional[str] = None) -> pd.DataFrame:
    """Reference table of the bands, with the current category marked."""
    rows = [
        {
            "Category": label,
            "BMI range": _describe_range(lower, upper),
            "Current": "◀" if label == current else "",
        }
        for label, lower, upper in band_bounds()
    ]
    return pd.DataFrame(rows, columns=["Category", "BMI range", "Current"])


def is_category(message: Optional[str]) -> bool:
    return message in CATEGORIES
