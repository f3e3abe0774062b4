"""
Widget state for the BMI calculator.

Framework-free: every user action is an event, and `reduce` maps
(state, event) to a new state. The Streamlit layer only stores the state and
dispatches events, so everything here is testable without a browser.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional, Union

from bmi_logic import INVALID_INPUT_MESSAGE, evaluate

HEIGHT = "height"
WEIGHT = "weight"


@dataclass(frozen=True)
class WidgetState:
    height: str = ""
    weight: str = ""
    bmi: Optional[str] = None
    message: Optional[str] = None
    dark_mode: bool = False


# ------------------------ EVENTS ------------------------

@dataclass(frozen=True)
class FieldChanged:
    field: str
    value: str


@dataclass(frozen=True)
class Submitted:
    pass


@dataclass(frozen=True)
class ResetRequested:
    pass


@dataclass(frozen=True)
class ThemeToggled:
    pass


Event = Union[FieldChanged, Submitted, ResetRequested, ThemeToggled]


def reduce(state: WidgetState, event: Event) -> WidgetState:
    if isinstance(event, FieldChanged):
        if event.field == HEIGHT:
            return replace(state, height=event.value)
        if event.field == WEIGHT:
            return replace(state, weight=event.value)
        raise ValueError(f"Unknown field: {event.field!r}")

    if isinstance(event, Submitted):
        reading = evaluate(state.height, state.weight)
        if reading is None:
            # previous result is left untouched
            return replace(state, message=INVALID_INPUT_MESSAGE)
        return replace(state, bmi=reading.bmi, message=reading.category)

    if isinstance(event, ResetRequested):
        return WidgetState(dark_mode=state.dark_mode)

    if isinstance(event, ThemeToggled):
        return replace(state, dark_mode=not state.dark_mode)

    raise TypeError(f"Unsupported event: {event!r}")


# ------------------------ VIEW ------------------------

class Phase(Enum):
    EMPTY = "empty"
    ERROR_SHOWN = "error_shown"
    RESULT_SHOWN = "result_shown"


@dataclass(frozen=True)
class EmptyView:
    phase = Phase.EMPTY


@dataclass(frozen=True)
class ErrorView:
    message: str
    bmi: Optional[str] = None
    phase = Phase.ERROR_SHOWN


@dataclass(frozen=True)
class ResultView:
    bmi: str
    category: str
    phase = Phase.RESULT_SHOWN


View = Union[EmptyView, ErrorView, ResultView]


def view(state: WidgetState) -> View:
    """
    Project the state onto the three things the widget can show.

    An error keeps whatever result was computed before it, so the result
    block can stay on screen with the error message in place of the category.
    """
    if state.message == INVALID_INPUT_MESSAGE:
        return ErrorView(message=state.message, bmi=state.bmi)
    if state.bmi is not None:
        return ResultView(bmi=state.bmi, category=state.message)
    return EmptyView()


def phase(state: WidgetState) -> Phase:
    return view(state).phase


def shows_result(state: WidgetState) -> bool:
    """True while the result block (BMI + message + reset) is on screen."""
    return state.bmi is not None
