import streamlit as st
from streamlit.logger import get_logger

from presentation import (
    CARD_KEY,
    MESSAGE_KEY,
    MESSAGE_RESET_KEY,
    RESET_KEY,
    RESULT_EXIT_KEY,
    RESULT_KEY,
    SUBMIT_KEY,
    THEME_KEY,
    Transition,
    band_table,
    build_css,
    build_gauge,
    is_category,
    result_transition,
    theme_icon,
)
from widget_state import (
    HEIGHT,
    WEIGHT,
    EmptyView,
    ErrorView,
    FieldChanged,
    ResetRequested,
    ResultView,
    Submitted,
    ThemeToggled,
    WidgetState,
    phase,
    reduce,
    view,
)

LOGGER = get_logger(__name__)

# ------------------------ UI CONFIGURATION ------------------------
PAGE_TITLE = "BMI Calculator"
PAGE_ICON = "⚖️"

STATE_KEY = "bmi_state"
DEPARTING_KEY = "bmi_departing"
HEIGHT_KEY = "height_input"
WEIGHT_KEY = "weight_input"

FIELD_KEYS = {HEIGHT: HEIGHT_KEY, WEIGHT: WEIGHT_KEY}

# ------------------------ SESSION STATE ------------------------

def init_state():
    ss = st.session_state
    if STATE_KEY not in ss:
        ss[STATE_KEY] = WidgetState()
    if HEIGHT_KEY not in ss:
        ss[HEIGHT_KEY] = ""
    if WEIGHT_KEY not in ss:
        ss[WEIGHT_KEY] = ""


def dispatch(event):
    ss = st.session_state
    before = ss[STATE_KEY]
    after = reduce(before, event)
    ss[STATE_KEY] = after

    # the block that just left is drawn once more so it can fade out
    if result_transition(before, after) is Transition.EXIT:
        ss[DEPARTING_KEY] = view(before)

    LOGGER.debug("BMI widget %s -> %s", type(event).__name__, phase(after).value)
    return after


# ------------------------ CALLBACKS ------------------------

def on_field_change(field):
    dispatch(FieldChanged(field, st.session_state[FIELD_KEYS[field]]))


def on_submit():
    # make sure a value typed right before the click is part of the submission
    for field, key in FIELD_KEYS.items():
        if st.session_state[key] != getattr(st.session_state[STATE_KEY], field):
            dispatch(FieldChanged(field, st.session_state[key]))
    dispatch(Submitted())


def on_reset():
    dispatch(ResetRequested())
    st.session_state[HEIGHT_KEY] = ""
    st.session_state[WEIGHT_KEY] = ""


def on_theme_toggle():
    dispatch(ThemeToggled())


# ------------------------ RENDERING ------------------------

def render_header(state):
    title_col, toggle_col = st.columns([5, 1], vertical_alignment="center")
    with title_col:
        st.title(PAGE_TITLE, anchor=False)
    with toggle_col:
        st.button(
            theme_icon(state.dark_mode),
            key=THEME_KEY,
            on_click=on_theme_toggle,
            help="Toggle dark mode",
        )


def render_form():
    st.text_input(
        "Height (meters)",
        key=HEIGHT_KEY,
        placeholder="e.g., 1.75",
        help="Height in meters",
        on_change=on_field_change,
        args=(HEIGHT,),
    )
    st.text_input(
        "Weight (kg)",
        key=WEIGHT_KEY,
        placeholder="e.g., 70",
        on_change=on_field_change,
        args=(WEIGHT,),
    )
    st.button("Calculate BMI", key=SUBMIT_KEY, on_click=on_submit)


def render_result_block(bmi, message, dark_mode, key=RESULT_KEY, leaving=False):
    with st.container(key=key):
        st.markdown(f"**Your BMI: {bmi}**")
        st.markdown(message)

        if not leaving and is_category(message):
            fig = build_gauge(bmi, dark_mode)
            if fig is not None:
                st.plotly_chart(fig, key="bmi_gauge")
            with st.expander("BMI bands"):
                st.dataframe(band_table(message), hide_index=True)

        st.button(
            "Reset",
            key=f"{key}_reset" if leaving else RESET_KEY,
            on_click=on_reset,
            disabled=leaving,
        )


def render_result(state):
    departing = st.session_state.pop(DEPARTING_KEY, None)
    current = view(state)

    if isinstance(current, ResultView):
        render_result_block(current.bmi, current.category, state.dark_mode)
    elif isinstance(current, ErrorView):
        if current.bmi is not None:
            render_result_block(current.bmi, current.message, state.dark_mode)
        else:
            with st.container(key=MESSAGE_KEY):
                st.warning(current.message)
                st.button("Reset", key=MESSAGE_RESET_KEY, on_click=on_reset)
    elif isinstance(current, EmptyView) and departing is not None:
        bmi = departing.bmi
        message = departing.category if isinstance(departing, ResultView) else departing.message
        render_result_block(bmi, message, state.dark_mode, key=RESULT_EXIT_KEY, leaving=True)


def render_widget():
    """Draw the BMI widget into the current Streamlit container."""
    init_state()
    state = st.session_state[STATE_KEY]

    st.markdown(build_css(state.dark_mode), unsafe_allow_html=True)
    with st.container(key=CARD_KEY):
        render_header(state)
        render_form()
        render_result(state)


# ------------------------ MAIN LOGIC ------------------------

def main():
    st.set_page_config(page_title=PAGE_TITLE, page_icon=PAGE_ICON, layout="centered")
    try:
        render_widget()
    except Exception as e:
        LOGGER.exception("BMI widget failed to render")
        st.error(f"❌ Error rendering the BMI calculator: {e}")


# ------------------------ EXECUTE ------------------------
if __name__ == "__main__":
    main()
