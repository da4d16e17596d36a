"""
Health Plan Quoter - Main Application
Streamlit wizard that quotes health plans for individuals and companies by age bracket
"""

import sys
import logging
from datetime import datetime
from pathlib import Path

from quote_engine.config import get_config

# Configure logging BEFORE importing streamlit
logging.basicConfig(
    level=get_config().log_level,
    format='%(asctime)s %(levelname)s: %(message)s',
    datefmt='%H:%M:%S',
    force=True  # Override any existing config
)
logging.info("APP STARTUP: Logging initialized")

import streamlit as st

# Add current directory to path for imports
sys.path.insert(0, str(Path(__file__).parent))

from constants import (
    APP_CONFIG,
    BRAND_NAME,
    BRAND_TAGLINE,
    EXPORT_FILE_PREFIX,
    DATE_FORMAT,
    HELP_TEXT,
    STEP_AGE_INPUT,
    STEP_LIVES_SELECTION,
    STEP_RESULTS,
    STEP_TYPE_SELECTION,
)
from quote_engine import QuoteCategory
from quote_engine.catalog import CatalogError
from quote_engine.components import (
    render_age_selector,
    render_category_selection,
    render_contact_button,
    render_limit_warning,
    render_lives_selection,
    render_notice,
    render_notices,
    render_plan_card,
)
from quote_engine.services import ProgressionCheck, QuoteService, gate_notice
from quote_engine.session import QuoteSession
from quote_engine.utils import format_lives, format_options_found, offers_to_csv, summary_dataframe

logger = logging.getLogger(__name__)


# Page configuration
st.set_page_config(
    page_title=APP_CONFIG['title'],
    page_icon=APP_CONFIG['icon'],
    layout=APP_CONFIG['layout'],
    initial_sidebar_state=APP_CONFIG['initial_sidebar_state']
)


@st.cache_resource
def get_quote_service() -> QuoteService:
    """Quote service shared by every browser session (catalog parsed once)."""
    config = get_config()
    is_valid, error = config.validate()
    if not is_valid:
        logger.error(f"Invalid configuration: {error}")
        raise CatalogError(error)
    return QuoteService(config=config)


def initialize_session_state():
    """Initialize session state variables"""

    if 'step' not in st.session_state:
        st.session_state.step = STEP_TYPE_SELECTION

    if 'quote_session' not in st.session_state:
        st.session_state.quote_session = QuoteSession(
            warning_seconds=get_config().limit_warning_seconds
        )


def go_to(step: str) -> None:
    st.session_state.step = step
    st.rerun()


def select_category(category: QuoteCategory) -> None:
    """Pick a category, reset the counts and move to age input."""
    st.session_state.quote_session.select_category(category)
    go_to(STEP_AGE_INPUT)


def go_back() -> None:
    session: QuoteSession = st.session_state.quote_session
    step = st.session_state.step

    if step == STEP_RESULTS:
        go_to(STEP_AGE_INPUT)
    elif step == STEP_AGE_INPUT:
        if session.category is QuoteCategory.PF:
            session.select_category(None)
            go_to(STEP_TYPE_SELECTION)
        else:
            go_to(STEP_LIVES_SELECTION)
    elif step == STEP_LIVES_SELECTION:
        go_to(STEP_TYPE_SELECTION)


def render_header() -> None:
    col1, col2 = st.columns([3, 1])
    with col1:
        st.markdown(f"# {BRAND_NAME}")
        st.caption(BRAND_TAGLINE)
    with col2:
        st.markdown(f"**{APP_CONFIG['title']}**")
    st.divider()


def render_back_button() -> None:
    if st.button("← Voltar", key=f"back_{st.session_state.step}"):
        go_back()


def show_type_selection():
    """Step 1: Pessoa Física or CNPJ/MEI"""
    render_category_selection(
        on_individual=lambda: select_category(QuoteCategory.PF),
        on_company=lambda: go_to(STEP_LIVES_SELECTION),
    )


def show_lives_selection():
    """Step 2 (CNPJ/MEI only): company size"""
    render_back_button()
    render_lives_selection(on_select=select_category)


def show_age_input():
    """Step 3: headcount per age bracket"""
    session: QuoteSession = st.session_state.quote_session

    col1, col2 = st.columns([3, 1])
    with col1:
        render_back_button()
    with col2:
        st.caption("Cotação para:")
        st.markdown(f"**{session.category.title if session.category else ''}**")

    st.markdown("## Quem será coberto?")
    st.caption(HELP_TEXT['age_input'])

    render_limit_warning(session, on_switch=session.switch_to_small_group)

    check = session.progression()
    if check is ProgressionCheck.GROUP_REQUIRES_ADULT:
        render_notice(gate_notice(check))

    if render_age_selector(session):
        st.rerun()

    if st.button(
        "Avançar para Cotação",
        type="primary",
        disabled=not session.can_progress,
        width="stretch",
        key="continue_to_results",
    ):
        if session.request_results() is ProgressionCheck.ALLOWED:
            go_to(STEP_RESULTS)
        else:
            st.rerun()

    if check is ProgressionCheck.GROUP_REQUIRES_ADULT:
        st.caption(HELP_TEXT['group_minor'])


def show_results():
    """Step 4: ranked and grouped offers"""
    session: QuoteSession = st.session_state.quote_session
    result = session.quote(get_quote_service())

    col1, col2 = st.columns([3, 1])
    with col1:
        render_back_button()
        st.markdown(f"Resultados para: **{session.category.title if session.category else ''}**")
    with col2:
        st.markdown(f"**{format_lives(result.total_lives)}**")

    render_notices(result.notices)

    st.markdown("## Planos Disponíveis")
    st.caption(format_options_found(len(result.grouped_offers)))

    columns = st.columns(3)
    for idx, group in enumerate(result.grouped_offers):
        with columns[idx % 3]:
            render_plan_card(group, key_prefix=f"{idx}_")

    if result.ranked_offers:
        with st.expander("Comparar todas as opções"):
            st.dataframe(summary_dataframe(result.ranked_offers), width="stretch", hide_index=True)

        timestamp = datetime.now().strftime(DATE_FORMAT)
        st.download_button(
            label="📥 Baixar cotação (CSV)",
            data=offers_to_csv(result.ranked_offers),
            file_name=f"{EXPORT_FILE_PREFIX}_{session.category.value}_{timestamp}.csv",
            mime="text/csv",
            help=HELP_TEXT['export'],
            key="download_quote_csv",
        )


def main():
    """Main application entry point"""

    initialize_session_state()

    try:
        get_quote_service()
    except CatalogError as e:
        st.error(f"Não foi possível carregar o catálogo de planos: {e}")
        st.stop()

    render_header()
    render_contact_button(get_config().contact_whatsapp)

    # Route to appropriate step
    step = st.session_state.step
    if step == STEP_TYPE_SELECTION:
        show_type_selection()
    elif step == STEP_LIVES_SELECTION:
        show_lives_selection()
    elif step == STEP_AGE_INPUT:
        show_age_input()
    elif step == STEP_RESULTS:
        show_results()


if __name__ == "__main__":
    main()
