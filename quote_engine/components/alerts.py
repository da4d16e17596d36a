"""
Alert Components

- Limit warning: shown when a PME_1 quote tries to add a second life. It is
  rendered inside a fragment that re-runs every second, so it clears itself
  once the LimitWarning deadline passes without a full page rerun.
- Notices: business-rule messages attached to a quote or a blocked step.
"""

from typing import Callable, Iterable, Optional

import streamlit as st

from quote_engine import QuoteNotice
from quote_engine.session import QuoteSession

_LEVEL_RENDERERS = {
    'info': st.info,
    'warning': st.warning,
    'error': st.error,
}


def render_notice(notice: QuoteNotice) -> None:
    renderer = _LEVEL_RENDERERS.get(notice.level, st.info)
    renderer(f"**{notice.title}**\n\n{notice.message}")


def render_notices(notices: Iterable[QuoteNotice]) -> None:
    for notice in notices:
        render_notice(notice)


@st.fragment(run_every=1.0)
def render_limit_warning(session: QuoteSession, on_switch: Optional[Callable[[], None]] = None) -> None:
    """
    Render the single-life warning while it is visible.

    Args:
        session: Wizard session owning the LimitWarning
        on_switch: Called when the user switches to the 2-29 lives table
    """
    if not session.limit_warning.is_visible():
        return

    st.error(
        "**Limite de Vidas Atingido**\n\n"
        "Esta modalidade permite apenas 1 vida (Titular)."
    )
    if on_switch is not None and st.button("Mudar para 2 a 29 vidas", key="switch_to_pme_2"):
        on_switch()
        st.rerun()
