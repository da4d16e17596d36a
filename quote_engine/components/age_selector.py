"""
Age Selector Component

One row per age bracket with decrement/increment buttons. All mutations go
through QuoteSession, which rejects additions past the single-life ceiling.
"""

import streamlit as st

from quote_engine import AgeBracket
from quote_engine.session import QuoteSession


def render_age_selector(session: QuoteSession) -> bool:
    """
    Render the counters for every bracket.

    Args:
        session: Wizard session holding the selection

    Returns:
        True if the selection (or the warning) changed on this run
    """
    changed = False

    with st.container(border=True):
        for bracket in AgeBracket:
            count = session.selection[bracket]
            label_col, minus_col, count_col, plus_col = st.columns([6, 1, 1, 1])

            with label_col:
                st.markdown(f"**{bracket.label}**")
            with minus_col:
                if st.button("−", key=f"dec_{bracket.name}", disabled=count == 0, width="stretch"):
                    session.decrement(bracket)
                    changed = True
            with count_col:
                st.markdown(f"<div style='text-align:center;font-size:20px'>{count}</div>",
                            unsafe_allow_html=True)
            with plus_col:
                if st.button("+", key=f"inc_{bracket.name}", width="stretch"):
                    session.increment(bracket)
                    changed = True

        st.divider()
        col1, col2 = st.columns([3, 1])
        with col1:
            st.markdown("Total de vidas:")
        with col2:
            st.markdown(f"### {session.total_lives}")

    return changed
