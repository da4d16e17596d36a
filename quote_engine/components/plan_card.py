"""
Plan Card Component

One card per OfferGroup: operator, product and accommodation, with each
copay variant and its monthly total, plus the per-bracket breakdown.
"""

import pandas as pd
import streamlit as st

from quote_engine import OfferGroup, PricedOffer
from quote_engine.utils.formatting import format_brl


def _breakdown_table(offer: PricedOffer) -> pd.DataFrame:
    return pd.DataFrame([
        {
            'Faixa': line.bracket.label,
            'Vidas': line.count,
            'Valor unitário': format_brl(line.unit_price),
            'Subtotal': format_brl(line.subtotal),
        }
        for line in offer.breakdown
    ])


def render_plan_card(group: OfferGroup, key_prefix: str = "") -> None:
    """
    Render the card for a group of variants.

    Args:
        group: Offers for the same operator/product/accommodation, in rank order
        key_prefix: Prefix for widget keys, unique per card
    """
    lead = group.lead.plan

    with st.container(border=True):
        st.caption(lead.operator)
        st.markdown(f"#### {lead.name}")
        st.markdown(f"🛏️ {lead.accommodation}")

        if len(group) == 1:
            st.metric("Mensalidade", format_brl(group.lead.total_price))
        else:
            st.markdown(f"A partir de **{format_brl(group.lowest_price)}**/mês")
            for offer in group:
                label = offer.plan.coparticipation or offer.plan.id
                st.markdown(f"- {label}: **{format_brl(offer.total_price)}**")

        with st.expander("Detalhes por faixa etária"):
            for offer in group:
                if len(group) > 1:
                    st.markdown(f"**{offer.plan.coparticipation or offer.plan.id}**")
                st.dataframe(
                    _breakdown_table(offer),
                    width="stretch",
                    hide_index=True,
                    key=f"{key_prefix}{offer.plan.id}_breakdown",
                )
