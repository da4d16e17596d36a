"""
Category Selection Components

Two wizard steps:
- Type selection: Pessoa Física or CNPJ/MEI
- Lives selection (CNPJ/MEI only): 1, 2 a 29 or 30+ lives
"""

from typing import Callable, Optional

import streamlit as st

from quote_engine import QuoteCategory

GROUP_SIZE_OPTIONS = [
    (QuoteCategory.PME_1, "1", "Vida", "Amhemed, GNDI, Unimed"),
    (QuoteCategory.PME_2, "2 a 29", "Vidas", "Todas as operadoras + Descontos"),
    (QuoteCategory.PME_30, "30+", "Vidas", "Condições Especiais"),
]


def render_category_selection(
    on_individual: Callable[[], None],
    on_company: Callable[[], None],
) -> None:
    """
    Render the first step: individual (CPF) or company (CNPJ/MEI) quote.

    Args:
        on_individual: Called when Pessoa Física is chosen
        on_company: Called when CNPJ e MEI is chosen
    """
    st.markdown("## Vamos começar sua cotação")
    st.caption("Escolha o tipo de contratação ideal para você ou sua empresa.")

    col1, col2 = st.columns(2)

    with col1:
        with st.container(border=True):
            st.markdown("### 👤 Pessoa Física")
            st.markdown("Planos individuais ou familiares (CPF).")
            st.caption("Amhemed, GNDI, Fênix")
            if st.button("Cotar Pessoa Física", key="category_pf", type="primary", width="stretch"):
                on_individual()

    with col2:
        with st.container(border=True):
            st.markdown("### 🏢 CNPJ e MEI")
            st.markdown("Planos empresariais com tabela reduzida.")
            st.caption("Unimed, Amil, Eva, e mais...")
            if st.button("Cotar CNPJ e MEI", key="category_pme", type="primary", width="stretch"):
                on_company()


def render_lives_selection(on_select: Callable[[QuoteCategory], None]) -> Optional[QuoteCategory]:
    """
    Render the company size step.

    Returns:
        The category picked on this run, or None
    """
    st.markdown("## Quantas vidas?")
    st.caption("Selecione o porte da sua empresa para ver as opções disponíveis.")

    picked = None
    columns = st.columns(len(GROUP_SIZE_OPTIONS))
    for column, (category, size, unit, operators) in zip(columns, GROUP_SIZE_OPTIONS):
        with column:
            with st.container(border=True):
                st.markdown(f"### {size}")
                st.markdown(unit)
                st.caption(operators)
                if st.button("Selecionar", key=f"lives_{category.value}", width="stretch"):
                    picked = category

    if picked is not None:
        on_select(picked)
    return picked
