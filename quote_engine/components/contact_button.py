"""
Contact Button Component

WhatsApp link shown in the sidebar when a contact number is configured.
"""

from urllib.parse import quote

import streamlit as st

DEFAULT_MESSAGE = "Olá! Gostaria de ajuda com uma cotação de plano de saúde."


def whatsapp_url(number: str, message: str = DEFAULT_MESSAGE) -> str:
    digits = "".join(ch for ch in number if ch.isdigit())
    return f"https://wa.me/{digits}?text={quote(message)}"


def render_contact_button(number: str) -> None:
    if not number:
        return
    st.sidebar.link_button("💬 Fale conosco no WhatsApp", whatsapp_url(number), width="stretch")
