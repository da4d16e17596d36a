"""
Formatting utilities for quote display.
"""

from typing import Optional


def format_brl(value: Optional[float]) -> str:
    """
    Format a number as Brazilian Real.

    Args:
        value: Monthly amount

    Returns:
        Formatted string like "R$ 1.234,56"
    """
    if value is None:
        return "—"

    text = f"{abs(value):,.2f}"
    # 1,234.56 -> 1.234,56
    text = text.replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if value < 0 else ""
    return f"{sign}R$ {text}"


def format_lives(count: int) -> str:
    """'1 Vida' / '3 Vidas'."""
    return f"{count} Vida" if count == 1 else f"{count} Vidas"


def format_options_found(count: int) -> str:
    if count == 1:
        return "Encontramos 1 opção para o perfil selecionado."
    return f"Encontramos {count} opções para o perfil selecionado."
