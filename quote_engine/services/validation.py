"""
Business rule validation.

Stateless checks the wizard polls before mutating the selection, before
moving from age input to results, and when rendering results. Failures are
expected business states: they are returned as enums and notices, never raised.

Rules:
- Single-life ceiling: PME_1 accepts at most one life (the titular).
- Progression guard: no lives, a PME_1 selection over the ceiling, or a
  group selection made only of minors cannot advance to results.
- Results annotations: PF solo-minor quotes name the excluded operator,
  PME_30 quotes are priced from the 2-29 table for reference.
"""

from enum import Enum
from typing import List, Optional, Tuple

from quote_engine import (
    SINGLE_LIFE_LIMIT,
    NoticeCode,
    QuoteCategory,
    QuoteNotice,
    SelectionState,
)
from quote_engine.config import DEFAULT_RESTRICTED_OPERATOR_DISPLAY


class IncrementCheck(Enum):
    """Outcome of asking whether one more life may be added."""
    ALLOWED = "allowed"
    SINGLE_LIFE_LIMIT = "single_life_limit"


class ProgressionCheck(Enum):
    """Outcome of asking whether the wizard may advance to results."""
    ALLOWED = "allowed"
    NO_CATEGORY = "no_category"
    NO_LIVES = "no_lives"
    SINGLE_LIFE_LIMIT = "single_life_limit"
    GROUP_REQUIRES_ADULT = "group_requires_adult"


def check_increment(category: Optional[QuoteCategory], selection: SelectionState) -> IncrementCheck:
    """Adding a life is rejected when it would push a PME_1 quote past one life."""
    if category is QuoteCategory.PME_1 and selection.total_lives >= SINGLE_LIFE_LIMIT:
        return IncrementCheck.SINGLE_LIFE_LIMIT
    return IncrementCheck.ALLOWED


def is_group_solo_minor(category: Optional[QuoteCategory], selection: SelectionState) -> bool:
    """Group policies need an adult titular; a minors-only group has none."""
    return category is not None and category.is_group and selection.is_solo_minor


def check_progression(category: Optional[QuoteCategory], selection: SelectionState) -> ProgressionCheck:
    """Decide whether the age-input step may advance to results."""
    if category is None:
        return ProgressionCheck.NO_CATEGORY
    if selection.total_lives == 0:
        return ProgressionCheck.NO_LIVES
    if category is QuoteCategory.PME_1 and selection.total_lives > SINGLE_LIFE_LIMIT:
        return ProgressionCheck.SINGLE_LIFE_LIMIT
    if is_group_solo_minor(category, selection):
        return ProgressionCheck.GROUP_REQUIRES_ADULT
    return ProgressionCheck.ALLOWED


def can_progress(category: Optional[QuoteCategory], selection: SelectionState) -> bool:
    return check_progression(category, selection) is ProgressionCheck.ALLOWED


# =============================================================================
# NOTICES
# =============================================================================

def single_life_notice() -> QuoteNotice:
    return QuoteNotice(
        code=NoticeCode.SINGLE_LIFE_LIMIT,
        title="Limite de Vidas Atingido",
        message="Esta modalidade permite apenas 1 vida (Titular).",
        level="error",
    )


def group_requires_adult_notice() -> QuoteNotice:
    return QuoteNotice(
        code=NoticeCode.GROUP_REQUIRES_ADULT,
        title="Atenção",
        message="Planos empresariais exigem um titular maior de 18 anos.",
        level="error",
    )


def solo_minor_notice(operator_display: str = DEFAULT_RESTRICTED_OPERATOR_DISPLAY) -> QuoteNotice:
    return QuoteNotice(
        code=NoticeCode.SOLO_MINOR_OPERATOR_EXCLUDED,
        title="Cotação para Menor de Idade (PF)",
        message=(
            "Para contratação individual de crianças (0 a 18 anos) sem um responsável "
            f"no plano, a operadora {operator_display} não está disponível."
        ),
        level="warning",
    )


def large_group_notice() -> QuoteNotice:
    return QuoteNotice(
        code=NoticeCode.LARGE_GROUP_REFERENCE_PRICING,
        title="Nota para grandes grupos",
        message=(
            "Os valores exibidos são baseados na tabela de 2 a 29 vidas para referência. "
            "Para empresas acima de 30 vidas, solicite uma negociação personalizada para "
            "isenção de carência e descontos adicionais."
        ),
        level="info",
    )


_GATE_NOTICES = {
    ProgressionCheck.NO_CATEGORY: QuoteNotice(
        code=NoticeCode.NO_CATEGORY,
        title="Escolha o tipo de contratação",
        message="Selecione Pessoa Física ou CNPJ/MEI para começar.",
        level="info",
    ),
    ProgressionCheck.NO_LIVES: QuoteNotice(
        code=NoticeCode.NO_LIVES,
        title="Nenhuma vida selecionada",
        message="Adicione ao menos uma pessoa para prosseguir.",
        level="info",
    ),
}


def gate_notice(check: ProgressionCheck) -> Optional[QuoteNotice]:
    """Notice explaining why progression is blocked; None when allowed."""
    if check is ProgressionCheck.ALLOWED:
        return None
    if check is ProgressionCheck.SINGLE_LIFE_LIMIT:
        return single_life_notice()
    if check is ProgressionCheck.GROUP_REQUIRES_ADULT:
        return group_requires_adult_notice()
    return _GATE_NOTICES[check]


def results_notices(
    category: Optional[QuoteCategory],
    selection: SelectionState,
    operator_display: str = DEFAULT_RESTRICTED_OPERATOR_DISPLAY,
) -> Tuple[QuoteNotice, ...]:
    """
    Informational notices attached to a quote. They never change eligibility.
    """
    notices: List[QuoteNotice] = []
    if category is QuoteCategory.PF and selection.is_solo_minor:
        notices.append(solo_minor_notice(operator_display))
    if is_group_solo_minor(category, selection):
        notices.append(group_requires_adult_notice())
    if category is QuoteCategory.PME_30:
        notices.append(large_group_notice())
    return tuple(notices)
