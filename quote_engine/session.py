"""
Selection session for the quoting wizard.

QuoteSession owns the mutable state the wizard edits (category, headcount per
bracket, the single-life warning) and enforces the single-life ceiling at the
mutation boundary, so the engine never sees a PME_1 selection with more than
one life. Quotes are recomputed explicitly by calling quote() after a change.
"""

import logging
import time
from enum import Enum
from typing import Callable, Optional

from quote_engine import AgeBracket, QuoteCategory, QuoteResult, SelectionState
from quote_engine.config import LIMIT_WARNING_SECONDS
from quote_engine.services.quote_service import QuoteService
from quote_engine.services.validation import (
    IncrementCheck,
    ProgressionCheck,
    check_increment,
    check_progression,
)

logger = logging.getLogger(__name__)


class WarningState(Enum):
    HIDDEN = "hidden"
    VISIBLE = "visible"  # pending automatic clear


class LimitWarning:
    """
    Dismissible warning that clears itself after a fixed interval.

    show() makes it visible until now + duration; a later show() supersedes
    the pending clear and restarts the interval. dismiss() cancels it. The
    transition back to HIDDEN happens lazily when the state is read.
    """

    def __init__(self, duration: float = LIMIT_WARNING_SECONDS, clock: Callable[[], float] = time.monotonic):
        self.duration = duration
        self._clock = clock
        self._state = WarningState.HIDDEN
        self._deadline: Optional[float] = None

    def show(self, now: Optional[float] = None) -> None:
        now = self._clock() if now is None else now
        self._state = WarningState.VISIBLE
        self._deadline = now + self.duration

    def dismiss(self) -> None:
        self._state = WarningState.HIDDEN
        self._deadline = None

    def state(self, now: Optional[float] = None) -> WarningState:
        if self._state is WarningState.VISIBLE:
            now = self._clock() if now is None else now
            if now >= self._deadline:
                self.dismiss()
        return self._state

    def is_visible(self, now: Optional[float] = None) -> bool:
        return self.state(now) is WarningState.VISIBLE

    def remaining(self, now: Optional[float] = None) -> float:
        """Seconds until the warning clears; 0 when hidden."""
        if not self.is_visible(now):
            return 0.0
        now = self._clock() if now is None else now
        return max(0.0, self._deadline - now)


class QuoteSession:
    """
    Category and headcount being edited in the wizard.

    Changing the category resets every count to zero. Adding a life to a
    PME_1 quote that already has one is rejected and raises the limit warning
    instead; any accepted change clears the warning.
    """

    def __init__(
        self,
        category: Optional[QuoteCategory] = None,
        warning_seconds: float = LIMIT_WARNING_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.category = category
        self.selection = SelectionState.empty()
        self.limit_warning = LimitWarning(warning_seconds, clock)

    def select_category(self, category: Optional[QuoteCategory]) -> None:
        self.category = category
        self.selection = SelectionState.empty()
        self.limit_warning.dismiss()
        logger.debug(f"Category selected: {category.value if category else None}")

    def switch_to_small_group(self) -> None:
        """Leave the single-life category for the 2-29 lives table."""
        self.select_category(QuoteCategory.PME_2)

    def increment(self, bracket: AgeBracket, now: Optional[float] = None) -> IncrementCheck:
        check = check_increment(self.category, self.selection)
        if check is IncrementCheck.SINGLE_LIFE_LIMIT:
            self.limit_warning.show(now)
            return check

        self.selection = self.selection.incremented(bracket)
        self.limit_warning.dismiss()
        return check

    def decrement(self, bracket: AgeBracket) -> None:
        self.selection = self.selection.decremented(bracket)
        self.limit_warning.dismiss()

    @property
    def total_lives(self) -> int:
        return self.selection.total_lives

    @property
    def is_solo_minor(self) -> bool:
        return self.selection.is_solo_minor

    def progression(self) -> ProgressionCheck:
        return check_progression(self.category, self.selection)

    @property
    def can_progress(self) -> bool:
        return self.progression() is ProgressionCheck.ALLOWED

    def request_results(self, now: Optional[float] = None) -> ProgressionCheck:
        """Check the gate before leaving age input; re-raises the limit warning when over the ceiling."""
        check = self.progression()
        if check is ProgressionCheck.SINGLE_LIFE_LIMIT:
            self.limit_warning.show(now)
        return check

    def quote(self, service: QuoteService) -> QuoteResult:
        return service.quote(self.category, self.selection)
