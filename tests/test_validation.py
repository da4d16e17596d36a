"""
Tests for the business rule validator.

Run with: python -m pytest tests/test_validation.py
"""

import unittest

from quote_engine import AgeBracket, NoticeCode, QuoteCategory, SelectionState
from quote_engine.services.validation import (
    IncrementCheck,
    ProgressionCheck,
    can_progress,
    check_increment,
    check_progression,
    gate_notice,
    results_notices,
)

ONE_ADULT = SelectionState({AgeBracket.RANGE_29_33: 1})
TWO_ADULTS = SelectionState({AgeBracket.RANGE_29_33: 2})
TWO_MINORS = SelectionState({AgeBracket.RANGE_0_18: 2})
FAMILY = SelectionState({AgeBracket.RANGE_0_18: 2, AgeBracket.RANGE_39_43: 2})


# =============================================================================
# AC: Single-life ceiling (PME_1)
# =============================================================================

class TestIncrementCheck(unittest.TestCase):

    def test_first_life_allowed_for_pme_1(self):
        self.assertIs(check_increment(QuoteCategory.PME_1, SelectionState.empty()), IncrementCheck.ALLOWED)

    def test_second_life_rejected_for_pme_1(self):
        self.assertIs(check_increment(QuoteCategory.PME_1, ONE_ADULT), IncrementCheck.SINGLE_LIFE_LIMIT)

    def test_other_categories_have_no_ceiling(self):
        for category in (QuoteCategory.PF, QuoteCategory.PME_2, QuoteCategory.PME_30, None):
            self.assertIs(check_increment(category, TWO_ADULTS), IncrementCheck.ALLOWED)


# =============================================================================
# AC: Progression guard
# =============================================================================

class TestProgressionCheck(unittest.TestCase):

    def test_no_lives_blocks(self):
        for category in QuoteCategory:
            self.assertIs(check_progression(category, SelectionState.empty()), ProgressionCheck.NO_LIVES)

    def test_no_category_blocks(self):
        self.assertIs(check_progression(None, ONE_ADULT), ProgressionCheck.NO_CATEGORY)

    def test_pme_1_over_ceiling_blocks(self):
        self.assertIs(check_progression(QuoteCategory.PME_1, TWO_ADULTS), ProgressionCheck.SINGLE_LIFE_LIMIT)

    def test_group_solo_minor_blocks(self):
        """Small-group, {0-18: 2} -> progression blocked"""
        self.assertIs(check_progression(QuoteCategory.PME_2, TWO_MINORS), ProgressionCheck.GROUP_REQUIRES_ADULT)
        self.assertFalse(can_progress(QuoteCategory.PME_2, TWO_MINORS))
        self.assertFalse(can_progress(QuoteCategory.PME_30, TWO_MINORS))
        self.assertFalse(can_progress(QuoteCategory.PME_1, SelectionState({AgeBracket.RANGE_0_18: 1})))

    def test_pf_solo_minor_may_progress(self):
        self.assertTrue(can_progress(QuoteCategory.PF, TWO_MINORS))

    def test_group_with_adult_may_progress(self):
        self.assertTrue(can_progress(QuoteCategory.PME_2, FAMILY))
        self.assertTrue(can_progress(QuoteCategory.PME_1, ONE_ADULT))

    def test_gate_notice_for_every_blocking_check(self):
        self.assertIsNone(gate_notice(ProgressionCheck.ALLOWED))
        for check in ProgressionCheck:
            if check is not ProgressionCheck.ALLOWED:
                notice = gate_notice(check)
                self.assertIsNotNone(notice)
                self.assertEqual(notice.code.value, check.value)


# =============================================================================
# AC: Display-time annotations
# =============================================================================

class TestResultsNotices(unittest.TestCase):

    def test_pf_solo_minor_names_excluded_operator(self):
        notices = results_notices(QuoteCategory.PF, TWO_MINORS)
        self.assertEqual([n.code for n in notices], [NoticeCode.SOLO_MINOR_OPERATOR_EXCLUDED])
        self.assertIn("Fênix Medical", notices[0].message)

    def test_custom_operator_display_name(self):
        notices = results_notices(QuoteCategory.PF, TWO_MINORS, operator_display="Operadora X")
        self.assertIn("Operadora X", notices[0].message)

    def test_pf_with_adult_has_no_notice(self):
        self.assertEqual(results_notices(QuoteCategory.PF, FAMILY), ())

    def test_large_group_reference_pricing(self):
        notices = results_notices(QuoteCategory.PME_30, FAMILY)
        self.assertEqual([n.code for n in notices], [NoticeCode.LARGE_GROUP_REFERENCE_PRICING])

    def test_group_solo_minor_notice(self):
        codes = [n.code for n in results_notices(QuoteCategory.PME_2, TWO_MINORS)]
        self.assertEqual(codes, [NoticeCode.GROUP_REQUIRES_ADULT])

    def test_no_category_has_no_notice(self):
        self.assertEqual(results_notices(None, TWO_MINORS), ())


if __name__ == '__main__':
    unittest.main()
