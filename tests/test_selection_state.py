"""
Tests for SelectionState and the closed AgeBracket / QuoteCategory vocabularies.

Run with: python -m pytest tests/test_selection_state.py
"""

import unittest

from quote_engine import AgeBracket, PricedOffer, QuoteCategory, SelectionState

from plan_fixtures import make_plan


# =============================================================================
# AC: Every bracket present, never negative
# =============================================================================

class TestSelectionInvariants(unittest.TestCase):
    """SelectionState always holds every bracket with a non-negative count"""

    def test_empty_selection_has_every_bracket_at_zero(self):
        selection = SelectionState.empty()
        self.assertEqual(len(selection.counts), len(AgeBracket))
        self.assertTrue(all(count == 0 for count in selection.counts.values()))
        self.assertEqual(selection.total_lives, 0)

    def test_missing_brackets_default_to_zero(self):
        selection = SelectionState({AgeBracket.RANGE_29_33: 2})
        self.assertEqual(selection[AgeBracket.RANGE_29_33], 2)
        self.assertEqual(selection[AgeBracket.RANGE_59_PLUS], 0)

    def test_negative_counts_clamped(self):
        selection = SelectionState({AgeBracket.RANGE_19_23: -3})
        self.assertEqual(selection[AgeBracket.RANGE_19_23], 0)

    def test_decrement_clamps_at_zero(self):
        selection = SelectionState.empty().decremented(AgeBracket.RANGE_0_18)
        self.assertEqual(selection[AgeBracket.RANGE_0_18], 0)

    def test_increment_returns_new_state(self):
        original = SelectionState.empty()
        updated = original.incremented(AgeBracket.RANGE_34_38)
        self.assertEqual(original.total_lives, 0)
        self.assertEqual(updated[AgeBracket.RANGE_34_38], 1)

    def test_counts_are_read_only(self):
        selection = SelectionState.empty()
        with self.assertRaises(TypeError):
            selection.counts[AgeBracket.RANGE_0_18] = 5

    def test_equal_selections_hash_equal(self):
        a = SelectionState({AgeBracket.RANGE_19_23: 1, AgeBracket.RANGE_0_18: 2})
        b = SelectionState.empty().incremented(AgeBracket.RANGE_0_18)
        b = b.incremented(AgeBracket.RANGE_0_18).incremented(AgeBracket.RANGE_19_23)
        self.assertEqual(a, b)
        self.assertEqual(hash(a), hash(b))
        self.assertEqual(len({a, b, SelectionState.empty()}), 2)

    def test_plans_and_offers_are_hashable(self):
        plan = make_plan("p1")
        offer = PricedOffer(plan=plan, total_price=100.0)
        self.assertEqual(hash(plan), hash(make_plan("p1")))
        self.assertEqual(len({plan, make_plan("p1"), make_plan("p2")}), 2)
        self.assertIn(offer, {offer: "cached"})

    def test_active_brackets_in_enumeration_order(self):
        selection = SelectionState({
            AgeBracket.RANGE_59_PLUS: 1,
            AgeBracket.RANGE_0_18: 2,
            AgeBracket.RANGE_39_43: 1,
        })
        self.assertEqual(
            selection.active_brackets(),
            [(AgeBracket.RANGE_0_18, 2), (AgeBracket.RANGE_39_43, 1), (AgeBracket.RANGE_59_PLUS, 1)],
        )


# =============================================================================
# AC: Solo minor is "everyone in the youngest bracket"
# =============================================================================

class TestSoloMinor(unittest.TestCase):

    def test_empty_selection_is_not_solo_minor(self):
        self.assertFalse(SelectionState.empty().is_solo_minor)

    def test_only_minors_is_solo_minor(self):
        self.assertTrue(SelectionState({AgeBracket.RANGE_0_18: 3}).is_solo_minor)

    def test_minor_with_adult_is_not_solo_minor(self):
        selection = SelectionState({AgeBracket.RANGE_0_18: 2, AgeBracket.RANGE_34_38: 1})
        self.assertFalse(selection.is_solo_minor)

    def test_adults_only_is_not_solo_minor(self):
        self.assertFalse(SelectionState({AgeBracket.RANGE_19_23: 1}).is_solo_minor)


# =============================================================================
# AC: Unknown brackets/categories are ignored at the parsing boundary
# =============================================================================

class TestVocabularyParsing(unittest.TestCase):

    def test_parse_bracket_by_value_and_name(self):
        self.assertIs(AgeBracket.parse("19-23"), AgeBracket.RANGE_19_23)
        self.assertIs(AgeBracket.parse("RANGE_59_PLUS"), AgeBracket.RANGE_59_PLUS)
        self.assertIs(AgeBracket.parse(AgeBracket.RANGE_0_18), AgeBracket.RANGE_0_18)

    def test_unknown_bracket_returns_none(self):
        with self.assertLogs('quote_engine', level='WARNING'):
            self.assertIsNone(AgeBracket.parse("65-70"))

    def test_from_mapping_ignores_unknown_keys(self):
        with self.assertLogs('quote_engine', level='WARNING'):
            selection = SelectionState.from_mapping({"0-18": 1, "24-28": 2, "100+": 7})
        self.assertEqual(selection.total_lives, 3)
        self.assertEqual(selection[AgeBracket.RANGE_24_28], 2)

    def test_parse_category_case_insensitive(self):
        self.assertIs(QuoteCategory.parse("pme_2"), QuoteCategory.PME_2)

    def test_unknown_category_returns_none(self):
        with self.assertLogs('quote_engine', level='WARNING'):
            self.assertIsNone(QuoteCategory.parse("PME_99"))

    def test_group_categories(self):
        self.assertFalse(QuoteCategory.PF.is_group)
        self.assertTrue(all(c.is_group for c in (QuoteCategory.PME_1, QuoteCategory.PME_2, QuoteCategory.PME_30)))

    def test_bracket_labels(self):
        self.assertEqual(AgeBracket.RANGE_0_18.label, "0 a 18 anos")
        self.assertEqual(AgeBracket.RANGE_59_PLUS.label, "59 anos ou mais")


if __name__ == '__main__':
    unittest.main()
