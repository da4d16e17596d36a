"""
Tests for the quote pipeline against the bundled catalog.

Run with: python -m pytest tests/test_quote_service.py
"""

import unittest

from quote_engine import AgeBracket, NoticeCode, QuoteCategory, SelectionState
from quote_engine.config import QuoteConfig
from quote_engine.services import QuoteService, build_quote, priority_weight
from quote_engine.services.grouping import flatten_groups

from plan_fixtures import sample_catalog

ONE_ADULT = SelectionState({AgeBracket.RANGE_29_33: 1})
TWO_MINORS = SelectionState({AgeBracket.RANGE_0_18: 2})
FAMILY = SelectionState({
    AgeBracket.RANGE_0_18: 2,
    AgeBracket.RANGE_34_38: 1,
    AgeBracket.RANGE_39_43: 1,
})


class BundledCatalogTestCase(unittest.TestCase):

    def setUp(self):
        self.service = QuoteService(config=QuoteConfig())


# =============================================================================
# AC: Individual quote for one adult
# =============================================================================

class TestIndividualQuote(BundledCatalogTestCase):

    def test_ranked_order(self):
        result = self.service.quote(QuoteCategory.PF, ONE_ADULT)
        self.assertEqual(
            [offer.plan.id for offer in result.ranked_offers],
            [
                "amh-ideal-enf-cc",
                "amh-ideal-enf-sc",
                "amh-amhe-apt-cc",
                "amh-amhe-apt-sc",
                "amh-plus-apt-sc",
                "gndi-nosso-enf-cp",
                "gndi-nosso-enf-sc",
                "gndi-notrelife-apt-cp",
                "fenix-classico-enf-cc",
                "fenix-classico-apt-cc",
            ],
        )
        self.assertEqual(result.notices, ())

    def test_grouped_variants(self):
        result = self.service.quote(QuoteCategory.PF, ONE_ADULT)
        self.assertEqual(len(result.grouped_offers), 7)
        lead = result.grouped_offers[0]
        self.assertEqual(lead.key, ("Amhemed", "Amhemed Ideal", "Enfermaria"))
        self.assertEqual(len(lead), 2)
        self.assertEqual(flatten_groups(result.grouped_offers), list(result.ranked_offers))

    def test_unpriced_bracket_yields_zero_total(self):
        result = self.service.quote(QuoteCategory.PF, ONE_ADULT)
        notrelife = next(o for o in result.ranked_offers if o.plan.id == "gndi-notrelife-apt-cp")
        self.assertEqual(notrelife.total_price, 0.0)

    def test_totals_match_breakdown(self):
        result = self.service.quote(QuoteCategory.PF, FAMILY)
        for offer in result.ranked_offers:
            self.assertEqual(offer.total_price, sum(line.subtotal for line in offer.breakdown))
            self.assertEqual(sum(line.count for line in offer.breakdown), FAMILY.total_lives)

    def test_deterministic(self):
        first = self.service.quote(QuoteCategory.PF, FAMILY)
        second = self.service.quote(QuoteCategory.PF, FAMILY)
        self.assertEqual(first, second)


# =============================================================================
# AC: Solo minors
# =============================================================================

class TestSoloMinorQuotes(BundledCatalogTestCase):

    def test_pf_solo_minor_excludes_fenix(self):
        result = self.service.quote(QuoteCategory.PF, TWO_MINORS)
        operators = {offer.plan.operator for offer in result.ranked_offers}
        self.assertNotIn("Fênix Medical", operators)
        self.assertEqual(len(result.ranked_offers), 8)
        self.assertTrue(result.has_notice(NoticeCode.SOLO_MINOR_OPERATOR_EXCLUDED))

    def test_group_solo_minor_has_no_offers(self):
        for category in (QuoteCategory.PME_1, QuoteCategory.PME_2, QuoteCategory.PME_30):
            selection = SelectionState({AgeBracket.RANGE_0_18: 1})
            result = self.service.quote(category, selection)
            self.assertTrue(result.is_empty)
            self.assertEqual(result.grouped_offers, ())
            self.assertTrue(result.has_notice(NoticeCode.GROUP_REQUIRES_ADULT))

    def test_group_solo_minor_reference_offers_when_enabled(self):
        service = QuoteService(config=QuoteConfig(group_solo_minor_offers=True))
        result = service.quote(QuoteCategory.PME_2, TWO_MINORS)
        self.assertEqual(len(result.ranked_offers), 19)
        self.assertTrue(result.has_notice(NoticeCode.GROUP_REQUIRES_ADULT))
        self.assertIn("fenix-classico-enf-cc", [o.plan.id for o in result.ranked_offers])


# =============================================================================
# AC: Company categories
# =============================================================================

class TestCompanyQuotes(BundledCatalogTestCase):

    def test_category_closure(self):
        for category in QuoteCategory:
            result = self.service.quote(category, ONE_ADULT)
            self.assertTrue(result.ranked_offers)
            self.assertTrue(all(o.plan.is_sold_under(category) for o in result.ranked_offers))

    def test_single_life_catalog(self):
        result = self.service.quote(QuoteCategory.PME_1, ONE_ADULT)
        self.assertEqual(len(result.ranked_offers), 12)
        self.assertNotIn("amh-plus-apt-sc", [o.plan.id for o in result.ranked_offers])

    def test_large_group_reference_notice(self):
        result = self.service.quote(QuoteCategory.PME_30, FAMILY)
        self.assertTrue(result.has_notice(NoticeCode.LARGE_GROUP_REFERENCE_PRICING))
        small = self.service.quote(QuoteCategory.PME_2, FAMILY)
        self.assertEqual(
            [o.total_price for o in result.ranked_offers],
            [o.total_price for o in small.ranked_offers],
        )

    def test_ranked_weights_non_decreasing(self):
        result = self.service.quote(QuoteCategory.PME_2, FAMILY)
        weights = [priority_weight(o.plan) for o in result.ranked_offers]
        self.assertEqual(weights, sorted(weights))
        self.assertEqual(weights[-1], 60)


# =============================================================================
# AC: Empty and incomplete input
# =============================================================================

class TestBuildQuote(unittest.TestCase):

    def test_no_category(self):
        result = build_quote(sample_catalog(), None, ONE_ADULT)
        self.assertTrue(result.is_empty)

    def test_no_lives(self):
        result = build_quote(sample_catalog(), QuoteCategory.PF, SelectionState.empty())
        self.assertTrue(result.is_empty)
        self.assertEqual(result.total_lives, 0)

    def test_custom_restricted_operator(self):
        result = build_quote(
            sample_catalog(),
            QuoteCategory.PF,
            TWO_MINORS,
            restricted_operator="gndi",
            restricted_operator_display="GNDI",
        )
        ids = [o.plan.id for o in result.ranked_offers]
        self.assertNotIn("nosso-enf", ids)
        self.assertIn("fenix-enf", ids)
        self.assertIn("GNDI", result.notices[0].message)

    def test_service_with_explicit_catalog(self):
        service = QuoteService(catalog=sample_catalog(), config=QuoteConfig())
        result = service.quote(QuoteCategory.PF, ONE_ADULT)
        self.assertEqual(
            [o.plan.id for o in result.ranked_offers],
            ["ideal-com", "ideal-sem", "nosso-enf", "fenix-enf", "other-enf"],
        )


if __name__ == '__main__':
    unittest.main()
