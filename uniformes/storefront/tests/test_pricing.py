"""
Tests for the tier price resolver (pure, no database).
"""
from decimal import Decimal

from django.test import SimpleTestCase

from storefront.services.catalog_helpers import PricingContext
from storefront.services.pricing import (
    ROLE_ADMIN,
    ROLE_CUSTOMER,
    CompanyRef,
    CompanyTypeRef,
    SessionPrincipal,
    apply_discount,
    resolve_price,
    resolve_price_safely,
    to_money,
)

CUSTOMER = SessionPrincipal(id=1, role=ROLE_CUSTOMER, company_id=10)
ACME = CompanyRef(id=10, name="Acme Corp", company_type_id=3)
GOLD = CompanyTypeRef(id=3, name="Gold", discount_percentage=Decimal("20.00"))


def lookup_from(*refs):
    by_id = {ref.id: ref for ref in refs}
    calls = []

    def lookup(pk):
        calls.append(pk)
        return by_id.get(pk)

    lookup.calls = calls
    return lookup


def failing_lookup(pk):
    raise RuntimeError("database unavailable")


class ResolvePriceTests(SimpleTestCase):
    def test_anonymous_gets_base_price(self):
        result = resolve_price("100.00", None, lookup_from(), lookup_from())
        self.assertEqual(result.original_price, Decimal("100.00"))
        self.assertEqual(result.discounted_price, Decimal("100.00"))
        self.assertEqual(result.discount_percent, Decimal("0"))
        self.assertIsNone(result.tier_name)
        self.assertFalse(result.has_discount)

    def test_admin_gets_no_discount(self):
        admin = SessionPrincipal(id=2, role=ROLE_ADMIN, company_id=10)
        companies = lookup_from(ACME)
        result = resolve_price("50.00", admin, companies, lookup_from(GOLD))
        self.assertEqual(result.discounted_price, Decimal("50.00"))
        self.assertEqual(companies.calls, [])

    def test_fifteen_percent_tier(self):
        silver = CompanyTypeRef(id=3, name="Silver", discount_percentage=Decimal("15"))
        result = resolve_price("200.00", CUSTOMER, lookup_from(ACME), lookup_from(silver))
        self.assertEqual(result.discounted_price, Decimal("170.00"))
        self.assertEqual(result.discount_percent, Decimal("15"))
        self.assertEqual(result.tier_name, "Silver")

    def test_gold_customer_scenario(self):
        result = resolve_price("50.00", CUSTOMER, lookup_from(ACME), lookup_from(GOLD))
        self.assertEqual(result.as_payload(), {
            "originalPrice": "50.00",
            "discountedPrice": "40.00",
            "discount": "20.00",
            "companyTypeName": "Gold",
        })

    def test_company_without_type(self):
        company = CompanyRef(id=10, name="Acme Corp", company_type_id=None)
        types = lookup_from(GOLD)
        result = resolve_price("80.00", CUSTOMER, lookup_from(company), types)
        self.assertEqual(result.discount_percent, Decimal("0"))
        self.assertEqual(result.discounted_price, Decimal("80.00"))
        self.assertEqual(types.calls, [])

    def test_customer_without_company(self):
        principal = SessionPrincipal(id=5, role=ROLE_CUSTOMER, company_id=None)
        companies = lookup_from(ACME)
        result = resolve_price("80.00", principal, companies, lookup_from(GOLD))
        self.assertIsNone(result.tier_name)
        self.assertEqual(companies.calls, [])

    def test_zero_or_null_percentage(self):
        for pct in (None, Decimal("0")):
            tier = CompanyTypeRef(id=3, name="Basic", discount_percentage=pct)
            result = resolve_price("80.00", CUSTOMER, lookup_from(ACME), lookup_from(tier))
            self.assertIsNone(result.tier_name)

    def test_missing_company_type(self):
        result = resolve_price("80.00", CUSTOMER, lookup_from(ACME), lookup_from())
        self.assertEqual(result.discounted_price, Decimal("80.00"))

    def test_resolution_is_idempotent(self):
        args = ("123.45", CUSTOMER, lookup_from(ACME), lookup_from(GOLD))
        self.assertEqual(resolve_price(*args), resolve_price(*args))

    def test_rounds_half_up(self):
        self.assertEqual(apply_discount("10.05", Decimal("50")), Decimal("5.03"))
        self.assertEqual(to_money(7), Decimal("7.00"))

    def test_floats_rejected(self):
        with self.assertRaises(TypeError):
            to_money(9.99)

    def test_original_price_is_not_rounded(self):
        for principal in (None, CUSTOMER):
            result = resolve_price("19.999", principal, lookup_from(ACME), lookup_from(GOLD))
            self.assertEqual(str(result.original_price), "19.999")

        result = resolve_price("19.999", CUSTOMER, lookup_from(ACME), lookup_from(GOLD))
        self.assertEqual(result.discounted_price, Decimal("16.00"))
        self.assertEqual(resolve_price("19.999", None, lookup_from(), lookup_from()).discounted_price,
                         Decimal("20.00"))


class ResolvePriceSafelyTests(SimpleTestCase):
    def test_lookup_failure_degrades_to_base_price(self):
        with self.assertLogs("storefront.pricing", level="WARNING"):
            result = resolve_price_safely("50.00", CUSTOMER, failing_lookup, lookup_from(GOLD))
        self.assertEqual(result.discounted_price, Decimal("50.00"))
        self.assertIsNone(result.tier_name)


class PricingContextTests(SimpleTestCase):
    def test_lookups_are_memoised(self):
        companies = lookup_from(ACME)
        types = lookup_from(GOLD)
        pricing = PricingContext(CUSTOMER, companies, types)

        prices = [pricing.resolve(price).discounted_price for price in ("50.00", "100.00", "10.00")]

        self.assertEqual(prices, [Decimal("40.00"), Decimal("80.00"), Decimal("8.00")])
        self.assertEqual(companies.calls, [10])
        self.assertEqual(types.calls, [3])

    def test_failed_lookup_is_not_repeated(self):
        calls = []

        def broken(pk):
            calls.append(pk)
            raise RuntimeError("database unavailable")

        pricing = PricingContext(CUSTOMER, broken, lookup_from(GOLD))
        with self.assertLogs("storefront.pricing", level="WARNING") as logs:
            prices = [pricing.resolve(price).discounted_price for price in ("50.00", "100.00", "10.00")]

        self.assertEqual(prices, [Decimal("50.00"), Decimal("100.00"), Decimal("10.00")])
        self.assertEqual(calls, [10])
        self.assertEqual(len(logs.records), 1)
