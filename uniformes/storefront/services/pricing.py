"""
Company-tier pricing: resolves the discount a customer receives through the
pricing tier (company type) assigned to their company.

`resolve_price` is pure: the company and company-type lookups are supplied
by the caller, and the customer is passed as an explicit `SessionPrincipal`.
`resolve_price_safely` is the boundary wrapper used by the API layer; it
turns any lookup failure into the no-discount result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Callable, Optional, Union

logger = logging.getLogger("storefront.pricing")

PRICE_QUANTUM = Decimal("0.01")
PRICE_ROUNDING = ROUND_HALF_UP

ROLE_CUSTOMER = "customer"
ROLE_ADMIN = "admin"

Amount = Union[Decimal, str, int]


@dataclass(frozen=True)
class SessionPrincipal:
    """Authenticated caller as seen by pricing: id, role and company."""

    id: int
    role: str
    company_id: Optional[int] = None


@dataclass(frozen=True)
class CompanyRef:
    id: int
    name: str
    company_type_id: Optional[int] = None


@dataclass(frozen=True)
class CompanyTypeRef:
    id: int
    name: str
    discount_percentage: Optional[Decimal] = None


@dataclass(frozen=True)
class PriceResolution:
    """
    Outcome of a price resolution.

    Attributes:
        original_price: The base price exactly as given.
        discounted_price: Price after the tier discount (2 decimals).
        discount_percent: Applied percentage, ``Decimal("0")`` when none.
        tier_name: Company type name, ``None`` when no discount applies.
    """

    original_price: Decimal
    discounted_price: Decimal
    discount_percent: Decimal
    tier_name: Optional[str] = None

    @property
    def has_discount(self) -> bool:
        return self.tier_name is not None

    def as_payload(self) -> dict:
        """camelCase fields merged into product API payloads."""
        return {
            "originalPrice": str(self.original_price),
            "discountedPrice": str(self.discounted_price),
            "discount": str(self.discount_percent),
            "companyTypeName": self.tier_name,
        }


CompanyLookup = Callable[[int], Optional[CompanyRef]]
CompanyTypeLookup = Callable[[int], Optional[CompanyTypeRef]]


def to_decimal(value: Amount) -> Decimal:
    """Coerce ``value`` to `Decimal` without rounding; floats are rejected."""
    if isinstance(value, float):
        raise TypeError("Monetary amounts must not be floats")
    return value if isinstance(value, Decimal) else Decimal(str(value).strip())


def to_money(value: Amount) -> Decimal:
    """Coerce ``value`` to a 2-decimal `Decimal`; floats are rejected."""
    return to_decimal(value).quantize(PRICE_QUANTUM, rounding=PRICE_ROUNDING)


def apply_discount(base_price: Amount, percentage: Amount) -> Decimal:
    """``base_price * (1 - percentage / 100)`` rounded half-up to cents."""
    base = to_decimal(base_price)
    pct = percentage if isinstance(percentage, Decimal) else Decimal(str(percentage))
    discounted = base * (Decimal("100") - pct) / Decimal("100")
    return discounted.quantize(PRICE_QUANTUM, rounding=PRICE_ROUNDING)


def no_discount(base_price: Amount) -> PriceResolution:
    price = to_decimal(base_price)
    return PriceResolution(
        original_price=price,
        discounted_price=to_money(price),
        discount_percent=Decimal("0"),
        tier_name=None,
    )


def resolve_price(
    base_price: Amount,
    principal: Optional[SessionPrincipal],
    company_lookup: CompanyLookup,
    company_type_lookup: CompanyTypeLookup,
) -> PriceResolution:
    """
    Resolve the tier price of ``base_price`` for ``principal``.

    Only customers get a discount, and only when their company has a
    company type with a non-zero ``discount_percentage``. Lookups may be
    called at most once each.
    """
    if principal is None or principal.role != ROLE_CUSTOMER:
        return no_discount(base_price)
    if principal.company_id is None:
        return no_discount(base_price)

    company = company_lookup(principal.company_id)
    if company is None or company.company_type_id is None:
        return no_discount(base_price)

    company_type = company_type_lookup(company.company_type_id)
    if company_type is None or not company_type.discount_percentage:
        return no_discount(base_price)

    pct = Decimal(str(company_type.discount_percentage))
    return PriceResolution(
        original_price=to_decimal(base_price),
        discounted_price=apply_discount(base_price, pct),
        discount_percent=pct,
        tier_name=company_type.name,
    )


def resolve_price_safely(
    base_price: Amount,
    principal: Optional[SessionPrincipal],
    company_lookup: CompanyLookup,
    company_type_lookup: CompanyTypeLookup,
) -> PriceResolution:
    """
    `resolve_price` for response enrichment: a failing lookup is logged and
    the undiscounted price is returned instead.
    """
    try:
        return resolve_price(base_price, principal, company_lookup, company_type_lookup)
    except Exception as exc:
        logger.warning(
            "Tier pricing unavailable for principal %s, serving base price",
            getattr(principal, "id", None),
            exc_info=exc,
        )
        return no_discount(base_price)
