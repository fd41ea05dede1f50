"""
Catalog response enrichment: tier prices and colour photography per product.

Listings and product detail responses are augmented with `originalPrice`,
`discountedPrice`, `discount`, `companyTypeName`, `colorImages` and
`primaryImage`. Enrichment is best-effort: database failures while loading
colour images or pricing tiers degrade to the plain product data.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

from django.apps import apps
from django.db import DatabaseError

from accounts.services import company_lookup, company_type_lookup, principal_from_request
from productcolors.services import (
    ColorImageRef,
    ColorRef,
    build_color_image_map,
    load_color_refs,
    primary_image,
)

from .pricing import (
    CompanyRef,
    CompanyTypeRef,
    PriceResolution,
    SessionPrincipal,
    no_discount,
    resolve_price_safely,
)

logger = logging.getLogger(__name__)

_MISSING = object()


class PricingContext:
    """
    Per-request pricing state: the caller's principal plus memoised company
    and company-type lookups, so a listing of N products costs at most one
    query of each kind.
    """

    def __init__(self, principal: Optional[SessionPrincipal], company_lookup=company_lookup,
                 company_type_lookup=company_type_lookup):
        self.principal = principal
        self._company_lookup = company_lookup
        self._company_type_lookup = company_type_lookup
        self._companies: Dict[int, Optional[CompanyRef]] = {}
        self._company_types: Dict[int, Optional[CompanyTypeRef]] = {}
        self.failure: Optional[Exception] = None

    @classmethod
    def from_request(cls, request) -> "PricingContext":
        return cls(principal_from_request(request))

    def _memoised(self, store, lookup, pk):
        cached = store.get(pk, _MISSING)
        if cached is _MISSING:
            try:
                cached = lookup(pk)
            except Exception as exc:
                self.failure = exc
                raise
            store[pk] = cached
        return cached

    def company(self, company_id: int) -> Optional[CompanyRef]:
        return self._memoised(self._companies, self._company_lookup, company_id)

    def company_type(self, company_type_id: int) -> Optional[CompanyTypeRef]:
        return self._memoised(self._company_types, self._company_type_lookup, company_type_id)

    def resolve(self, base_price) -> PriceResolution:
        # После первой ошибки справочников цены отдаем без скидки до конца запроса
        if self.failure is not None:
            return no_discount(base_price)
        return resolve_price_safely(base_price, self.principal, self.company, self.company_type)


def load_color_image_refs_map(product_ids: Iterable[int]) -> Dict[int, List[ColorImageRef]]:
    """
    Returns mapping {product_id: [ColorImageRef]} ordered by sort order.
    """
    product_ids = [pk for pk in product_ids if pk]
    if not product_ids:
        return {}

    ProductColorImage = apps.get_model('productcolors', 'ProductColorImage')
    refs: Dict[int, List[ColorImageRef]] = defaultdict(list)
    try:
        rows = list(
            ProductColorImage.objects.filter(product_id__in=product_ids)
            .order_by('product_id', 'sort_order', 'id')
        )
    except DatabaseError as exc:
        logger.warning("Failed to load ProductColorImage rows: %s", exc, exc_info=exc)
        return {}

    for row in rows:
        refs[row.product_id].append(ColorImageRef.from_model(row))
    return dict(refs)


def safe_color_refs() -> List[ColorRef]:
    """Colour reference set, or an empty list when it cannot be loaded."""
    try:
        return load_color_refs()
    except DatabaseError as exc:
        logger.warning("Colour reference list unavailable: %s", exc, exc_info=exc)
        return []


def enrichment_fields(
    product,
    pricing: PricingContext,
    color_images: List[ColorImageRef],
    colors: List[ColorRef],
) -> Dict[str, Any]:
    fields = pricing.resolve(product.price).as_payload()
    fields['colorImages'] = build_color_image_map(color_images, colors)
    fields['primaryImage'] = primary_image(product.images, color_images)
    return fields


def enrich_products(products: List[Any], payloads: List[Dict[str, Any]], request) -> List[Dict[str, Any]]:
    """
    Merge enrichment fields into serialised ``payloads`` (same order as
    ``products``). One pricing context and one colour query per call.
    """
    pricing = PricingContext.from_request(request)
    colors = safe_color_refs()
    refs_map = load_color_image_refs_map(product.pk for product in products)

    enriched = []
    for product, payload in zip(products, payloads):
        item = dict(payload)
        item.update(enrichment_fields(product, pricing, refs_map.get(product.pk, []), colors))
        enriched.append(item)
    return enriched
