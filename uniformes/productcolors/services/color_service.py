"""
Colour reference data: HEX normalisation, cached colour list and the
clear-then-recreate assignment of per-colour product photography.
"""
from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from django.conf import settings
from django.db import transaction

from cache_utils import cached_fragment, invalidate_fragment
from productcolors.models import Color, ProductColorImage

from .images import ColorRef

logger = logging.getLogger(__name__)

HEX_RE = re.compile(r"^[0-9A-F]{6}$")

COLORS_CACHE_KEY = "productcolors:colors:v1"


def normalize_hex_code(raw: Optional[str]) -> Optional[str]:
    """
    Normalise HEX values to the `#RRGGBB` format.

    Accepts values with/without leading '#', ignores whitespace, and returns
    ``None`` for empty inputs. Raises ValueError for invalid hex strings.
    """
    if raw is None:
        return None
    value = raw.strip()
    if not value:
        return None
    if value.startswith("#"):
        value = value[1:]
    if not HEX_RE.fullmatch(value.upper()):
        raise ValueError(f"Invalid HEX colour value: {raw!r}")
    return f"#{value.upper()}"


def _serialize_colors() -> List[dict]:
    return [
        {"id": color.pk, "name": color.name, "hexCode": color.hex_code}
        for color in Color.objects.order_by("name")
    ]


def get_colors_cached() -> List[dict]:
    """
    Full colour list as API payload, kept in the fragment cache.

    Invalidated by `productcolors.signals` on every colour write.
    """
    timeout = getattr(settings, "COLORS_CACHE_TIMEOUT", 3600)
    return cached_fragment(COLORS_CACHE_KEY, _serialize_colors, timeout)


def invalidate_colors_cache() -> None:
    invalidate_fragment(COLORS_CACHE_KEY)


def load_color_refs() -> List[ColorRef]:
    """Colour reference set for the image resolvers (served from cache)."""
    return [
        ColorRef(id=item["id"], name=item["name"], hex_code=item["hexCode"] or None)
        for item in get_colors_cached()
    ]


@dataclass
class ColorImagePayload:
    """
    One colour's photography as submitted by the admin assignment form.

    Attributes:
        color: Target colour.
        images: Image URLs in display order.
        is_primary: Whether this is the product's lead colour.
        sort_order: Desired position (``None`` keeps submission order).
    """

    color: Color
    images: List[str] = field(default_factory=list)
    is_primary: bool = False
    sort_order: Optional[int] = None


def _clean_images(images: Iterable[str]) -> List[str]:
    cleaned: List[str] = []
    for url in images or []:
        if not isinstance(url, str):
            continue
        url = url.strip()
        if url:
            cleaned.append(url)
    return cleaned


@transaction.atomic
def replace_product_color_images(
    product,
    payloads: Sequence[ColorImagePayload],
) -> List[ProductColorImage]:
    """
    Replace the whole colour-image set of ``product``.

    Existing rows are deleted and the submitted set is inserted in one
    transaction. At most one row ends up primary: the first payload flagged
    as such.
    """
    deleted, _ = ProductColorImage.objects.filter(product=product).delete()

    rows: List[ProductColorImage] = []
    primary_taken = False
    for index, payload in enumerate(payloads):
        is_primary = bool(payload.is_primary) and not primary_taken
        primary_taken = primary_taken or is_primary
        rows.append(
            ProductColorImage(
                product=product,
                color=payload.color,
                images=_clean_images(payload.images),
                is_primary=is_primary,
                sort_order=payload.sort_order if payload.sort_order is not None else index,
            )
        )
    created = ProductColorImage.objects.bulk_create(rows)
    logger.info(
        "Colour images replaced for product %s: %s removed, %s created",
        product.pk,
        deleted,
        len(created),
    )
    return list(product.color_images.select_related("color").order_by("sort_order", "id"))


def set_primary_color_image(association: ProductColorImage) -> None:
    """Mark ``association`` as the product's only primary colour."""
    ProductColorImage.objects.filter(product_id=association.product_id).exclude(
        pk=association.pk
    ).update(is_primary=False)
