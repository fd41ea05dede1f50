"""
Variant-aware image resolution for product pages and listings.

Every function here is pure: it works on already-loaded records and never
touches the database. Colour names are matched case-insensitively after
trimming surrounding whitespace.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from django.conf import settings

DATA_URI_PREFIX = "data:image/"
DEFAULT_PLACEHOLDER_TOKENS: Tuple[str, ...] = ("example.com",)
DEFAULT_SWATCH_HEX = "#CCCCCC"


@dataclass(frozen=True)
class ColorRef:
    """Reference colour: id, display label and optional `#RRGGBB`."""

    id: int
    name: str
    hex_code: Optional[str] = None

    @classmethod
    def from_model(cls, color) -> "ColorRef":
        return cls(id=color.pk, name=color.name, hex_code=color.hex_code or None)


@dataclass(frozen=True)
class ColorImageRef:
    """
    Per-colour photography of a single product.

    Attributes:
        color_id: Colour the images belong to.
        images: Image URLs in display order (may be empty).
        is_primary: Whether this colour is the product's lead colour.
        sort_order: Position among the product's colours.
    """

    color_id: int
    images: Tuple[str, ...] = ()
    is_primary: bool = False
    sort_order: int = 0

    @classmethod
    def from_model(cls, association) -> "ColorImageRef":
        return cls(
            color_id=association.color_id,
            images=tuple(association.images or ()),
            is_primary=association.is_primary,
            sort_order=association.sort_order,
        )


def normalize_color_name(raw: Optional[str]) -> str:
    """Trim and lower-case a colour label for comparisons."""
    if not raw:
        return ""
    return raw.strip().lower()


def find_color(colors: Iterable[ColorRef], name: Optional[str]) -> Optional[ColorRef]:
    """Return the colour whose name matches ``name``, or ``None``."""
    wanted = normalize_color_name(name)
    if not wanted:
        return None
    for color in colors:
        if normalize_color_name(color.name) == wanted:
            return color
    return None


def resolve_display_images(
    product_images: Optional[Sequence[str]],
    color_images: Iterable[ColorImageRef],
    colors: Iterable[ColorRef],
    selected_color_name: Optional[str] = None,
) -> List[str]:
    """
    Pick the ordered image list to render for a product.

    Resolution order:
        1. No colour selected -> product images.
        2. Unknown colour name -> product images.
        3. The colour has an association with at least one image -> its
           images, in stored order.
        4. Anything else -> product images.

    A fresh list is returned on every call; callers may mutate it freely.
    """
    fallback = list(product_images or [])
    color = find_color(colors, selected_color_name)
    if color is None:
        return fallback

    for association in color_images:
        if association.color_id == color.id:
            if association.images:
                return list(association.images)
            break
    return fallback


def _placeholder_tokens() -> Tuple[str, ...]:
    tokens = getattr(settings, "PLACEHOLDER_IMAGE_TOKENS", None)
    return tuple(tokens) if tokens else DEFAULT_PLACEHOLDER_TOKENS


def is_valid_image_url(url: Any, placeholder_tokens: Optional[Sequence[str]] = None) -> bool:
    """
    ``True`` for inline data-URI images and http(s) URLs that do not point
    at a known placeholder host.
    """
    if not isinstance(url, str) or not url:
        return False
    if url.startswith(DATA_URI_PREFIX):
        return True
    if not url.startswith("http"):
        return False
    tokens = placeholder_tokens if placeholder_tokens is not None else _placeholder_tokens()
    return not any(token in url for token in tokens)


def first_valid_image(
    images: Optional[Sequence[str]],
    placeholder_tokens: Optional[Sequence[str]] = None,
) -> str:
    """
    Return the first renderable image.

    When nothing qualifies the first entry is returned verbatim; an empty
    list yields ``""``.
    """
    if not images:
        return ""
    for url in images:
        if is_valid_image_url(url, placeholder_tokens):
            return url
    return images[0]


def color_hex(color_name: Optional[str], colors: Iterable[ColorRef]) -> str:
    """Swatch colour for ``color_name``; neutral grey when unknown or unset."""
    default = getattr(settings, "DEFAULT_COLOR_HEX", DEFAULT_SWATCH_HEX)
    color = find_color(colors, color_name)
    if color is None or not color.hex_code:
        return default
    return color.hex_code


def primary_image(
    product_images: Optional[Sequence[str]],
    color_images: Iterable[ColorImageRef],
) -> str:
    """
    Lead image for listings: first photo of the primary colour (or of the
    first colour by sort order), then the product's own first image.
    """
    ordered = sorted(color_images, key=lambda association: association.sort_order)
    lead = next((association for association in ordered if association.is_primary), None)
    if lead is None and ordered:
        lead = ordered[0]
    if lead is not None and lead.images:
        return lead.images[0]
    if product_images:
        return product_images[0]
    return ""


def build_color_image_map(
    color_images: Iterable[ColorImageRef],
    colors: Iterable[ColorRef],
) -> List[Dict[str, Any]]:
    """
    Serialise the product's colour photography for the storefront.

    Associations whose colour no longer exists are skipped.
    """
    by_id = {color.id: color for color in colors}
    payload: List[Dict[str, Any]] = []
    for association in sorted(color_images, key=lambda item: item.sort_order):
        color = by_id.get(association.color_id)
        if color is None:
            continue
        payload.append(
            {
                "id": color.id,
                "name": color.name,
                "hexCode": color.hex_code,
                "images": list(association.images),
            }
        )
    return payload
