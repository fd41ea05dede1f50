"""
Colour and colour-image service helpers.
"""

from .color_service import (
    COLORS_CACHE_KEY,
    ColorImagePayload,
    get_colors_cached,
    invalidate_colors_cache,
    load_color_refs,
    normalize_hex_code,
    replace_product_color_images,
    set_primary_color_image,
)
from .images import (
    ColorImageRef,
    ColorRef,
    build_color_image_map,
    color_hex,
    find_color,
    first_valid_image,
    is_valid_image_url,
    normalize_color_name,
    primary_image,
    resolve_display_images,
)

__all__ = [
    "COLORS_CACHE_KEY",
    "ColorImagePayload",
    "ColorImageRef",
    "ColorRef",
    "build_color_image_map",
    "color_hex",
    "find_color",
    "first_valid_image",
    "get_colors_cached",
    "invalidate_colors_cache",
    "is_valid_image_url",
    "load_color_refs",
    "normalize_color_name",
    "normalize_hex_code",
    "primary_image",
    "replace_product_color_images",
    "resolve_display_images",
    "set_primary_color_image",
]
