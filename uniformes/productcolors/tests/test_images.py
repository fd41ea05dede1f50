"""
Tests for the variant image resolver and related helpers (no database).
"""
from django.test import SimpleTestCase, override_settings

from productcolors.services.images import (
    ColorImageRef,
    ColorRef,
    build_color_image_map,
    color_hex,
    find_color,
    first_valid_image,
    primary_image,
    resolve_display_images,
)

PRODUCT_IMAGES = ["https://cdn.test/p1.jpg", "https://cdn.test/p2.jpg"]
COLORS = [
    ColorRef(id=7, name="Rojo", hex_code="#FF0000"),
    ColorRef(id=8, name="Azul", hex_code="#0000FF"),
    ColorRef(id=9, name="Verde", hex_code=None),
]


class ResolveDisplayImagesTests(SimpleTestCase):
    def test_no_selection_returns_product_images(self):
        result = resolve_display_images(PRODUCT_IMAGES, [], COLORS, None)
        self.assertEqual(result, PRODUCT_IMAGES)
        self.assertIsNot(result, PRODUCT_IMAGES)

    def test_blank_selection_returns_product_images(self):
        result = resolve_display_images(PRODUCT_IMAGES, [], COLORS, "   ")
        self.assertEqual(result, PRODUCT_IMAGES)

    def test_missing_product_images_yield_empty_list(self):
        self.assertEqual(resolve_display_images(None, [], COLORS, None), [])

    def test_unknown_colour_falls_back(self):
        color_images = [ColorImageRef(color_id=7, images=("a.jpg", "b.jpg"))]
        result = resolve_display_images(PRODUCT_IMAGES, color_images, COLORS, "Morado")
        self.assertEqual(result, PRODUCT_IMAGES)

    def test_colour_hit_returns_association_images_in_order(self):
        color_images = [
            ColorImageRef(color_id=8, images=("x.jpg",)),
            ColorImageRef(color_id=7, images=("a.jpg", "b.jpg")),
        ]
        result = resolve_display_images(PRODUCT_IMAGES, color_images, COLORS, "Rojo")
        self.assertEqual(result, ["a.jpg", "b.jpg"])

    def test_colour_match_ignores_case_and_whitespace(self):
        color_images = [ColorImageRef(color_id=7, images=("a.jpg", "b.jpg"))]
        result = resolve_display_images(PRODUCT_IMAGES, color_images, COLORS, "  rOJO ")
        self.assertEqual(result, ["a.jpg", "b.jpg"])

    def test_empty_association_falls_back(self):
        color_images = [ColorImageRef(color_id=7, images=())]
        result = resolve_display_images(PRODUCT_IMAGES, color_images, COLORS, "Rojo")
        self.assertEqual(result, PRODUCT_IMAGES)

    def test_known_colour_without_association_falls_back(self):
        result = resolve_display_images(PRODUCT_IMAGES, [], COLORS, "Azul")
        self.assertEqual(result, PRODUCT_IMAGES)

    def test_repeated_calls_are_equal_and_independent(self):
        color_images = [ColorImageRef(color_id=7, images=("a.jpg", "b.jpg"))]
        first = resolve_display_images(PRODUCT_IMAGES, color_images, COLORS, "Rojo")
        first.append("mutated.jpg")
        second = resolve_display_images(PRODUCT_IMAGES, color_images, COLORS, "Rojo")
        self.assertEqual(second, ["a.jpg", "b.jpg"])


class FirstValidImageTests(SimpleTestCase):
    def test_empty_list(self):
        self.assertEqual(first_valid_image([]), "")
        self.assertEqual(first_valid_image(None), "")

    def test_skips_placeholder_domain(self):
        images = ["https://example.com/stub.png", "https://cdn.test/real.jpg"]
        self.assertEqual(first_valid_image(images), "https://cdn.test/real.jpg")

    def test_accepts_data_uri(self):
        images = ["relative/path.jpg", "data:image/png;base64,AAAA"]
        self.assertEqual(first_valid_image(images), "data:image/png;base64,AAAA")

    def test_nothing_valid_returns_first_verbatim(self):
        images = ["relative/path.jpg", "https://example.com/stub.png"]
        self.assertEqual(first_valid_image(images), "relative/path.jpg")

    @override_settings(PLACEHOLDER_IMAGE_TOKENS=["placehold.it"])
    def test_placeholder_tokens_come_from_settings(self):
        images = ["https://placehold.it/1.png", "https://example.com/2.png"]
        self.assertEqual(first_valid_image(images), "https://example.com/2.png")


class ColorHexTests(SimpleTestCase):
    def test_known_colour(self):
        self.assertEqual(color_hex("azul", COLORS), "#0000FF")

    def test_unknown_colour_gets_neutral_grey(self):
        self.assertEqual(color_hex("Morado", COLORS), "#CCCCCC")

    def test_colour_without_hex_gets_neutral_grey(self):
        self.assertEqual(color_hex("Verde", COLORS), "#CCCCCC")

    def test_find_color_none_for_blank(self):
        self.assertIsNone(find_color(COLORS, ""))


class ListingHelpersTests(SimpleTestCase):
    def test_primary_image_prefers_primary_association(self):
        color_images = [
            ColorImageRef(color_id=8, images=("blue.jpg",), sort_order=0),
            ColorImageRef(color_id=7, images=("red.jpg",), is_primary=True, sort_order=1),
        ]
        self.assertEqual(primary_image(PRODUCT_IMAGES, color_images), "red.jpg")

    def test_primary_image_uses_first_by_sort_order(self):
        color_images = [
            ColorImageRef(color_id=7, images=("red.jpg",), sort_order=2),
            ColorImageRef(color_id=8, images=("blue.jpg",), sort_order=1),
        ]
        self.assertEqual(primary_image(PRODUCT_IMAGES, color_images), "blue.jpg")

    def test_primary_image_falls_back_to_product(self):
        self.assertEqual(primary_image(PRODUCT_IMAGES, []), PRODUCT_IMAGES[0])
        self.assertEqual(primary_image([], []), "")

    def test_color_image_map_skips_missing_colours(self):
        color_images = [
            ColorImageRef(color_id=7, images=("red.jpg",), sort_order=1),
            ColorImageRef(color_id=99, images=("ghost.jpg",), sort_order=0),
        ]
        self.assertEqual(
            build_color_image_map(color_images, COLORS),
            [{"id": 7, "name": "Rojo", "hexCode": "#FF0000", "images": ["red.jpg"]}],
        )
