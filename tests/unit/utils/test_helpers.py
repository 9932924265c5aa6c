"""Tests unitarios para los helpers de productos e imágenes."""

import pytest

from storefront_sdk.graphql.model import GraphModel
from storefront_sdk.utils.image_helpers import ImageHelpers
from storefront_sdk.utils.product_helpers import ProductHelpers


def variant(variant_id, **options):
    return {
        "id": variant_id,
        "selectedOptions": [{"name": name, "value": value} for name, value in options.items()],
    }


class TestVariantForOptions:
    """Tests para ProductHelpers.variant_for_options."""

    def test_finds_variant_matching_all_options(self):
        product = {"variants": [variant("v1", Size="S", Color="Red"), variant("v2", Size="M", Color="Red")]}

        result = ProductHelpers().variant_for_options(product, {"Size": "M", "Color": "Red"})

        assert result["id"] == "v2"

    def test_returns_none_without_match(self):
        product = {"variants": [variant("v1", Size="S")]}

        assert ProductHelpers().variant_for_options(product, {"Size": "XL"}) is None

    def test_works_with_decoded_models(self):
        options = [GraphModel({"name": "Size", "value": "L"}, "SelectedOption")]
        product = GraphModel(
            {"variants": [GraphModel({"id": "v9", "selectedOptions": options}, "ProductVariant")]}, "Product"
        )

        assert ProductHelpers().variant_for_options(product, {"Size": "L"}).id == "v9"

    def test_product_without_variants(self):
        assert ProductHelpers().variant_for_options({}, {"Size": "L"}) is None


class TestImageForSize:
    """Tests para ImageHelpers.image_for_size."""

    @pytest.mark.parametrize(
        "src,expected",
        [
            ("https://cdn.shopify.com/s/files/shirt.jpg", "https://cdn.shopify.com/s/files/shirt_100x200.jpg"),
            (
                "https://cdn.shopify.com/s/files/shirt.png?v=1540",
                "https://cdn.shopify.com/s/files/shirt_100x200.png?v=1540",
            ),
        ],
    )
    def test_inserts_size_before_extension(self, src, expected):
        assert ImageHelpers().image_for_size({"src": src}, 100, 200) == expected

    def test_accepts_url_and_model(self):
        helpers = ImageHelpers()
        model = GraphModel({"src": "https://cdn/a.gif"}, "Image")

        assert helpers.image_for_size("https://cdn/a.gif", 10, 10) == "https://cdn/a_10x10.gif"
        assert helpers.image_for_size(model, 10, 10) == "https://cdn/a_10x10.gif"

    def test_image_without_src(self):
        assert ImageHelpers().image_for_size({"src": None}, 10, 10) is None
