"""Tests unitarios para la decodificación de respuestas."""

import pytest

from storefront_sdk import queries
from storefront_sdk.graphql.model import Connection, GraphModel, PageAnchor, decode_response
from storefront_sdk.graphql.selection import MUTATION, QUERY, compose


def product_operation(fields):
    return compose(QUERY, lambda root: queries.product_query(fields)(root, "node", "gid://shopify/Product/1"))


def images_page(ids, has_next_page):
    return {
        "pageInfo": {"hasNextPage": has_next_page, "hasPreviousPage": False},
        "edges": [{"cursor": f"cursor-{i}", "node": {"id": i, "src": f"https://cdn/{i}.jpg"}} for i in ids],
    }


class TestGraphModel:
    """Tests para GraphModel."""

    def test_attribute_and_item_access(self):
        model = GraphModel({"title": "Shirt"}, "Product")

        assert model.title == "Shirt"
        assert model["title"] == "Shirt"
        assert "title" in model
        assert model.get("vendor", "none") == "none"

    def test_unselected_field_raises_attribute_error(self):
        model = GraphModel({"title": "Shirt"}, "Product")

        with pytest.raises(AttributeError, match="no selected field 'vendor'"):
            model.vendor

    def test_replace_returns_new_model(self):
        model = GraphModel({"id": "1", "images": [1]}, "Product")

        replaced = model.replace(images=[1, 2])

        assert replaced.images == [1, 2]
        assert model.images == [1]
        assert replaced.type_name == "Product"

    def test_to_dict_is_plain(self):
        nested = GraphModel({"src": "a.jpg"}, "Image")
        model = GraphModel({"id": "1", "image": nested, "images": [nested]}, "Product")

        assert model.to_dict() == {"id": "1", "image": {"src": "a.jpg"}, "images": [{"src": "a.jpg"}]}


class TestDecodeResponse:
    """Tests para decode_response."""

    def test_node_query_decodes_fragment_fields(self):
        operation = product_operation(["id", "title"])
        data = {"node": {"id": "gid://shopify/Product/1", "title": "Shirt", "unexpected": True}}

        model = decode_response(operation, data)

        assert model.node.type_name == "Product"
        assert model.node.to_dict() == {"id": "gid://shopify/Product/1", "title": "Shirt"}

    def test_connection_under_node_is_anchored_on_node(self):
        operation = product_operation(["id", ("images", queries.image_connection_query(["id", "src"]))])
        data = {"node": {"id": "gid://shopify/Product/1", "images": images_page([1, 2], True)}}

        images = decode_response(operation, data).node.images

        assert isinstance(images, Connection)
        assert [image.id for image in images] == [1, 2]
        assert images.has_next_page is True
        assert images.end_cursor == "cursor-2"
        assert images.type_name == "Image"
        assert images.anchor.is_node
        assert images.anchor.node_type == "Product"
        assert images.anchor.node_id == "gid://shopify/Product/1"
        assert images.anchor.path == ()

    def test_connection_under_shop_is_anchored_on_root(self):
        selector = queries.collection_connection_query(["id"])
        operation = compose(QUERY, lambda root: root.add("shop", builder=lambda shop: selector(shop, "collections")))
        data = {"shop": {"collections": {"pageInfo": {"hasNextPage": False}, "edges": []}}}

        collections = decode_response(operation, data).shop.collections

        assert collections == []
        assert collections.end_cursor is None
        assert not collections.anchor.is_node
        assert collections.anchor.pageable
        assert [field.name for field in collections.anchor.path] == ["shop"]

    def test_connection_under_mutation_root_is_not_pageable(self):
        anchor = PageAnchor(root_kind=MUTATION)

        assert not anchor.pageable
        assert PageAnchor.for_node("Checkout", "c1").pageable

    def test_list_items_lose_anchor(self):
        def build(root):
            root.add(
                "shop",
                builder=lambda shop: shop.add(
                    "items", builder=lambda item: item.add_connection("variants", args={"first": 1})
                ),
            )

        operation = compose(QUERY, build)
        data = {"shop": {"items": [{"variants": {"pageInfo": {"hasNextPage": True}, "edges": []}}]}}

        variants = decode_response(operation, data).shop["items"][0].variants

        assert variants.anchor is None

    def test_typename_overrides_fragment_type(self):
        def build_node(node):
            node.add("__typename")
            node.add_inline_fragment_on("Product", lambda product: product.add("title"))

        operation = compose(QUERY, lambda root: root.add("node", args={"id": "x"}, builder=build_node))

        model = decode_response(operation, {"node": {"__typename": "Collection", "title": "Summer"}})

        assert model.node.type_name == "Collection"
        assert model.node.to_dict() == {"__typename": "Collection"}

    def test_null_node(self):
        operation = product_operation(["id"])

        assert decode_response(operation, {"node": None}).node is None

    def test_with_items_keeps_page_metadata(self):
        operation = product_operation(["id", ("images", queries.image_connection_query(["id"]))])
        data = {"node": {"id": "gid://shopify/Product/1", "images": images_page([1], True)}}
        images = decode_response(operation, data).node.images

        copy = images.with_items(["a", "b"])

        assert copy == ["a", "b"]
        assert copy.has_next_page is True
        assert copy.anchor is images.anchor
        assert copy.name == "images"
