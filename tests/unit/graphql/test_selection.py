"""Tests unitarios para la composición de árboles de selección."""

import pytest

from storefront_sdk import queries
from storefront_sdk.graphql.selection import (
    MUTATION,
    QUERY,
    EnumValue,
    FrozenSelectionError,
    Operation,
    SelectionSet,
    compose,
    render_value,
)
from storefront_sdk.schemas import CheckoutLineItemInput


class TestRenderValue:
    """Tests para el renderizado de literales de input."""

    def test_scalars(self):
        assert render_value(None) == "null"
        assert render_value(True) == "true"
        assert render_value(250) == "250"
        assert render_value(1.5) == "1.5"
        assert render_value('say "hi"') == '"say \\"hi\\""'

    def test_enum_is_rendered_bare(self):
        assert render_value(EnumValue("BEST_SELLING")) == "BEST_SELLING"

    def test_nested_objects_and_lists(self):
        value = {"lineItems": [{"variantId": "v1", "quantity": 2}], "note": None}

        assert render_value(value) == '{lineItems: [{variantId: "v1", quantity: 2}], note: null}'

    def test_pydantic_input_uses_aliases_and_skips_unset(self):
        line_item = CheckoutLineItemInput(variant_id="gid://shopify/ProductVariant/1")

        assert render_value(line_item) == '{variantId: "gid://shopify/ProductVariant/1", quantity: 1}'

    def test_unsupported_value_raises(self):
        with pytest.raises(TypeError):
            render_value(object())


class TestSelectionSet:
    """Tests para SelectionSet."""

    def test_render_fields_with_args_and_alias(self):
        selection = SelectionSet()
        selection.add("title")
        selection.add("images", args={"first": 2}, builder=lambda images: images.add("src"), alias="thumbs")

        assert selection.to_graphql() == "{ title thumbs: images(first: 2) { src } }"

    def test_same_field_is_merged(self):
        selection = SelectionSet()
        selection.add("variant", builder=lambda variant: variant.add("id"))
        selection.add("variant", builder=lambda variant: variant.add("title"))
        selection.add("variant", builder=lambda variant: variant.add("id"))

        assert selection.to_graphql() == "{ variant { id title } }"

    def test_conflicting_args_raise(self):
        selection = SelectionSet()
        selection.add("images", args={"first": 10})

        with pytest.raises(ValueError, match="Conflicting selections"):
            selection.add("images", args={"first": 20})

    def test_connection_shape(self):
        selection = SelectionSet()
        field = selection.add_connection("variants", args={"first": 250}, node_builder=lambda node: node.add("title"))

        assert field.selection_set.is_connection()
        assert selection.to_graphql() == (
            "{ variants(first: 250) { pageInfo { hasNextPage hasPreviousPage } "
            "edges { cursor node { title } } } }"
        )

    def test_connection_without_node_builder_selects_id(self):
        selection = SelectionSet()
        selection.add_connection("lineItems")

        assert "node { id }" in selection.to_graphql()

    def test_inline_fragments_are_merged_by_type(self):
        selection = SelectionSet()
        selection.add_inline_fragment_on("Product", lambda product: product.add("id"))
        selection.add_inline_fragment_on("Product", lambda product: product.add("title"))

        assert selection.to_graphql() == "{ ... on Product { id title } }"

    def test_plain_object_is_not_a_connection(self):
        selection = SelectionSet()
        selection.add("edges", builder=lambda edges: edges.add("cursor"))

        assert not selection.is_connection()

    def test_frozen_tree_rejects_changes(self):
        selection = SelectionSet()
        product = selection.add("product", builder=lambda p: p.add("id"))
        selection.freeze()

        with pytest.raises(FrozenSelectionError):
            selection.add("shop")
        with pytest.raises(FrozenSelectionError):
            product.selection_set.add("title")


class TestCompose:
    """Tests para compose."""

    def test_query_document(self):
        operation = compose(QUERY, lambda root: queries.shop_query(["name"])(root, "shop"))

        assert operation.to_graphql() == "query { shop { name } }"
        assert operation.root_type == "QueryRoot"

    def test_mutation_root_type(self):
        operation = compose(MUTATION, lambda root: root.add("checkoutCreate", args={"input": {}}))

        assert operation.to_graphql() == "mutation { checkoutCreate(input: {}) }"
        assert operation.root_type == "Mutation"

    def test_composing_twice_gives_equal_trees(self):
        def build(root):
            root.add("shop", builder=lambda shop: queries.product_connection_query()(shop, "products"))

        first = compose(QUERY, build)
        second = compose(QUERY, build)

        assert first == second
        assert first.to_graphql() == second.to_graphql()
        assert first.selection_set is not second.selection_set

    def test_unknown_kind_raises(self):
        with pytest.raises(ValueError, match="Unknown operation kind"):
            compose("subscription", lambda root: None)
        with pytest.raises(ValueError):
            Operation("subscription", SelectionSet())

    def test_node_selector_uses_inline_fragment(self):
        operation = compose(QUERY, lambda root: queries.collection_query(["id", "title"])(root, "node", "gid://1"))

        assert operation.to_graphql() == 'query { node(id: "gid://1") { ... on Collection { id title } } }'
