"""Tests unitarios para el guard de mutaciones."""

import pytest

from storefront_sdk import queries
from storefront_sdk.graphql.client import GraphQLResult
from storefront_sdk.graphql.model import decode_response
from storefront_sdk.graphql.selection import MUTATION, SelectionSet, compose
from storefront_sdk.services.mutation_guard import check, guard, select_user_errors
from storefront_sdk.utils.error_handler import ErrorCode, MutationRejectedException, StorefrontAPIException


def guarded(selector, args=None):
    return compose(MUTATION, guard("checkoutCreate", args if args is not None else {"input": {}}, selector, "checkout"))


def result_for(operation, data):
    return GraphQLResult(decode_response(operation, data), data)


class TestGuard:
    """Tests para la inyección de userErrors."""

    def test_user_errors_are_selected_before_payload(self):
        operation = guarded(queries.checkout_query(["id"]))

        assert operation.to_graphql() == (
            "mutation { checkoutCreate(input: {}) { userErrors { message field } checkout { id } } }"
        )

    def test_narrowed_user_errors_are_completed(self):
        def selector(payload, field_name, node_id=None):
            payload.add("userErrors", builder=lambda errors: errors.add("field"))
            queries.checkout_query(["id"])(payload, field_name)

        operation = guarded(selector)

        assert operation.to_graphql() == (
            "mutation { checkoutCreate(input: {}) { userErrors { message field } checkout { id } } }"
        )

    def test_select_user_errors_is_idempotent(self):
        payload = SelectionSet()
        select_user_errors(payload)
        select_user_errors(payload)

        assert payload.to_graphql() == "{ userErrors { message field } }"

    def test_guarded_composition_is_repeatable(self):
        assert guarded(queries.checkout_query()) == guarded(queries.checkout_query())


class TestCheck:
    """Tests para la verificación de userErrors."""

    def test_returns_payload_without_user_errors(self):
        operation = guarded(queries.checkout_query(["id"]))
        data = {"checkoutCreate": {"userErrors": [], "checkout": {"id": "gid://shopify/Checkout/1"}}}

        payload = check(result_for(operation, data), "checkoutCreate")

        assert payload.checkout.id == "gid://shopify/Checkout/1"

    def test_user_errors_reject_mutation(self):
        operation = guarded(queries.checkout_query(["id"]))
        data = {
            "checkoutCreate": {
                "userErrors": [
                    {"message": "Variant is invalid", "field": ["lineItems", "0", "variantId"]},
                    {"message": "Checkout is locked", "field": None},
                ],
                "checkout": {"id": "gid://shopify/Checkout/1"},
            }
        }

        with pytest.raises(MutationRejectedException) as exc_info:
            check(result_for(operation, data), "checkoutCreate")

        error = exc_info.value
        assert error.error_code == ErrorCode.MUTATION_REJECTED
        assert error.operation == "checkoutCreate"
        assert [e.message for e in error.user_errors] == ["Variant is invalid", "Checkout is locked"]
        assert error.serialized_errors == (
            '[{"field": ["lineItems", "0", "variantId"], "message": "Variant is invalid"}, '
            '{"field": null, "message": "Checkout is locked"}]'
        )

    def test_missing_payload_raises(self):
        operation = guarded(queries.checkout_query(["id"]))

        with pytest.raises(StorefrontAPIException, match="returned no payload"):
            check(result_for(operation, {"checkoutCreate": None}), "checkoutCreate")

    def test_malformed_user_errors_raise(self):
        operation = guarded(queries.checkout_query(["id"]))
        data = {"checkoutCreate": {"userErrors": [{"field": ["email"]}], "checkout": None}}

        with pytest.raises(StorefrontAPIException, match="malformed userErrors"):
            check(result_for(operation, data), "checkoutCreate")
