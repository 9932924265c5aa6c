"""
Mutation guard.

Every mutation selects ``userErrors { message field }`` on its payload, no
matter what the caller's selector asks for, and every mutation response is
checked for user errors before anything else looks at the payload.
"""

import logging
from typing import Any, Dict, Optional

from pydantic import ValidationError

from storefront_sdk.graphql.client import GraphQLResult
from storefront_sdk.graphql.model import GraphModel
from storefront_sdk.graphql.selection import FieldSelector, SelectionBuilder, SelectionSet
from storefront_sdk.utils.error_handler import MutationRejectedException, StorefrontAPIException, UserError

logger = logging.getLogger(__name__)

USER_ERRORS_FIELD = "userErrors"
USER_ERROR_FIELDS = ("message", "field")


def select_user_errors(payload: SelectionSet) -> None:
    def build(user_errors: SelectionSet):
        for name in USER_ERROR_FIELDS:
            user_errors.add(name)

    payload.add(USER_ERRORS_FIELD, builder=build)


def guard(
    operation_field: str,
    args: Optional[Dict[str, Any]],
    payload_selector: FieldSelector,
    payload_field: str,
) -> SelectionBuilder:
    """
    Root builder for a guarded mutation.

    Selects ``operation_field(args)`` with ``userErrors`` followed by
    whatever ``payload_selector`` declares for ``payload_field``. User errors
    are selected again after the caller's selector so a custom selector that
    narrows ``userErrors`` is merged back to the full error shape.
    """

    def build_payload(payload: SelectionSet):
        select_user_errors(payload)
        payload_selector(payload, payload_field)
        select_user_errors(payload)

    def build(root: SelectionSet):
        root.add(operation_field, args=args, builder=build_payload)

    return build


def check(result: GraphQLResult, operation_field: str) -> GraphModel:
    """
    Inspect the raw response of a guarded mutation.

    Returns:
        GraphModel: the payload model when no user errors were reported

    Raises:
        MutationRejectedException: if the server reported user errors
        StorefrontAPIException: if the response has no payload for the mutation
    """
    raw_payload = result.data.get(operation_field)
    if raw_payload is None:
        raise StorefrontAPIException(f"{operation_field} returned no payload")

    raw_errors = raw_payload.get(USER_ERRORS_FIELD) or []
    if raw_errors:
        try:
            user_errors = [UserError.model_validate(error) for error in raw_errors]
        except ValidationError as e:
            raise StorefrontAPIException(f"{operation_field} returned malformed userErrors: {e}") from e

        logger.warning(f"{operation_field} rejected with {len(user_errors)} user error(s)")
        raise MutationRejectedException(operation_field, user_errors)

    return result.model.get(operation_field)
