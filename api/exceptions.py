import logging

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.exceptions import ValidationError as DRFValidationError
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class MarketplaceError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code = "error"


class ValidationError(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid"


class InvalidStateError(MarketplaceError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Operation not allowed in the current state."
    default_code = "invalid_state"


class UnauthorizedError(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Authentication required."
    default_code = "unauthorized"


class ForbiddenError(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You do not have permission to perform this action."
    default_code = "forbidden"


class NotFoundError(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"


class ConflictError(MarketplaceError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = "Conflict."
    default_code = "conflict"


def _flatten(detail):
    """Collapse DRF's nested error detail into a flat list of strings."""
    if isinstance(detail, dict):
        messages = []
        for field, value in detail.items():
            for message in _flatten(value):
                if field in ("non_field_errors", "detail", "details"):
                    messages.append(message)
                else:
                    messages.append(f"{field}: {message}")
        return messages
    if isinstance(detail, (list, tuple)):
        messages = []
        for value in detail:
            messages.extend(_flatten(value))
        return messages
    return [str(detail)]


def marketplace_exception_handler(exc, context):
    """
    Render every API error as {"message": ...}.

    Serializer validation errors become a list of messages, everything else
    a single string.
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    if isinstance(exc, DRFValidationError):
        message = _flatten(exc.detail)
    else:
        detail = getattr(exc, 'detail', response.data)
        flattened = _flatten(detail)
        message = flattened[0] if len(flattened) == 1 else flattened

    if response.status_code >= 500:
        logger.error("Unhandled API error: %s", message)

    response.data = {"message": message}
    return response
