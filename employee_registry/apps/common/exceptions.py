"""
Domain errors raised by the registry services and their REST rendering.

Services raise these without knowing about HTTP; ``registry_exception_handler``
(configured as DRF's ``EXCEPTION_HANDLER``) turns them into
``{"message": ..., **extra}`` responses.  Anything else is passed on to the
default DRF handler.
"""
import logging
from typing import Any, Dict, Optional

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base class for errors that are reported to the client."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Internal error'

    def __init__(self, message: Optional[str] = None, **extra: Any):
        self.message = message or self.default_message
        self.extra = extra
        super().__init__(self.message)

    def as_payload(self) -> Dict[str, Any]:
        payload = {'message': self.message}
        payload.update(self.extra)
        return payload


class AuthorizationError(RegistryError):
    """The actor may not perform the requested mutation."""

    status_code = status.HTTP_403_FORBIDDEN
    default_message = 'Forbidden'


class NotFoundError(RegistryError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = 'Employee not found'


class ValidationError(RegistryError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = 'Invalid request'


class PersistenceError(RegistryError):
    """The database refused a read or write; nothing was committed."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = 'Failed to persist changes'


def registry_exception_handler(exc, context):
    if isinstance(exc, RegistryError):
        if exc.status_code >= 500:
            logger.error(f"{type(exc).__name__}: {exc.message}")
        return Response(exc.as_payload(), status=exc.status_code)

    response = exception_handler(exc, context)
    # Keep one error shape for auth and permission failures raised by DRF
    if response is not None and isinstance(response.data, dict) and set(response.data) == {'detail'}:
        response.data = {'message': response.data['detail']}
    return response
