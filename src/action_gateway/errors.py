"""
Custom exceptions for the action gateway.

Provides:
- Typed envelope errors raised while rewriting an action request
- ActionError for business handlers to report failures back to the engine
- Error context preservation for debugging
"""

from typing import Any


class ActionGatewayError(Exception):
    """Base exception for all action gateway errors."""

    def __init__(self, message: str, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        if self.context:
            return f"{self.message} | context={self.context}"
        return self.message


# =============================================================================
# Envelope Errors
# =============================================================================


class EnvelopeError(ActionGatewayError):
    """Base class for envelopes that cannot be rewritten into an argument body."""

    code = 'invalid_envelope'

    def __init__(
        self,
        message: str,
        action_name: str | None = None,
        context: dict[str, Any] | None = None,
    ):
        super().__init__(message, context=context)
        self.action_name = action_name


class MalformedEnvelope(EnvelopeError):
    """Body is not JSON, not an object, or lacks a usable action name or input."""

    code = 'malformed_envelope'


class TooManyArguments(EnvelopeError):
    """The envelope's input carries more than one argument slot."""

    code = 'too_many_arguments'


class NonObjectArgument(EnvelopeError):
    """The single argument is a scalar or an array instead of an object."""

    code = 'non_object_argument'


# =============================================================================
# Handler Errors
# =============================================================================


class ActionError(ActionGatewayError):
    """
    Raised by action handlers to return an error to the action engine.

    Converted into an HTTP 400 response shaped the way the engine expects:
    ``{"message": ..., "extensions": {"code": ..., "errorData": ...}}``.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        error_data: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.error_data = error_data

    def to_dict(self) -> dict[str, Any]:
        """Serialize into the engine's error body."""
        extensions: dict[str, Any] = {}
        if self.code is not None:
            extensions['code'] = self.code
        if self.error_data is not None:
            extensions['errorData'] = self.error_data
        return {'message': self.message, 'extensions': extensions}
