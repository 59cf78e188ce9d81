"""
Action Gateway

Middleware that rewrites GraphQL action webhook envelopes into the plain,
single-argument request bodies expected by action handlers.
"""

__version__ = '0.1.0'

# Re-export key classes for convenience
from .rewriter import EnvelopeRewriter, RewriteResult, transform
from .middleware import ActionContext, ActionEnvelopeMiddleware, BufferedBody
from .models import ActionArguments, ActionData, ActionPayload
from .logging import (
    configure_logging,
    get_logger,
    logging_context,
)
from .errors import (
    ActionGatewayError,
    ActionError,
    EnvelopeError,
    MalformedEnvelope,
    TooManyArguments,
    NonObjectArgument,
)

__all__ = [
    # Version
    '__version__',
    # Rewriting
    'EnvelopeRewriter',
    'RewriteResult',
    'transform',
    # Middleware
    'ActionContext',
    'ActionEnvelopeMiddleware',
    'BufferedBody',
    # Models
    'ActionArguments',
    'ActionData',
    'ActionPayload',
    # Logging
    'configure_logging',
    'get_logger',
    'logging_context',
    # Errors
    'ActionGatewayError',
    'ActionError',
    'EnvelopeError',
    'MalformedEnvelope',
    'TooManyArguments',
    'NonObjectArgument',
]
