"""
Envelope rewriter: turns an action envelope into the handler's argument body.

Flow:
1. Parse the raw body and read ``action.name``
2. Check that ``input`` holds at most one argument and that it is an object
3. Parse the raw body a second time and attach that copy under ``actionPayload``
4. Serialize the argument object as the new request body

The embedded copy comes from its own parse of the raw bytes, so handlers may
mutate the argument object (default filling, etc.) without touching the
envelope copy, and the other way round.
"""

import json
from dataclasses import dataclass
from typing import Any

from .errors import MalformedEnvelope, NonObjectArgument, TooManyArguments

DEFAULT_PAYLOAD_KEY = 'actionPayload'


@dataclass(frozen=True)
class RewriteResult:
    """Outcome of rewriting one envelope."""

    rewritten_body: bytes
    action_name: str
    raw_body: bytes
    argument: dict[str, Any]


class EnvelopeRewriter:
    """
    Rewrites action envelopes into single-argument request bodies.

    Stateless apart from the reserved key name; one instance can serve any
    number of concurrent requests.
    """

    def __init__(self, payload_key: str = DEFAULT_PAYLOAD_KEY):
        """
        Args:
            payload_key: Key under which the envelope copy is injected
        """
        self.payload_key = payload_key

    def transform(self, raw_body: bytes) -> RewriteResult:
        """
        Rewrite an envelope into its argument body.

        Args:
            raw_body: The request body exactly as received

        Returns:
            RewriteResult with the new body and the extracted action name

        Raises:
            MalformedEnvelope: Body is not a JSON object or lacks action/input
            TooManyArguments: ``input`` has more than one key
            NonObjectArgument: The single argument is not a JSON object
        """
        envelope = _parse_envelope(raw_body)
        action_name = _read_action_name(envelope)
        argument = _read_argument(envelope, action_name)

        rewritten = dict(argument)
        rewritten[self.payload_key] = _parse_envelope(raw_body)

        try:
            body = json.dumps(rewritten, separators=(',', ':'), ensure_ascii=False)
        except RecursionError as e:
            raise MalformedEnvelope(
                f"Action `{action_name}` argument is nested too deeply to serialize",
                action_name=action_name,
            ) from e
        return RewriteResult(
            rewritten_body=body.encode('utf-8'),
            action_name=action_name,
            raw_body=raw_body,
            argument=rewritten,
        )


def _parse_envelope(raw_body: bytes) -> dict[str, Any]:
    try:
        envelope = json.loads(raw_body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MalformedEnvelope(f"Action request body is not valid JSON: {e}") from e
    except RecursionError as e:
        raise MalformedEnvelope('Action request body is nested too deeply to parse as JSON') from e

    if not isinstance(envelope, dict):
        raise MalformedEnvelope(
            'Action request body must be a JSON object',
            context={'body_type': type(envelope).__name__},
        )
    return envelope


def _read_action_name(envelope: dict[str, Any]) -> str:
    action = envelope.get('action')
    if not isinstance(action, dict):
        raise MalformedEnvelope('Action request is missing the `action` object')

    name = action.get('name')
    if not isinstance(name, str) or not name:
        raise MalformedEnvelope('Action request is missing `action.name`')
    return name


def _read_argument(envelope: dict[str, Any], action_name: str) -> dict[str, Any]:
    arguments = envelope.get('input')
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise MalformedEnvelope(
            f"Action `{action_name}` has an `input` that is not an object",
            action_name=action_name,
        )

    if len(arguments) > 1:
        raise TooManyArguments(
            f"Action `{action_name}` has more than 1 arguments. "
            f"You need to define actions with a single argument of an object type.",
            action_name=action_name,
            context={'arguments': sorted(arguments)},
        )

    if not arguments:
        return {}

    (argument,) = arguments.values()
    if not isinstance(argument, dict):
        raise NonObjectArgument(
            f"Action `{action_name}` must have a single argument of an object type.",
            action_name=action_name,
            context={'argument_type': type(argument).__name__},
        )
    return argument


_default_rewriter = EnvelopeRewriter()


def transform(raw_body: bytes) -> RewriteResult:
    """Rewrite ``raw_body`` using the default ``actionPayload`` key."""
    return _default_rewriter.transform(raw_body)
