"""
Typed view of the action envelope delivered by the GraphQL engine.

The rewriter works on raw JSON and never validates through these models.
Handlers use them to read the ``actionPayload`` copy injected into their
argument object.

Wire example::

    {
      "request_query": "mutation { uploadDefinitions(args: {content: \\"foo\\"}) { result } }",
      "session_variables": {"x-hasura-role": "admin"},
      "input": {"args": {"content": "foo"}},
      "action": {"name": "uploadDefinitions"}
    }
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ActionData(BaseModel):
    """Metadata about the invoked action."""

    name: str = Field(..., min_length=1, description='Name of the invoked action')


class ActionPayload(BaseModel):
    """The full envelope as delivered to the action webhook."""

    action: ActionData = Field(..., description='The action being invoked (REQUIRED)')
    input: dict[str, Any] = Field(
        default_factory=dict,
        description='Argument slots of the action; at most one is supported',
    )
    session_variables: dict[str, str] = Field(
        default_factory=dict,
        description='x-hasura-role, x-hasura-user-id, etc.',
    )
    request_query: str | None = Field(
        default=None, description='The GraphQL query that triggered the action'
    )

    @property
    def role(self) -> str | None:
        """Extract x-hasura-role from the session variables if present."""
        return self.session_variables.get('x-hasura-role')

    @property
    def user_id(self) -> str | None:
        """Extract x-hasura-user-id from the session variables if present."""
        return self.session_variables.get('x-hasura-user-id')


class ActionArguments(BaseModel):
    """
    Base class for action argument models.

    Subclasses declare the fields of the action's single input object. The
    envelope copy injected by the gateway lands in ``action_payload``, and
    unknown keys are ignored so argument models don't have to mirror it.
    """

    model_config = ConfigDict(populate_by_name=True, extra='ignore')

    action_payload: ActionPayload | None = Field(
        default=None,
        alias='actionPayload',
        exclude=True,
        description='Envelope copy injected by the gateway',
    )
