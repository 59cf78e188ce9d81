"""
ASGI middleware that rewrites action envelopes before they reach handlers.

Only requests to the configured action path are touched, whatever the method:

1. The body is drained into memory and handed to the EnvelopeRewriter
2. On success the downstream app sees the rewritten body, and the action
   name is stored on ``request.state`` (``action`` and ``action_name``)
3. On failure the request is answered with 400 and never reaches the app

With forwarding on, the request is re-pointed at ``<path>/<action name>`` so
a plain route per action can serve it.
"""

from dataclasses import dataclass
from urllib.parse import quote

from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from .errors import EnvelopeError, MalformedEnvelope
from .logging import get_logger, logging_context
from .rewriter import EnvelopeRewriter, RewriteResult

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActionContext:
    """Request-scoped view of a rewritten action request."""

    name: str
    raw_body: bytes
    body: bytes


class BufferedBody:
    """
    ASGI ``receive`` callable replaying an in-memory body.

    Every read after ``reset()`` starts over from the first byte, so the body
    can be consumed more than once. Once the body is delivered, further calls
    fall through to the server's ``receive`` (disconnect notifications).
    """

    def __init__(self, body: bytes, receive: Receive):
        self.body = body
        self._receive = receive
        self._delivered = False

    def reset(self) -> None:
        self._delivered = False

    async def __call__(self) -> Message:
        if not self._delivered:
            self._delivered = True
            return {"type": "http.request", "body": self.body, "more_body": False}
        return await self._receive()


class ActionEnvelopeMiddleware:
    """Intercepts requests to the action path and rewrites their envelope."""

    def __init__(
        self,
        app: ASGIApp,
        enabled: bool = False,
        path: str = "/actions",
        forward: bool = True,
        rewriter: EnvelopeRewriter | None = None,
    ):
        self.app = app
        self.enabled = enabled
        self.path = path
        self.forward = forward
        self.rewriter = rewriter or EnvelopeRewriter()

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self.enabled or scope["path"] != self.path:
            await self.app(scope, receive, send)
            return

        raw_body = await Request(scope, receive).body()

        try:
            result = self.rewriter.transform(raw_body)
            if self.forward:
                _check_forwardable(result.action_name)
        except EnvelopeError as e:
            logger.warning(
                "actions.rejected",
                request_path=self.path,
                action_name=e.action_name,
                error_code=e.code,
                error=e.message,
            )
            await self._reject(e)(scope, receive, send)
            return

        with logging_context(action_name=result.action_name, request_path=self.path):
            logger.info(
                "actions.rewritten",
                body_bytes=len(result.rewritten_body),
                forwarded=self.forward,
            )
            await self.app(
                self._rewrite_scope(scope, result),
                BufferedBody(result.rewritten_body, receive),
                send,
            )

    def _rewrite_scope(self, scope: Scope, result: RewriteResult) -> Scope:
        context = ActionContext(
            name=result.action_name,
            raw_body=result.raw_body,
            body=result.rewritten_body,
        )
        headers = [
            (key, value)
            for key, value in scope.get("headers", [])
            if key not in (b"content-length", b"transfer-encoding")
        ]
        headers.append((b"content-length", str(len(result.rewritten_body)).encode("latin-1")))

        rewritten = dict(scope)
        rewritten["headers"] = headers
        rewritten["state"] = {
            **scope.get("state", {}),
            "action": context,
            "action_name": result.action_name,
        }
        if self.forward:
            target = f"{self.path.rstrip('/')}/{result.action_name}"
            rewritten["path"] = target
            rewritten["raw_path"] = quote(target).encode("ascii")
        return rewritten

    @staticmethod
    def _reject(error: EnvelopeError) -> JSONResponse:
        extensions = {"code": error.code}
        if error.action_name is not None:
            extensions["action"] = error.action_name
        return JSONResponse(
            status_code=400,
            content={"message": error.message, "extensions": extensions},
        )


def _check_forwardable(action_name: str) -> None:
    # a "/" would re-point the request at a nested route
    if "/" in action_name:
        raise MalformedEnvelope(
            f"Action `{action_name}` cannot be forwarded: its name contains '/'",
            action_name=action_name,
        )
