"""Tests for the FastAPI app factory and route wiring."""

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from action_gateway.api.dependencies import get_action_context
from action_gateway.api.main import create_app
from action_gateway.config import Settings
from action_gateway.errors import ActionError
from action_gateway.middleware import ActionContext
from action_gateway.models import ActionArguments


class UploadArgs(ActionArguments):
    content: str


def _make_app(**overrides):
    settings = Settings(ACTIONS_ENABLED=True, **overrides)
    app = create_app(settings)

    @app.post("/actions/upload")
    async def upload(args: UploadArgs, action: ActionContext = Depends(get_action_context)):
        if args.content == "fail":
            raise ActionError("Upload refused", code="refused", error_data={"content": args.content})
        return {
            "content": args.content,
            "action": action.name,
            "role": args.action_payload.role if args.action_payload else None,
        }

    return app


ENVELOPE = {
    "request_query": "mutation { upload(args: {content: \"x\"}) { content } }",
    "session_variables": {"x-hasura-role": "editor"},
    "input": {"args": {"content": "x"}},
    "action": {"name": "upload"},
}


class TestCreateApp:
    def test_action_routed_to_handler(self):
        client = TestClient(_make_app())
        response = client.post("/actions", json=ENVELOPE)
        assert response.status_code == 200
        assert response.json() == {"content": "x", "action": "upload", "role": "editor"}

    def test_action_error_returned_in_engine_format(self):
        client = TestClient(_make_app())
        envelope = {**ENVELOPE, "input": {"args": {"content": "fail"}}}
        response = client.post("/actions", json=envelope)
        assert response.status_code == 400
        assert response.json() == {
            "message": "Upload refused",
            "extensions": {"code": "refused", "errorData": {"content": "fail"}},
        }

    def test_rejected_envelope_returns_400(self):
        client = TestClient(_make_app())
        envelope = {**ENVELOPE, "input": {"a": {}, "b": {}}}
        response = client.post("/actions", json=envelope)
        assert response.status_code == 400
        assert "more than 1 arguments" in response.json()["message"]

    def test_custom_path_and_payload_key(self):
        app = create_app(
            Settings(ACTIONS_ENABLED=True, ACTIONS_PATH="/hooks/actions", ACTIONS_PAYLOAD_KEY="_raw")
        )

        @app.post("/hooks/actions/upload")
        async def upload(args: dict):
            return args

        client = TestClient(app)
        response = client.post("/hooks/actions", json=ENVELOPE)
        assert response.status_code == 200
        assert response.json()["_raw"] == ENVELOPE

    def test_disabled_app_does_not_rewrite(self):
        app = create_app(Settings(ACTIONS_ENABLED=False))

        @app.post("/actions")
        async def raw(body: dict):
            return body

        client = TestClient(app)
        response = client.post("/actions", json=ENVELOPE)
        assert response.status_code == 200
        assert response.json() == ENVELOPE

    def test_lifespan_runs(self):
        with TestClient(_make_app()) as client:
            assert client.get("/health").status_code == 200

    def test_module_level_app_importable(self):
        from action_gateway.api.main import app

        client = TestClient(app)
        assert client.get("/health").json()["status"] == "ok"
