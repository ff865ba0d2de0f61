"""Application entry point for the collaboration review bot."""

from __future__ import annotations

import json
from pathlib import Path
from uuid import uuid4

from flask import Flask, jsonify, request
from pydantic import ValidationError

import structlog

from collab_review.background import run_async
from collab_review.commands import register_commands
from collab_review.config import AppSettings, get_settings
from collab_review.discord_client import DiscordClient
from collab_review.interactions.models import Interaction, InteractionResponseType, InteractionType
from collab_review.interactions.responder import InteractionResponder
from collab_review.interactions.router import InteractionRouter
from collab_review.logging_config import configure_logging
from collab_review.security import (
    DISCORD_SIGNATURE_HEADER,
    DISCORD_TIMESTAMP_HEADER,
    is_valid_discord_request,
    load_public_key,
)
from collab_review.submissions.workflow import SubmissionWorkflow


_LOGGING_CONFIGURED = False


def _load_version() -> str:
    version_file = Path(__file__).resolve().parent / "VERSION"
    if version_file.exists():
        return version_file.read_text(encoding="utf-8").strip()
    return "unknown"


def _create_router(settings: AppSettings, client: DiscordClient) -> InteractionRouter:
    """Wire the responder, workflow and router around one Discord client."""

    responder = InteractionResponder(client=client, application_id=settings.application_id)
    workflow = SubmissionWorkflow(
        client=client,
        responder=responder,
        submissions_channel_id=settings.submissions_channel_id,
        approved_channel_id=settings.approved_channel_id,
        staff_role_ids=settings.staff_role_ids,
    )
    return InteractionRouter(responder=responder, workflow=workflow)


def _register_error_handlers(flask_app: Flask) -> None:
    """Register a JSON error handler that attaches a trace identifier."""

    @flask_app.errorhandler(Exception)
    def handle_unexpected_error(error: Exception):  # type: ignore[override]
        trace_id = str(uuid4())
        flask_app.logger.exception(
            "Unhandled application error", extra={"trace_id": trace_id}, exc_info=error
        )
        response = jsonify({"error": "internal_server_error", "trace_id": trace_id})
        response.status_code = 500
        return response


def create_app() -> Flask:
    """Create and configure the Flask application."""

    global _LOGGING_CONFIGURED
    if not _LOGGING_CONFIGURED:
        configure_logging()
        _LOGGING_CONFIGURED = True

    settings = get_settings()
    public_key = load_public_key(settings.public_key)
    client = DiscordClient(token=settings.discord_token, base_url=settings.api_base_url)
    router = _create_router(settings, client)

    if settings.register_commands_on_startup:
        register_commands(client, settings)

    flask_app = Flask(__name__)
    flask_app.config["APP_VERSION"] = _load_version()
    flask_app.config["INTERACTION_ROUTER"] = router
    flask_app.logger.setLevel("INFO")

    _register_error_handlers(flask_app)

    @flask_app.route("/interactions", methods=["POST"])
    def interactions():
        raw_body = request.get_data(as_text=True)
        timestamp = request.headers.get(DISCORD_TIMESTAMP_HEADER, "")
        signature = request.headers.get(DISCORD_SIGNATURE_HEADER, "")

        if not is_valid_discord_request(
            public_key=public_key,
            timestamp=timestamp,
            body=raw_body,
            signature=signature,
        ):
            response = jsonify({"error": "invalid_signature"})
            response.status_code = 401
            return response

        log = structlog.get_logger()
        try:
            payload = json.loads(raw_body)
            if payload.get("type") == InteractionType.PING:
                return jsonify({"type": InteractionResponseType.PONG.value})
            interaction = Interaction.model_validate(payload)
        except (json.JSONDecodeError, AttributeError, ValidationError) as exc:
            log.warning("invalid_interaction_payload", error=str(exc))
            response = jsonify({"error": "invalid_payload"})
            response.status_code = 400
            return response

        trace_id = str(uuid4())
        run_async(router.handle, interaction, trace_id=trace_id)
        return "", 202

    @flask_app.route("/healthz", methods=["GET"])
    def healthz():
        health: dict[str, object] = {"ok": True}
        health["version"] = flask_app.config.get("APP_VERSION", "unknown")

        try:
            get_settings()
            health["config"] = "valid"
        except Exception as exc:
            health["config"] = "invalid"
            health["config_error"] = str(exc)
            health["ok"] = False

        status = 200 if health["ok"] else 503
        return jsonify(health), status

    return flask_app


if __name__ == "__main__":  # pragma: no cover - manual execution helper
    application = create_app()
    application.run(host="0.0.0.0", port=3000, debug=True)
