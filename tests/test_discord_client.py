"""Unit tests for the Discord REST wrapper."""

from pathlib import Path
import json
import sys

import httpx
import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from collab_review.discord_client import DiscordApiError, DiscordClient  # noqa: E402

BASE_URL = "https://discord.test/api/v10"


class RecordingHandler:
    def __init__(self, status_code=200, body=None):
        self.requests = []
        self.status_code = status_code
        self.body = body

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.body is None:
            return httpx.Response(self.status_code)
        return httpx.Response(self.status_code, json=self.body)


def _client(handler) -> DiscordClient:
    transport = httpx.MockTransport(handler)
    return DiscordClient(client=httpx.Client(transport=transport, base_url=BASE_URL))


def test_requires_token_or_client():
    with pytest.raises(ValueError):
        DiscordClient()


def test_token_client_sends_bot_authorization():
    client = DiscordClient(token="secret-token", base_url=BASE_URL)

    assert client.client.headers["Authorization"] == "Bot secret-token"
    assert str(client.client.base_url).rstrip("/") == BASE_URL
    client.close()


def test_create_interaction_response_posts_callback():
    handler = RecordingHandler(status_code=204)
    client = _client(handler)

    result = client.create_interaction_response(
        interaction_id="111",
        token="tok",
        payload={"type": 5, "data": {"flags": 64}},
    )

    assert result is None
    request = handler.requests[0]
    assert request.method == "POST"
    assert request.url.path == "/api/v10/interactions/111/tok/callback"
    assert json.loads(request.content) == {"type": 5, "data": {"flags": 64}}


def test_edit_original_response_patches_webhook_message():
    handler = RecordingHandler(body={"id": "M1"})
    client = _client(handler)

    result = client.edit_original_response(application_id="app", token="tok", data={"content": "hi"})

    assert result == {"id": "M1"}
    request = handler.requests[0]
    assert request.method == "PATCH"
    assert request.url.path == "/api/v10/webhooks/app/tok/messages/@original"
    assert json.loads(request.content) == {"content": "hi"}


def test_create_and_edit_channel_messages():
    handler = RecordingHandler(body={"id": "M2"})
    client = _client(handler)

    client.create_message(channel_id="C1", payload={"content": "new"})
    client.edit_message(channel_id="C1", message_id="M2", payload={"embeds": []})

    post, patch = handler.requests
    assert (post.method, post.url.path) == ("POST", "/api/v10/channels/C1/messages")
    assert (patch.method, patch.url.path) == ("PATCH", "/api/v10/channels/C1/messages/M2")
    assert json.loads(patch.content) == {"embeds": []}


def test_bulk_overwrite_guild_commands_puts_full_list():
    handler = RecordingHandler(body=[])
    client = _client(handler)

    client.bulk_overwrite_guild_commands(
        application_id="app",
        guild_id="G1",
        commands=[{"name": "submit"}, {"name": "prompt"}],
    )

    request = handler.requests[0]
    assert request.method == "PUT"
    assert request.url.path == "/api/v10/applications/app/guilds/G1/commands"
    assert json.loads(request.content) == [{"name": "submit"}, {"name": "prompt"}]


def test_error_status_raises_discord_api_error():
    handler = RecordingHandler(status_code=400, body={"message": "Interaction has already been acknowledged.", "code": 40060})
    client = _client(handler)

    with pytest.raises(DiscordApiError) as err:
        client.create_interaction_response(interaction_id="1", token="tok", payload={"type": 4})

    assert err.value.status_code == 400
    assert err.value.payload["code"] == 40060
    assert err.value.method == "POST"
