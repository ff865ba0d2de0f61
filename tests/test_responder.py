from datetime import timedelta

import pytest

from collab_review.interactions.models import Interaction
from collab_review.interactions.replies import deferred_ephemeral, ephemeral_message
from collab_review.interactions.responder import InteractionResponder


class FakeTimer:
    def __init__(self, start: float = 0.0) -> None:
        self._current = start

    def advance(self, seconds: float) -> None:
        self._current += seconds

    def __call__(self) -> float:
        return self._current


class DummyDiscordClient:
    def __init__(self) -> None:
        self.calls = []

    def create_interaction_response(self, **kwargs):
        self.calls.append(("callback", kwargs))
        return None

    def edit_original_response(self, **kwargs):
        self.calls.append(("edit_original", kwargs))
        return {"id": "original"}


def _interaction(token: str = "tok-1", application_id: str | None = "app-1") -> Interaction:
    return Interaction.model_validate(
        {"id": f"id-{token}", "application_id": application_id, "type": 3, "token": token, "guild_id": "G1"}
    )


def _responder(timer: FakeTimer) -> tuple[InteractionResponder, DummyDiscordClient]:
    client = DummyDiscordClient()
    responder = InteractionResponder(client=client, application_id="fallback-app", timer=timer)
    return responder, client


def test_first_response_acknowledges_with_full_payload() -> None:
    responder, client = _responder(FakeTimer())
    interaction = _interaction()

    responder.respond(interaction, deferred_ephemeral())

    assert client.calls == [
        (
            "callback",
            {"interaction_id": "id-tok-1", "token": "tok-1", "payload": {"type": 5, "data": {"flags": 64}}},
        )
    ]
    assert responder.has_replied("tok-1") is True


def test_later_responses_edit_original_with_message_body_only() -> None:
    responder, client = _responder(FakeTimer())
    interaction = _interaction()

    responder.respond(interaction, deferred_ephemeral())
    result = responder.respond(interaction, ephemeral_message("done"))
    responder.respond(interaction, ephemeral_message("again"))

    kinds = [kind for kind, _ in client.calls]
    assert kinds == ["callback", "edit_original", "edit_original"]
    assert client.calls[1][1] == {
        "application_id": "app-1",
        "token": "tok-1",
        "data": {"content": "done", "flags": 64},
    }
    assert result == {"id": "original"}


def test_edit_falls_back_to_configured_application_id() -> None:
    responder, client = _responder(FakeTimer())
    interaction = _interaction(application_id=None)

    responder.respond(interaction, deferred_ephemeral())
    responder.respond(interaction, ephemeral_message("done"))

    assert client.calls[1][1]["application_id"] == "fallback-app"


def test_entry_expires_after_window() -> None:
    timer = FakeTimer()
    responder, client = _responder(timer)
    interaction = _interaction()

    responder.respond(interaction, deferred_ephemeral())
    timer.advance(59)
    responder.respond(interaction, ephemeral_message("still editing"))
    timer.advance(1)
    responder.respond(interaction, ephemeral_message("acknowledged again"))

    kinds = [kind for kind, _ in client.calls]
    assert kinds == ["callback", "edit_original", "callback"]


def test_tokens_are_tracked_independently() -> None:
    responder, client = _responder(FakeTimer())

    responder.respond(_interaction("tok-1"), deferred_ephemeral())
    responder.respond(_interaction("tok-2"), deferred_ephemeral())

    kinds = [kind for kind, _ in client.calls]
    assert kinds == ["callback", "callback"]


def test_token_is_marked_even_when_acknowledgement_fails() -> None:
    class FailingClient(DummyDiscordClient):
        def create_interaction_response(self, **kwargs):
            super().create_interaction_response(**kwargs)
            raise RuntimeError("network down")

    client = FailingClient()
    responder = InteractionResponder(client=client, application_id="app", timer=FakeTimer())
    interaction = _interaction()

    with pytest.raises(RuntimeError):
        responder.respond(interaction, deferred_ephemeral())

    responder.respond(interaction, ephemeral_message("error"))
    assert [kind for kind, _ in client.calls] == ["callback", "edit_original"]


def test_clear_forgets_tokens() -> None:
    responder, _ = _responder(FakeTimer())

    responder.respond(_interaction("tok-1"), deferred_ephemeral())
    responder.respond(_interaction("tok-2"), deferred_ephemeral())
    responder.clear("tok-1")

    assert responder.has_replied("tok-1") is False
    assert responder.has_replied("tok-2") is True

    responder.clear()
    assert responder.has_replied("tok-2") is False


def test_invalid_window_raises_value_error() -> None:
    with pytest.raises(ValueError):
        InteractionResponder(client=DummyDiscordClient(), application_id="app", window=timedelta(seconds=0))
