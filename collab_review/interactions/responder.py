"""Response correlation for interaction reply tokens."""

from __future__ import annotations

import threading
import time
from datetime import timedelta
from typing import Any, Callable, Dict, Mapping

import structlog

from collab_review.discord_client import DiscordClient

from .models import Interaction

REPLY_WINDOW = timedelta(seconds=60)


class InteractionResponder:
    """Route every response for an interaction to the right Discord endpoint.

    The first response for a reply token fills the interaction's initial
    response slot. Until the token's entry expires, later responses edit the
    message that filled it, since Discord rejects a second acknowledgement.
    """

    def __init__(
        self,
        *,
        client: DiscordClient,
        application_id: str,
        window: timedelta = REPLY_WINDOW,
        timer: Callable[[], float] | None = None,
    ) -> None:
        if window.total_seconds() <= 0:
            raise ValueError("Reply window must be greater than zero seconds.")

        self._client = client
        self._application_id = application_id
        self._window = window
        self._timer = timer or time.monotonic
        self._lock = threading.Lock()
        self._replied: Dict[str, float] = {}

    def has_replied(self, token: str) -> bool:
        with self._lock:
            self._sweep(self._timer())
            return token in self._replied

    def respond(self, interaction: Interaction, payload: Mapping[str, Any]) -> Any:
        """Acknowledge *interaction* with *payload*, or edit the acknowledgement."""

        log = structlog.get_logger().bind(interaction_id=interaction.id)

        with self._lock:
            now = self._timer()
            self._sweep(now)
            already_replied = interaction.token in self._replied
            if not already_replied:
                self._replied[interaction.token] = now

        if already_replied:
            log.debug("interaction_response_edit")
            return self._client.edit_original_response(
                application_id=interaction.application_id or self._application_id,
                token=interaction.token,
                data=payload.get("data") or {},
            )

        log.debug("interaction_response_initial", response_type=payload.get("type"))
        return self._client.create_interaction_response(
            interaction_id=interaction.id,
            token=interaction.token,
            payload=payload,
        )

    def clear(self, token: str | None = None) -> None:
        """Forget one token, or every token when *token* is None."""

        with self._lock:
            if token is None:
                self._replied.clear()
            else:
                self._replied.pop(token, None)

    def _sweep(self, now: float) -> None:
        threshold = self._window.total_seconds()
        expired = [token for token, marked_at in self._replied.items() if now - marked_at >= threshold]
        for token in expired:
            del self._replied[token]
