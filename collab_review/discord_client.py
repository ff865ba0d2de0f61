"""Thin wrapper utilities around the Discord REST API."""

from __future__ import annotations

from typing import Any, Mapping, Sequence

import httpx

DEFAULT_API_BASE_URL = "https://discord.com/api/v10"
DEFAULT_TIMEOUT = 10.0


class DiscordApiError(Exception):
    """Raised when Discord answers a REST call with a non-success status."""

    def __init__(self, status_code: int, payload: Any, *, method: str = "", path: str = "") -> None:
        self.status_code = status_code
        self.payload = payload
        self.method = method
        self.path = path
        # Interaction paths embed the reply token; keep them out of the message.
        super().__init__(f"Discord {method} request failed with HTTP {status_code}: {payload}")


class DiscordClient:
    """Encapsulate the Discord REST calls the bot needs for easier testing."""

    def __init__(
        self,
        *,
        token: str | None = None,
        client: httpx.Client | None = None,
        base_url: str = DEFAULT_API_BASE_URL,
    ) -> None:
        if client is None and token is None:
            raise ValueError("Either an instantiated client or a bot token must be provided.")

        self._client = client or httpx.Client(
            base_url=base_url,
            headers={"Authorization": f"Bot {token}"},
            timeout=DEFAULT_TIMEOUT,
        )

    @property
    def client(self) -> httpx.Client:
        """Expose the underlying httpx client for advanced use cases."""

        return self._client

    def close(self) -> None:
        self._client.close()

    def create_interaction_response(
        self,
        *,
        interaction_id: str,
        token: str,
        payload: Mapping[str, Any],
    ) -> Any:
        """Send the initial acknowledgement for an interaction."""

        return self._request(
            "POST",
            f"/interactions/{interaction_id}/{token}/callback",
            json=dict(payload),
        )

    def edit_original_response(
        self,
        *,
        application_id: str,
        token: str,
        data: Mapping[str, Any],
    ) -> Any:
        """Edit the message that filled an interaction's response slot."""

        return self._request(
            "PATCH",
            f"/webhooks/{application_id}/{token}/messages/@original",
            json=dict(data),
        )

    def create_message(self, *, channel_id: str, payload: Mapping[str, Any]) -> Any:
        """Post a new message to a channel."""

        return self._request("POST", f"/channels/{channel_id}/messages", json=dict(payload))

    def edit_message(self, *, channel_id: str, message_id: str, payload: Mapping[str, Any]) -> Any:
        """Edit an existing channel message in place."""

        return self._request(
            "PATCH",
            f"/channels/{channel_id}/messages/{message_id}",
            json=dict(payload),
        )

    def bulk_overwrite_guild_commands(
        self,
        *,
        application_id: str,
        guild_id: str,
        commands: Sequence[Mapping[str, Any]],
    ) -> Any:
        """Replace every command registered for the guild."""

        return self._request(
            "PUT",
            f"/applications/{application_id}/guilds/{guild_id}/commands",
            json=[dict(command) for command in commands],
        )

    def _request(self, method: str, path: str, *, json: Any) -> Any:
        response = self._client.request(method, path, json=json)
        if response.is_error:
            try:
                payload: Any = response.json()
            except ValueError:
                payload = response.text
            raise DiscordApiError(response.status_code, payload, method=method, path=path)

        if response.status_code == 204 or not response.content:
            return None
        return response.json()
