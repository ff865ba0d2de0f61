"""Interaction response payload builders and the fixed user-facing notices."""

from __future__ import annotations

from typing import Any, Dict

from .models import InteractionResponseType, MessageFlags

OUT_OF_SCOPE_TEXT = (
    "This interaction is outside of a guild - if you somehow managed to get this error, please modmail us on how"
)
UNEXPECTED_TYPE_TEXT = (
    "Unexpected interaction type - if you somehow managed to get this error, please modmail us on how"
)
NON_CHAT_INPUT_TEXT = (
    "This command is a non-chat input command - if you somehow managed to get this error, please modmail us on how"
)
GENERIC_ERROR_TEXT = (
    "Something went wrong while handling this interaction - please modmail us if you see this "
    "with steps on how to reproduce"
)
NOT_STAFF_TEXT = "Only staff members can review submissions."


def ephemeral_message(content: str) -> Dict[str, Any]:
    """A channel message only the invoking user can see."""

    return {
        "type": InteractionResponseType.CHANNEL_MESSAGE_WITH_SOURCE.value,
        "data": {"content": content, "flags": MessageFlags.EPHEMERAL.value},
    }


def deferred_ephemeral() -> Dict[str, Any]:
    """Placeholder acknowledgement reserving the response slot."""

    return {
        "type": InteractionResponseType.DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE.value,
        "data": {"flags": MessageFlags.EPHEMERAL.value},
    }


def modal(view: Dict[str, Any]) -> Dict[str, Any]:
    return {"type": InteractionResponseType.MODAL.value, "data": view}
