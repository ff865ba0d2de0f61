"""Data model for inbound Discord interactions."""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field


class InteractionType(IntEnum):
    PING = 1
    APPLICATION_COMMAND = 2
    MESSAGE_COMPONENT = 3
    APPLICATION_COMMAND_AUTOCOMPLETE = 4
    MODAL_SUBMIT = 5


class InteractionResponseType(IntEnum):
    PONG = 1
    CHANNEL_MESSAGE_WITH_SOURCE = 4
    DEFERRED_CHANNEL_MESSAGE_WITH_SOURCE = 5
    MODAL = 9


class ApplicationCommandType(IntEnum):
    CHAT_INPUT = 1
    USER = 2
    MESSAGE = 3


class ComponentType(IntEnum):
    ACTION_ROW = 1
    BUTTON = 2
    TEXT_INPUT = 4


class ButtonStyle(IntEnum):
    SUCCESS = 3
    DANGER = 4


class TextInputStyle(IntEnum):
    SHORT = 1
    PARAGRAPH = 2


class MessageFlags(IntEnum):
    EPHEMERAL = 1 << 6


class InteractionKind(str, Enum):
    """The shapes the router knows how to dispatch."""

    COMMAND = "command"
    COMPONENT = "component"
    FORM_SUBMIT = "form_submit"
    UNKNOWN = "unknown"


_KIND_BY_TYPE = {
    InteractionType.APPLICATION_COMMAND: InteractionKind.COMMAND,
    InteractionType.MESSAGE_COMPONENT: InteractionKind.COMPONENT,
    InteractionType.MODAL_SUBMIT: InteractionKind.FORM_SUBMIT,
}


class DiscordUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    username: str = ""
    discriminator: str = "0"
    avatar: str | None = None


class GuildMember(BaseModel):
    model_config = ConfigDict(extra="ignore")

    user: DiscordUser
    roles: List[str] = Field(default_factory=list)


class Interaction(BaseModel):
    """A single inbound interaction event. Read-only once parsed."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    application_id: str | None = None
    type: int
    token: str
    guild_id: str | None = None
    channel_id: str | None = None
    data: Dict[str, Any] = Field(default_factory=dict)
    member: GuildMember | None = None
    user: DiscordUser | None = None
    message: Dict[str, Any] | None = None

    @property
    def kind(self) -> InteractionKind:
        try:
            return _KIND_BY_TYPE.get(InteractionType(self.type), InteractionKind.UNKNOWN)
        except ValueError:
            return InteractionKind.UNKNOWN

    @property
    def actor(self) -> DiscordUser | None:
        """The user who triggered the interaction."""

        if self.member is not None:
            return self.member.user
        return self.user

    @property
    def custom_id(self) -> str:
        return str(self.data.get("custom_id") or "")

    def submitted_fields(self) -> list[tuple[str, str]]:
        """Return ``(custom_id, value)`` for every text input of a modal, in form order."""

        fields: list[tuple[str, str]] = []
        for row in self.data.get("components") or []:
            for component in row.get("components") or []:
                if component.get("type") != ComponentType.TEXT_INPUT:
                    continue
                fields.append((str(component.get("custom_id", "")), str(component.get("value") or "")))
        return fields
