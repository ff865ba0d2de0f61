"""Slash command catalog and guild registration."""

from __future__ import annotations

from typing import Any, Dict, List

import structlog

from collab_review.config import AppSettings
from collab_review.discord_client import DiscordClient
from collab_review.interactions.models import ApplicationCommandType

SUBMIT_COMMAND = "submit"
PROMPT_COMMAND = "prompt"

MANAGE_GUILD_PERMISSION = 1 << 5

COMMANDS: List[Dict[str, Any]] = [
    {
        "name": SUBMIT_COMMAND,
        "description": "Submits an entry to #collaborations",
        "type": ApplicationCommandType.CHAT_INPUT.value,
        "options": [],
    },
    {
        "name": PROMPT_COMMAND,
        "description": "Posts the prompt for the FAQ in the current channel",
        "type": ApplicationCommandType.CHAT_INPUT.value,
        "options": [],
        "default_member_permissions": str(MANAGE_GUILD_PERMISSION),
        "dm_permission": False,
    },
]


def register_commands(client: DiscordClient, settings: AppSettings) -> Any:
    """Overwrite the guild's commands with :data:`COMMANDS`."""

    log = structlog.get_logger().bind(guild_id=settings.guild_id)
    result = client.bulk_overwrite_guild_commands(
        application_id=settings.application_id,
        guild_id=settings.guild_id,
        commands=COMMANDS,
    )
    log.info("commands_registered", commands=[command["name"] for command in COMMANDS])
    return result
