"""Utility script to re-register the bot's slash commands in the guild.

Usage:
    python scripts/register_commands.py

Environment:
    Ensure DISCORD_TOKEN, DISCORD_CLIENT_ID, GUILD_ID (and the other required
    settings) are available in the current shell before running this script.
"""

from __future__ import annotations

from collab_review.commands import COMMANDS, register_commands
from collab_review.config import get_settings
from collab_review.discord_client import DiscordClient


def main() -> None:
    settings = get_settings()
    client = DiscordClient(token=settings.discord_token, base_url=settings.api_base_url)
    try:
        register_commands(client, settings)
    finally:
        client.close()
    print(f"Registered {len(COMMANDS)} commands in guild {settings.guild_id}.")


if __name__ == "__main__":
    main()
