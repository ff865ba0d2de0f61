"""Pydantic-based configuration helpers for the collaboration review bot."""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Iterable, List

from pydantic import BaseModel, Field, ValidationError, field_validator


class AppSettings(BaseModel):
    """Settings required to talk to Discord and route submissions."""

    discord_token: str = Field(..., alias="DISCORD_TOKEN")
    application_id: str = Field(..., alias="DISCORD_CLIENT_ID")
    public_key: str = Field(..., alias="DISCORD_PUBLIC_KEY")
    guild_id: str = Field(..., alias="GUILD_ID")
    submissions_channel_id: str = Field(..., alias="SUBMISSIONS_CHANNEL_ID")
    approved_channel_id: str = Field(..., alias="APPROVED_CHANNEL_ID")
    staff_role_ids: List[str] = Field(default_factory=list, alias="STAFF_ROLES")
    api_base_url: str = Field("https://discord.com/api/v10", alias="DISCORD_API_BASE_URL")
    register_commands_on_startup: bool = Field(True, alias="REGISTER_COMMANDS_ON_STARTUP")

    @field_validator("staff_role_ids", mode="before")
    @classmethod
    def _split_ids(cls, value: str | list[str] | None) -> list[str]:
        if value is None:
            return []
        if isinstance(value, list):
            return [item.strip() for item in value if item.strip()]
        return [item.strip() for item in value.split(",") if item.strip()]

    @field_validator(
        "discord_token",
        "application_id",
        "public_key",
        "guild_id",
        "submissions_channel_id",
        "approved_channel_id",
    )
    @classmethod
    def _ensure_not_blank(cls, value: str) -> str:
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Value must not be blank")
        return trimmed


def _format_missing(fields: Iterable[str]) -> str:
    """Return a human-friendly comma-separated list of missing env vars."""

    unique: List[str] = []
    for field in fields:
        if field not in unique:
            unique.append(field)
    return ", ".join(unique)


@lru_cache()
def get_settings() -> AppSettings:
    """Fetch and cache settings from environment variables."""

    try:
        return AppSettings.model_validate(dict(os.environ))
    except ValidationError as exc:
        missing = [str(error["loc"][0]) for error in exc.errors()]
        message = (
            "Missing required environment variables: "
            f"{_format_missing(missing)}"
        )
        raise RuntimeError(message) from exc
