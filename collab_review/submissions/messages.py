"""Embed and message builders for collaboration submissions."""

from __future__ import annotations

import copy
from datetime import UTC, datetime
from typing import Any, Dict, Iterable, Mapping, Tuple

from collab_review.actions import APPROVE_CONTROL_ID, DENY_CONTROL_ID, build_control_id
from collab_review.interactions.models import ButtonStyle, ComponentType, DiscordUser

PENDING_COLOR = 7506394
APPROVED_COLOR = 6931610
DENIED_COLOR = 15953004
PUBLIC_POST_COLOR = 7506394

PENDING_FOOTER = "Pending approval..."
APPROVED_FOOTER = "Approved"
DENIED_FOOTER = "Denied"

REVIEW_CARD_TITLE = "Collaboration Submission"
PUBLIC_POST_TITLE = "Collaboration opportunity"

CDN_BASE_URL = "https://cdn.discordapp.com"
DEFAULT_AVATAR_COUNT = 5

_DECISION_STYLE = {
    APPROVE_CONTROL_ID: (APPROVED_COLOR, APPROVED_FOOTER),
    DENY_CONTROL_ID: (DENIED_COLOR, DENIED_FOOTER),
}


def _timestamp(now: datetime | None = None) -> str:
    return (now or datetime.now(UTC)).isoformat()


def avatar_url(user: DiscordUser) -> str:
    """Return the user's avatar, or the default avatar picked by discriminator."""

    if user.avatar:
        return f"{CDN_BASE_URL}/avatars/{user.id}/{user.avatar}"
    try:
        index = int(user.discriminator) % DEFAULT_AVATAR_COUNT
    except ValueError:
        index = 0
    return f"{CDN_BASE_URL}/embed/avatars/{index}.png"


def format_submission(fields: Iterable[Tuple[str, str]]) -> str:
    """Render submitted ``(label, value)`` pairs as one paragraph per field."""

    return "\n\n".join(f"**{label}:**\n{value}" for label, value in fields)


def _review_buttons(submitter_id: str) -> Dict[str, Any]:
    return {
        "type": ComponentType.ACTION_ROW.value,
        "components": [
            {
                "type": ComponentType.BUTTON.value,
                "custom_id": build_control_id(APPROVE_CONTROL_ID, submitter_id),
                "style": ButtonStyle.SUCCESS.value,
                "label": "Approve",
            },
            {
                "type": ComponentType.BUTTON.value,
                "custom_id": build_control_id(DENY_CONTROL_ID),
                "style": ButtonStyle.DANGER.value,
                "label": "Deny",
            },
        ],
    }


def build_review_card(
    *,
    submitter: DiscordUser,
    fields: Iterable[Tuple[str, str]],
    now: datetime | None = None,
) -> Dict[str, Any]:
    """Build the pending Review Card posted to the submissions channel."""

    return {
        "embeds": [
            {
                "title": REVIEW_CARD_TITLE,
                "description": format_submission(fields),
                "author": {
                    "name": f"{submitter.username}#{submitter.discriminator} ({submitter.id})",
                    "icon_url": avatar_url(submitter),
                },
                "color": PENDING_COLOR,
                "footer": {"text": PENDING_FOOTER},
                "timestamp": _timestamp(now),
            }
        ],
        "components": [_review_buttons(submitter.id)],
        # Submission text is untrusted; never let it ping anyone.
        "allowed_mentions": {"parse": []},
    }


def review_embed(message: Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a copy of the Review Card's embed carried by a component interaction."""

    embeds = (message or {}).get("embeds") or []
    if not embeds:
        raise ValueError("Review card message has no embed.")
    return copy.deepcopy(dict(embeds[0]))


def build_public_post(
    *,
    embed: Mapping[str, Any],
    submitter_id: str | None,
    now: datetime | None = None,
) -> Dict[str, Any]:
    """Build the approved-channel copy of a Review Card."""

    public_embed = dict(embed)
    public_embed.pop("footer", None)
    public_embed.update(
        {
            "title": PUBLIC_POST_TITLE,
            "color": PUBLIC_POST_COLOR,
            "timestamp": _timestamp(now),
        }
    )

    payload: Dict[str, Any] = {"embeds": [public_embed]}
    if submitter_id:
        payload["content"] = f"<@{submitter_id}>"
        payload["allowed_mentions"] = {"parse": [], "users": [submitter_id]}
    else:
        payload["allowed_mentions"] = {"parse": []}
    return payload


def build_decision_update(*, embed: Mapping[str, Any], decision: str) -> Dict[str, Any]:
    """Return the edit payload moving a Review Card to *decision*."""

    try:
        color, footer = _DECISION_STYLE[decision]
    except KeyError as exc:
        raise ValueError(f"Unknown decision: {decision}") from exc

    updated = dict(embed)
    updated["color"] = color
    updated["footer"] = {"text": footer}
    return {"embeds": [updated]}
