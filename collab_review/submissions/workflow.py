"""Submission approval workflow: review cards, approvals and denials."""

from __future__ import annotations

from typing import Iterable

import structlog

from collab_review.actions import (
    APPROVE_CONTROL_ID,
    DENY_CONTROL_ID,
    is_staff_member,
    parse_control_id,
)
from collab_review.discord_client import DiscordClient
from collab_review.interactions.models import Interaction
from collab_review.interactions.outcome import ErrorKind, HandlerOutcome
from collab_review.interactions.replies import deferred_ephemeral, ephemeral_message
from collab_review.interactions.responder import InteractionResponder

from .messages import build_decision_update, build_public_post, build_review_card, review_embed

APPROVED_REPLY = (
    "Approved! Please keep in mind that you can indicate that you've changed your mind by pressing "
    "the opposite button - but the bot won't delete the message it just posted."
)
DENIED_REPLY = (
    "Denied. Please keep in mind that you can indicate that you've changed your mind by pressing "
    "the opposite button."
)
SUBMITTED_REPLY = "Thank you for your submission! Please wait while the staff team reviews it."


class SubmissionWorkflow:
    """Post submissions for review and apply staff decisions to their Review Cards."""

    def __init__(
        self,
        *,
        client: DiscordClient,
        responder: InteractionResponder,
        submissions_channel_id: str,
        approved_channel_id: str,
        staff_role_ids: Iterable[str] = (),
    ) -> None:
        self._client = client
        self._responder = responder
        self._submissions_channel_id = submissions_channel_id
        self._approved_channel_id = approved_channel_id
        self._staff_role_ids = list(staff_role_ids)

    def handle_component(self, interaction: Interaction) -> HandlerOutcome:
        """Apply an approve/deny button press to the Review Card it belongs to."""

        self._responder.respond(interaction, deferred_ephemeral())

        context = parse_control_id(interaction.custom_id)
        actor = interaction.actor
        log = structlog.get_logger().bind(
            control_id=context.control_id,
            submitter_id=context.user_id,
            reviewer_id=actor.id if actor else None,
        )

        if context.control_id not in (APPROVE_CONTROL_ID, DENY_CONTROL_ID):
            log.warning("unknown_control_id", custom_id=interaction.custom_id)
            return HandlerOutcome.fail(ErrorKind.UNKNOWN_CONTROL)

        member_roles = interaction.member.roles if interaction.member else []
        if not is_staff_member(member_roles, self._staff_role_ids):
            log.warning("unauthorized_review_attempt")
            return HandlerOutcome.fail(ErrorKind.NOT_STAFF)

        channel_id = interaction.channel_id or ""
        message_id = str((interaction.message or {}).get("id") or "")
        embed = review_embed(interaction.message)

        if context.control_id == APPROVE_CONTROL_ID:
            self._client.create_message(
                channel_id=self._approved_channel_id,
                payload=build_public_post(embed=embed, submitter_id=context.user_id),
            )
            log.info("submission_published", approved_channel=self._approved_channel_id)
            self._client.edit_message(
                channel_id=channel_id,
                message_id=message_id,
                payload=build_decision_update(embed=embed, decision=APPROVE_CONTROL_ID),
            )
            log.info("submission_approved", message_id=message_id)
            reply = APPROVED_REPLY
        else:
            self._client.edit_message(
                channel_id=channel_id,
                message_id=message_id,
                payload=build_decision_update(embed=embed, decision=DENY_CONTROL_ID),
            )
            log.info("submission_denied", message_id=message_id)
            reply = DENIED_REPLY

        return HandlerOutcome.ok(self._responder.respond(interaction, ephemeral_message(reply)))

    def handle_modal(self, interaction: Interaction) -> HandlerOutcome:
        """Turn a submitted form into a pending Review Card."""

        self._responder.respond(interaction, deferred_ephemeral())

        submitter = interaction.actor
        if submitter is None:
            raise ValueError("Modal submission carries no submitting user.")

        fields = interaction.submitted_fields()
        self._client.create_message(
            channel_id=self._submissions_channel_id,
            payload=build_review_card(submitter=submitter, fields=fields),
        )
        structlog.get_logger().info(
            "submission_posted",
            submitter_id=submitter.id,
            field_count=len(fields),
            submissions_channel=self._submissions_channel_id,
        )

        return HandlerOutcome.ok(self._responder.respond(interaction, ephemeral_message(SUBMITTED_REPLY)))
