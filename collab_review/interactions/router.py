"""Interaction routing with a single failure boundary."""

from __future__ import annotations

import logging

import structlog
from structlog.contextvars import bind_contextvars, unbind_contextvars

from collab_review.commands import SUBMIT_COMMAND
from collab_review.submissions.modal import build_submission_modal
from collab_review.submissions.workflow import SubmissionWorkflow

from .models import ApplicationCommandType, Interaction, InteractionKind
from .outcome import ERROR_MESSAGES, ErrorKind, HandlerOutcome
from .replies import ephemeral_message, modal
from .responder import InteractionResponder

logger = logging.getLogger(__name__)


class InteractionRouter:
    """Classify inbound interactions and dispatch them to their handler.

    ``handle`` never raises: handler failures, whether returned as an
    :class:`ErrorKind` or raised, become one ephemeral notice to the user.
    """

    def __init__(self, *, responder: InteractionResponder, workflow: SubmissionWorkflow) -> None:
        self._responder = responder
        self._workflow = workflow

    def handle(self, interaction: Interaction) -> HandlerOutcome:
        bind_contextvars(interaction_id=interaction.id)
        log = structlog.get_logger().bind(interaction_type=interaction.type, kind=interaction.kind.value)
        try:
            log.info("interaction_received", guild_id=interaction.guild_id)
            try:
                outcome = self._dispatch(interaction)
            except Exception as exc:
                logger.exception(
                    "Uncaught error while handling interaction",
                    extra={"interaction_id": interaction.id, "interaction_type": interaction.type},
                )
                log.error("interaction_failed", error=repr(exc))
                outcome = HandlerOutcome.fail(ErrorKind.UNEXPECTED)

            if outcome.error is not None:
                return self._report(interaction, outcome.error)

            log.info("interaction_handled", responded=outcome.responded)
            return outcome
        finally:
            unbind_contextvars("interaction_id")

    def handle_command(self, interaction: Interaction) -> HandlerOutcome:
        log = structlog.get_logger()
        command_type = interaction.data.get("type", ApplicationCommandType.CHAT_INPUT)
        if command_type != ApplicationCommandType.CHAT_INPUT:
            log.warning("non_chat_input_command", command_type=command_type)
            return HandlerOutcome.fail(ErrorKind.NON_CHAT_INPUT)

        name = str(interaction.data.get("name") or "").lower()
        if name == SUBMIT_COMMAND:
            return HandlerOutcome.ok(self._responder.respond(interaction, modal(build_submission_modal())))

        log.info("command_without_handler", command=name)
        return HandlerOutcome.noop()

    def _dispatch(self, interaction: Interaction) -> HandlerOutcome:
        log = structlog.get_logger()

        if not interaction.guild_id:
            log.warning("interaction_outside_guild")
            return HandlerOutcome.fail(ErrorKind.OUT_OF_SCOPE)

        kind = interaction.kind
        if kind is InteractionKind.COMMAND:
            return self.handle_command(interaction)
        if kind is InteractionKind.COMPONENT:
            return self._workflow.handle_component(interaction)
        if kind is InteractionKind.FORM_SUBMIT:
            return self._workflow.handle_modal(interaction)

        log.warning("unexpected_interaction_type", interaction_type=interaction.type)
        return HandlerOutcome.fail(ErrorKind.UNEXPECTED_TYPE)

    def _report(self, interaction: Interaction, error: ErrorKind) -> HandlerOutcome:
        """Send the fixed notice for *error*; a failure here is logged, never raised."""

        log = structlog.get_logger().bind(error_kind=error.value)
        try:
            result = self._responder.respond(interaction, ephemeral_message(ERROR_MESSAGES[error]))
        except Exception as exc:
            logger.exception(
                "Failed to report interaction error",
                extra={"interaction_id": interaction.id, "error_kind": error.value},
            )
            log.error("interaction_error_report_failed", error=repr(exc))
            return HandlerOutcome(responded=False, error=error)

        log.info("interaction_error_reported")
        return HandlerOutcome(responded=True, error=error, result=result)
