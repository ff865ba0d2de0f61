"""The collaboration submission modal."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List

from collab_review.interactions.models import ComponentType, TextInputStyle

SUBMISSION_MODAL_ID = "submit-collaboration"
SUBMISSION_MODAL_TITLE = "Submit a potential collaboration"
MAX_TITLE_LENGTH = 45
MAX_LABEL_LENGTH = 45


@dataclass(frozen=True)
class SubmissionField:
    label: str
    style: TextInputStyle
    placeholder: str
    min_length: int
    max_length: int


# Order is the order of paragraphs on the Review Card.
SUBMISSION_FIELDS: List[SubmissionField] = [
    SubmissionField(
        label="Project name",
        style=TextInputStyle.SHORT,
        placeholder="This is the name of whatever project you need help with, which can also be a server name.",
        min_length=2,
        max_length=40,
    ),
    SubmissionField(
        label="Type of help needed",
        style=TextInputStyle.PARAGRAPH,
        placeholder="This could be a few things, briefly describe the help you need in a list.",
        min_length=50,
        max_length=1000,
    ),
    SubmissionField(
        label="Time Commitment Required",
        style=TextInputStyle.PARAGRAPH,
        placeholder="If no real time commitment is needed, such as a one and done collaboration, you can put N/A.",
        min_length=50,
        max_length=1000,
    ),
    SubmissionField(
        label="Paid Collaboration?",
        style=TextInputStyle.PARAGRAPH,
        placeholder="If you expect to provide any financial compensation, please describe that here!",
        min_length=50,
        max_length=1000,
    ),
    SubmissionField(
        label="Extra Information",
        style=TextInputStyle.PARAGRAPH,
        placeholder="This is for any extra information about posts. Tell them whatever else you want them to know.",
        min_length=50,
        max_length=1000,
    ),
]


def _truncate(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 1] + "..."


def _field_to_row(field: SubmissionField) -> Dict[str, Any]:
    # The label doubles as custom_id so the submission can be rendered without a lookup.
    return {
        "type": ComponentType.ACTION_ROW.value,
        "components": [
            {
                "type": ComponentType.TEXT_INPUT.value,
                "custom_id": field.label,
                "label": _truncate(field.label, MAX_LABEL_LENGTH),
                "style": field.style.value,
                "placeholder": field.placeholder,
                "min_length": field.min_length,
                "max_length": field.max_length,
            }
        ],
    }


def build_submission_modal() -> Dict[str, Any]:
    """Build the modal payload opened by the ``submit`` command."""

    return {
        "custom_id": SUBMISSION_MODAL_ID,
        "title": _truncate(SUBMISSION_MODAL_TITLE, MAX_TITLE_LENGTH),
        "components": [_field_to_row(field) for field in SUBMISSION_FIELDS],
    }
