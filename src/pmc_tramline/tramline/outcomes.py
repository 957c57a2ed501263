"""Decorate a tramline with email processing outcomes.

Inbound email processors record warnings and errors against the status a
message moved the deposit to. Those records live in the submission version
metadata under ``pmc.emailProcessing.messages`` and are layered onto the
built tramline after the fact.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import replace
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .models import TramStop

logger = logging.getLogger(__name__)


class EmailProcessingMessage(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    type: Literal["info", "warning", "error"]
    to_status: str = Field(validation_alias="toStatus")
    message: str | None = None
    timestamp: str | None = None
    from_status: str | None = Field(default=None, validation_alias="fromStatus")
    message_id: str | None = Field(default=None, validation_alias="messageId")
    processor: str | None = None


def extract_email_processing_messages(metadata: object) -> list[EmailProcessingMessage]:
    """Pull validated messages out of a submission version metadata document.

    Any missing or malformed level yields no messages. Individual messages
    that fail validation are skipped.
    """

    if not isinstance(metadata, Mapping):
        return []
    pmc = metadata.get("pmc")
    if not isinstance(pmc, Mapping):
        return []
    processing = pmc.get("emailProcessing")
    if not isinstance(processing, Mapping):
        return []
    raw_messages = processing.get("messages")
    if not isinstance(raw_messages, list):
        logger.debug("Ignoring malformed email processing messages")
        return []

    messages: list[EmailProcessingMessage] = []
    for raw in raw_messages:
        if isinstance(raw, EmailProcessingMessage):
            messages.append(raw)
            continue
        try:
            messages.append(EmailProcessingMessage.model_validate(raw))
        except ValidationError as e:
            logger.debug(
                "Skipping invalid email processing message",
                extra={"errors": e.error_count()},
            )
    return messages


def decorate_tramline_with_email_processing_outcomes(
    tramline: Sequence[TramStop],
    metadata: object = None,
) -> list[TramStop]:
    """Return a new tramline with email processing warnings and errors applied.

    Per stop, keyed by status:
    - an error message marks the stop as an error and clears its warning
    - otherwise a warning message marks a stop that is not already an error
    - a stop that is already an error is never downgraded

    The input is never modified and the result is always a new list.
    """

    messages = extract_email_processing_messages(metadata)
    if not messages:
        return list(tramline)

    error_statuses = {m.to_status for m in messages if m.type == "error"}
    warning_statuses = {m.to_status for m in messages if m.type == "warning"}

    decorated: list[TramStop] = []
    for stop in tramline:
        if stop.status in error_statuses:
            decorated.append(replace(stop, error=True, warning=False))
        elif stop.status in warning_statuses and not stop.error:
            decorated.append(replace(stop, warning=True))
        else:
            decorated.append(stop)
    return decorated
