"""Optional HTTP submission of survey results."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Literal

import httpx

from .coercion import coerce_flag
from .export import build_export_payload
from .models import EmissionBreakdown
from .types import ExportPayloadDict, SurveyResponse

LOGGER = logging.getLogger(__name__)

SubmissionStatus = Literal["success", "error"]

CONSENT_REQUIRED_MESSAGE = "Please provide consent to participate."
SUBMIT_SUCCESS_MESSAGE = (
    "Survey submitted successfully! Your carbon footprint has been calculated."
)
SUBMIT_FAILURE_MESSAGE = "Failed to submit survey. Please try again."

DEFAULT_TIMEOUT_SECONDS = 10.0


class ConsentRequiredError(ValueError):
    """Raised when a response is submitted without research consent."""


@dataclass(frozen=True, slots=True)
class SubmissionOutcome:
    """User-facing result of a submission attempt.

    Attributes:
        status: ``"success"`` or ``"error"``.
        message: Message shown to the respondent.
        payload: The record that was (or would have been) sent. Always
            carries the computed results, even when submission failed.
        delivered: Whether the payload reached an endpoint.
    """

    status: SubmissionStatus
    message: str
    payload: ExportPayloadDict
    delivered: bool = False

    @property
    def ok(self) -> bool:
        return self.status == "success"


def require_consent(response: SurveyResponse) -> None:
    """Raise :class:`ConsentRequiredError` unless ``consent`` is ``True``."""

    if not coerce_flag(response.get("consent")):
        raise ConsentRequiredError(CONSENT_REQUIRED_MESSAGE)


def post_payload(
    endpoint_url: str,
    payload: ExportPayloadDict,
    *,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
) -> None:
    """POST ``payload`` as JSON to ``endpoint_url``.

    Args:
        endpoint_url: Webhook receiving the record.
        payload: Export record to send.
        client: Caller-owned client to reuse. A short-lived client with
            ``timeout`` is created when omitted.
        timeout: Request timeout in seconds for the short-lived client.

    Raises:
        httpx.HTTPError: On transport failures or non-2xx responses.
        httpx.InvalidURL: If ``endpoint_url`` cannot be parsed.
    """

    if client is not None:
        _post_with(client, endpoint_url, payload)
        return
    with httpx.Client(timeout=timeout) as owned:
        _post_with(owned, endpoint_url, payload)


def _post_with(
    client: httpx.Client, endpoint_url: str, payload: ExportPayloadDict
) -> None:
    response = client.post(
        endpoint_url,
        json=payload,
        headers={"Content-Type": "application/json"},
    )
    response.raise_for_status()


def submit_survey(
    response: SurveyResponse,
    breakdown: EmissionBreakdown,
    *,
    endpoint_url: str | None,
    client: httpx.Client | None = None,
    timeout: float = DEFAULT_TIMEOUT_SECONDS,
    now: datetime | None = None,
) -> SubmissionOutcome:
    """Validate consent and deliver the survey record.

    The breakdown is computed before this call and is returned in the outcome
    whatever happens to the request.

    Args:
        response: Raw survey answers.
        breakdown: Results computed from ``response``.
        endpoint_url: Webhook receiving the record. Without one the
            submission succeeds locally and nothing is sent.
        client: Optional caller-owned HTTP client.
        timeout: Request timeout in seconds.
        now: Submission moment used for the participant id and timestamp.

    Returns:
        A :class:`SubmissionOutcome` describing what the respondent sees.
    """

    payload = build_export_payload(response, breakdown, now=now)

    try:
        require_consent(response)
    except ConsentRequiredError as exc:
        LOGGER.info(
            "Submission rejected without consent",
            extra={"participant_id": payload["participantId"]},
        )
        return SubmissionOutcome(status="error", message=str(exc), payload=payload)

    if not endpoint_url:
        return SubmissionOutcome(
            status="success", message=SUBMIT_SUCCESS_MESSAGE, payload=payload
        )

    try:
        post_payload(endpoint_url, payload, client=client, timeout=timeout)
    except httpx.HTTPStatusError as exc:
        LOGGER.warning(
            "Survey submission HTTP error",
            extra={
                "participant_id": payload["participantId"],
                "status_code": exc.response.status_code,
                "url": endpoint_url,
            },
            exc_info=exc,
        )
        return SubmissionOutcome(
            status="error", message=SUBMIT_FAILURE_MESSAGE, payload=payload
        )
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        LOGGER.warning(
            "Survey submission transport error",
            extra={"participant_id": payload["participantId"], "url": endpoint_url},
            exc_info=exc,
        )
        return SubmissionOutcome(
            status="error", message=SUBMIT_FAILURE_MESSAGE, payload=payload
        )

    LOGGER.info(
        "Survey submitted",
        extra={"participant_id": payload["participantId"], "url": endpoint_url},
    )
    return SubmissionOutcome(
        status="success",
        message=SUBMIT_SUCCESS_MESSAGE,
        payload=payload,
        delivered=True,
    )
