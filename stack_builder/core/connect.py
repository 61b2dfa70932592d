"""Contact step: validation and mock submission of the connect form.

The selection engine only relies on one thing from this module: a successful
submission calls ``go_to_success()`` exactly once. A failed submission leaves
the engine on the connect step.
"""

import asyncio
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from stack_builder.core.config import get_submission_delay
from stack_builder.core.models import FLOW_STEP_CONNECT, ConnectRequest
from stack_builder.core.selection import StackSelection
from stack_builder.shared.errors import ValidationError, WorkflowError

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)

PROBLEM_OPTIONS = [
    {"id": "noisy-alerts", "label": "Too many alerts / noisy alerts"},
    {"id": "slow-rca", "label": "Slow RCA process"},
    {"id": "cross-team", "label": "Cross-team incidents"},
    {"id": "sre-agent", "label": "We use coding agents and want to explore an SRE agent"},
    {"id": "other", "label": "Other"},
]

_PROBLEM_IDS = {option["id"] for option in PROBLEM_OPTIONS}
_EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_connect_request(request: ConnectRequest) -> Dict[str, str]:
    """
    Validate a contact request.

    Returns:
        Mapping of field name to error message; empty when the request is valid.
    """
    errors: Dict[str, str] = {}

    if not request.name:
        errors["name"] = "Name is required"

    if not request.email:
        errors["email"] = "Email is required"
    elif not _EMAIL_PATTERN.match(request.email):
        errors["email"] = "Please enter a valid email address"

    if not request.problems:
        errors["problems"] = "Please select at least one option"
    elif any(problem not in _PROBLEM_IDS for problem in request.problems):
        errors["problems"] = "Unknown option selected"

    if not request.accept_terms:
        errors["acceptTerms"] = "You must accept the Terms & Conditions"

    return errors


async def submit_connect_request(
    selection: StackSelection,
    request: ConnectRequest,
    delay: Optional[float] = None,
) -> Dict[str, Any]:
    """
    Submit the contact form and advance the flow to success.

    Args:
        selection: Session engine, expected to be on the connect step
        request: Contact details entered by the user
        delay: Simulated network delay in seconds (defaults to configuration)

    Returns:
        The submitted payload: formData, selectedStack and submittedAt.

    Raises:
        WorkflowError: If the session is not on the connect step.
        ValidationError: If the request is invalid; the flow step is unchanged.
    """
    if selection.current_step != FLOW_STEP_CONNECT:
        raise WorkflowError(
            f"Contact form can only be submitted from the connect step "
            f"(current step: {selection.current_step})"
        )

    field_errors = validate_connect_request(request)
    if field_errors:
        raise ValidationError("Contact request is invalid", field_errors)

    payload = {
        "formData": request.to_dict(),
        "selectedStack": sorted(selection.selected_options),
        "submittedAt": datetime.now(timezone.utc).isoformat(),
    }
    logger.info(
        f"Contact request submitted (mock): {len(payload['selectedStack'])} options, "
        f"problems={request.problems}"
    )

    await asyncio.sleep(get_submission_delay() if delay is None else delay)

    selection.go_to_success()
    return payload
