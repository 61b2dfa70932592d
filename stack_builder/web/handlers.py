"""HTTP route handlers for Web API."""

import logging
from typing import Any, Dict

from stack_builder.core.assessment import integrations
from stack_builder.core.catalog import ASSESSMENT_FEEDBACK, ASSESSMENT_LEVELS
from stack_builder.core.connect import PROBLEM_OPTIONS
from stack_builder.web.interface import WebInterface
from stack_builder.web.models import SubmissionResponse, ToggleRequest
from stack_builder.shared.metrics import increment_errors

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


class WebHandlers:
    """Handlers for Web API endpoints."""

    def __init__(self, web_interface: WebInterface):
        """
        Initialize handlers.

        Args:
            web_interface: WebInterface instance for handling requests
        """
        self.interface = web_interface

    def handle_catalog(self) -> Dict[str, Any]:
        """
        Handle catalog endpoint.

        Returns:
            Dictionary with categories, assessment levels, feedback items,
            contact problem options and the integrations grid
        """
        catalog = self.interface.context.catalog
        return {
            "categories": [category.to_dict() for category in catalog],
            "assessmentLevels": [
                {"min": level.min, "max": level.max, **level.to_dict()}
                for level in ASSESSMENT_LEVELS
            ],
            "feedback": [
                {
                    "id": item.id,
                    "title": item.title,
                    "description": item.description,
                    "triggerCategories": list(item.trigger_categories),
                }
                for item in ASSESSMENT_FEEDBACK
            ],
            "problemOptions": PROBLEM_OPTIONS,
            "integrations": integrations(catalog),
        }

    def handle_state(self, session_id: str) -> Dict[str, Any]:
        """Handle state retrieval endpoint."""
        return self.interface.get_state(session_id)

    async def handle_toggle(self, session_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Handle toggle endpoint.

        Args:
            session_id: Unique session identifier
            data: JSON body with optionId and categoryId

        Returns:
            Session state, or error when ids are missing
        """
        request = ToggleRequest.from_json(data)
        if not request.is_valid():
            logger.debug(f"Rejected toggle for session {session_id}: missing ids")
            increment_errors("bad_request", session_id)
            return {"error": "optionId and categoryId are required"}

        try:
            return await self.interface.toggle_option(
                session_id, request.option_id, request.category_id
            )
        except Exception as e:
            logger.error(f"Error in toggle handler: {e}")
            increment_errors("toggle_error", session_id)
            raise

    async def handle_connect(self, session_id: str) -> Dict[str, Any]:
        """Handle continue endpoint."""
        return await self.interface.go_to_connect(session_id)

    async def handle_select(self, session_id: str) -> Dict[str, Any]:
        """Handle back endpoint."""
        return await self.interface.go_to_select(session_id)

    async def handle_submit(self, session_id: str, data: Dict[str, Any]) -> SubmissionResponse:
        """
        Handle contact submission endpoint.

        Args:
            session_id: Unique session identifier
            data: JSON contact form

        Returns:
            SubmissionResponse carrying the HTTP status to use
        """
        try:
            result = await self.interface.submit_connect(session_id, data or {})
            return SubmissionResponse.from_result(result)
        except Exception as e:
            logger.error(f"Error in submission handler: {e}")
            increment_errors("submission_error", session_id)
            raise

    async def handle_reset(self, session_id: str) -> Dict[str, Any]:
        """
        Handle reset endpoint.

        Args:
            session_id: Unique session identifier

        Returns:
            Dictionary with status
        """
        return await self.interface.reset_session(session_id)

    def handle_get_submission(self, session_id: str) -> Dict[str, Any]:
        """Handle retrieval of the stored contact submission for one session."""
        return self.interface.get_stored_submission(session_id)

    def handle_get_all_submissions(self) -> Dict[str, Any]:
        """
        Handle retrieval of all contact submissions across sessions.

        Returns:
            Dictionary with submissions array containing session_id and payload
        """
        sessions = self.interface.context.session_store.get_all_with_submissions()
        submissions = [
            {"session_id": session_id, **session_data.submission}
            for session_id, session_data in sessions.items()
        ]
        return {"submissions": submissions, "count": len(submissions)}
