"""Web interface implementation for Stack Builder."""

import logging
from typing import Any, Dict

from stack_builder.interfaces.base import StackBuilderInterface
from stack_builder.interfaces.context import InterfaceContext
from stack_builder.interfaces.handlers import WorkflowHandler

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


class WebInterface(StackBuilderInterface):
    """Web interface implementation for Flask application."""

    def __init__(self, session_store=None):
        """
        Initialize Web interface.

        Args:
            session_store: Optional custom session store (defaults to InMemorySessionStore)
        """
        self.context = InterfaceContext(session_store)
        self.handler = WorkflowHandler()

    async def toggle_option(
        self, session_id: str, option_id: str, category_id: str
    ) -> Dict[str, Any]:
        """
        Toggle an option for Web API.

        Returns:
            JSON-compatible session state
        """
        return await self.handler.handle_toggle(self.context, session_id, option_id, category_id)

    async def go_to_connect(self, session_id: str) -> Dict[str, Any]:
        """Request the contact step for Web API."""
        return await self.handler.handle_go_to_connect(self.context, session_id)

    async def go_to_select(self, session_id: str) -> Dict[str, Any]:
        """Return to stack selection for Web API."""
        return await self.handler.handle_go_to_select(self.context, session_id)

    async def submit_connect(self, session_id: str, form: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit the contact form for Web API.

        Returns:
            Dictionary with submission and state, or error and fieldErrors
        """
        result = await self.handler.handle_connect_submission(self.context, session_id, form)
        if "error" not in result:
            logger.debug(f"Session {session_id}: contact submission stored")
        return result

    async def reset_session(self, session_id: str) -> Dict[str, Any]:
        """
        Reset session state.

        Args:
            session_id: Unique identifier for the wizard session
        """
        return await self.handler.handle_reset_session(self.context, session_id)

    def get_state(self, session_id: str) -> Dict[str, Any]:
        """Get the derived state for a session."""
        return self.handler.get_state(self.context, session_id)

    def get_stored_submission(self, session_id: str) -> Dict[str, Any]:
        """
        Get stored contact submission for a session.

        Returns:
            Dictionary with submission, or error
        """
        return self.handler.get_stored_submission(self.context, session_id)
