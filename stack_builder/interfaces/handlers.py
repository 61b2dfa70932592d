"""Shared workflow handlers for both CLI and Web interfaces."""

import logging
from typing import Any, Dict, Optional

from opentelemetry.trace import SpanKind

from stack_builder.core.assessment import build_assessment_view
from stack_builder.core.connect import submit_connect_request
from stack_builder.core.models import FLOW_STEP_CONNECT, FLOW_STEP_SELECT, ConnectRequest
from stack_builder.core.selection import StackSelection
from stack_builder.shared.errors import ValidationError, WorkflowError
from stack_builder.shared.metrics import (
    increment_errors,
    increment_submissions,
    increment_toggles,
    increment_transitions,
)
from stack_builder.shared.tracing import get_tracer
from .context import InterfaceContext

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


def _handler_span(operation: str, *, session_id: Optional[str] = None, **attrs: Any):
    """Create a span for handler operations with session and operation context.

    Args:
        operation: Name of the handler operation (e.g., "toggle", "submit_connect")
        session_id: Optional session identifier for correlation
        **attrs: Additional span attributes

    Returns:
        Context manager for the span
    """
    tracer = get_tracer(instrumenting_module_name="stack_builder.handlers")
    attributes: Dict[str, Any] = {
        "handler.operation": operation,
        **attrs,
    }
    if session_id:
        attributes["session.id"] = session_id
    return tracer.start_as_current_span(
        name=f"handler.{operation}",
        kind=SpanKind.INTERNAL,
        attributes=attributes,
    )


def build_state(selection: StackSelection) -> Dict[str, Any]:
    """Serialize a session engine into the state dictionary returned to clients."""
    snapshot = selection.snapshot()
    return {
        **snapshot.to_dict(),
        "assessment": build_assessment_view(snapshot),
        "visibleOptions": {
            category.id: [option.id for option in selection.visible_options(category.id)]
            for category in selection.catalog
        },
    }


class WorkflowHandler:
    """
    Centralized handler for wizard operations used by all interfaces.

    Every operation resolves the session's engine, applies one input and
    returns a freshly derived state.
    """

    async def handle_toggle(
        self,
        context: InterfaceContext,
        session_id: str,
        option_id: str,
        category_id: str,
    ) -> Dict[str, Any]:
        """
        Toggle an option for a session.

        Args:
            context: InterfaceContext with session store
            session_id: Unique identifier for the wizard session
            option_id: Option to select or deselect
            category_id: Category the option belongs to

        Returns:
            Session state dictionary
        """
        with _handler_span(
            "toggle",
            session_id=session_id,
            option_id=option_id,
            category_id=category_id,
        ):
            selection = context.session_store.get_or_create(session_id).selection
            selection.toggle(option_id, category_id)
            increment_toggles(session_id, category_id)
            state = build_state(selection)
            logger.debug(
                f"Toggled {option_id} in {category_id} for {session_id}: "
                f"{state['enabledCategoriesCount']} categories enabled"
            )
            return state

    async def handle_go_to_connect(
        self,
        context: InterfaceContext,
        session_id: str,
    ) -> Dict[str, Any]:
        """
        Request the contact step; the engine refuses below the threshold.

        Returns:
            Session state dictionary (currentStep shows whether it moved)
        """
        with _handler_span("go_to_connect", session_id=session_id):
            selection = context.session_store.get_or_create(session_id).selection
            selection.go_to_connect()
            allowed = selection.current_step == FLOW_STEP_CONNECT
            increment_transitions(session_id, FLOW_STEP_CONNECT, allowed=allowed)
            if not allowed:
                logger.info(
                    f"Session {session_id} cannot continue yet: "
                    f"{selection.enabled_categories_count} categories enabled"
                )
            return build_state(selection)

    async def handle_go_to_select(
        self,
        context: InterfaceContext,
        session_id: str,
    ) -> Dict[str, Any]:
        """Return a session to the select step."""
        with _handler_span("go_to_select", session_id=session_id):
            selection = context.session_store.get_or_create(session_id).selection
            selection.go_to_select()
            increment_transitions(session_id, FLOW_STEP_SELECT)
            return build_state(selection)

    async def handle_connect_submission(
        self,
        context: InterfaceContext,
        session_id: str,
        form: Dict[str, Any],
        delay: Optional[float] = None,
    ) -> Dict[str, Any]:
        """
        Validate and submit the contact form, then move the session to success.

        Args:
            context: InterfaceContext with session store
            session_id: Unique identifier for the wizard session
            form: Raw JSON form fields
            delay: Optional override for the simulated submission delay

        Returns:
            Dictionary with:
                - 'submission': Submitted payload (on success)
                - 'state': Session state dictionary
                - 'error' / 'fieldErrors': On failure; the step is unchanged
        """
        with _handler_span("submit_connect", session_id=session_id):
            if not context.validate():
                logger.error("Context not properly initialized for contact submission")
                return {"error": "Context not properly initialized"}

            session_data = context.session_store.get(session_id)
            if not session_data:
                logger.warning(f"No session data found for contact submission: {session_id}")
                return {"error": "No active session found"}

            request = ConnectRequest.from_json(form or {})
            try:
                payload = await submit_connect_request(session_data.selection, request, delay)
            except ValidationError as e:
                logger.info(f"Contact submission rejected for {session_id}: {e.field_errors}")
                increment_errors("validation_error", session_id)
                increment_submissions(session_id, success=False)
                return {
                    "error": str(e),
                    "fieldErrors": e.field_errors,
                    "state": build_state(session_data.selection),
                }
            except WorkflowError as e:
                logger.warning(f"Contact submission out of flow for {session_id}: {e}")
                increment_errors("workflow_error", session_id)
                increment_submissions(session_id, success=False)
                return {"error": str(e), "state": build_state(session_data.selection)}

            session_data.submission = payload
            context.session_store.set(session_id, session_data)
            increment_submissions(session_id, success=True)
            logger.info(f"Session {session_id} reached success step")

            return {"submission": payload, "state": build_state(session_data.selection)}

    async def handle_reset_session(
        self,
        context: InterfaceContext,
        session_id: str,
    ) -> Dict[str, Any]:
        """
        Reset session state.

        Args:
            context: InterfaceContext with session store
            session_id: Unique identifier for the wizard session

        Returns:
            Dictionary with status and the fresh state
        """
        with _handler_span("reset", session_id=session_id):
            session_data = context.session_store.get(session_id)
            if session_data:
                session_data.selection.reset_state()
                session_data.submission = None
                selection = session_data.selection
            else:
                selection = context.session_store.get_or_create(session_id).selection
            logger.debug(f"Session {session_id} reset")
            return {"status": "reset", "state": build_state(selection)}

    def get_state(
        self,
        context: InterfaceContext,
        session_id: str,
    ) -> Dict[str, Any]:
        """
        Get the derived state for a session, creating it on first access.

        Args:
            context: InterfaceContext with session store
            session_id: Unique identifier for the wizard session

        Returns:
            Session state dictionary
        """
        return build_state(context.session_store.get_or_create(session_id).selection)

    def get_stored_submission(
        self,
        context: InterfaceContext,
        session_id: str,
    ) -> Dict[str, Any]:
        """
        Get the stored contact submission for a session.

        Returns:
            Dictionary with 'submission' or 'error' if none found
        """
        session_data = context.session_store.get(session_id)
        if not session_data:
            return {"error": "Session not found"}

        if not session_data.submission:
            return {"error": "No submission found for this session"}

        return {"submission": session_data.submission}
