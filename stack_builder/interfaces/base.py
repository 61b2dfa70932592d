"""Abstract base class for interface implementations."""

from abc import ABC, abstractmethod
from typing import Any, Dict


class StackBuilderInterface(ABC):
    """Abstract base for different interface implementations (CLI, Web, API, etc.)."""

    @abstractmethod
    async def toggle_option(
        self, session_id: str, option_id: str, category_id: str
    ) -> Dict[str, Any]:
        """
        Toggle an option within its category.

        Args:
            session_id: Unique identifier for the wizard session
            option_id: Option to select or deselect
            category_id: Category the option belongs to

        Returns:
            Session state dictionary (selection, coverage, assessment, step)
        """
        pass

    @abstractmethod
    async def go_to_connect(self, session_id: str) -> Dict[str, Any]:
        """
        Request the contact step; ignored below the coverage threshold.

        Args:
            session_id: Unique identifier for the wizard session

        Returns:
            Session state dictionary
        """
        pass

    @abstractmethod
    async def go_to_select(self, session_id: str) -> Dict[str, Any]:
        """
        Return to stack selection.

        Args:
            session_id: Unique identifier for the wizard session

        Returns:
            Session state dictionary
        """
        pass

    @abstractmethod
    async def submit_connect(self, session_id: str, form: Dict[str, Any]) -> Dict[str, Any]:
        """
        Submit the contact form from the connect step.

        Args:
            session_id: Unique identifier for the wizard session
            form: Contact form fields (name, email, problems, additionalInfo, acceptTerms)

        Returns:
            Dictionary with keys:
                - 'submission': Submitted payload on success
                - 'state': Session state dictionary
                - 'error': Error message if applicable
                - 'fieldErrors': Per-field validation messages if applicable
        """
        pass

    @abstractmethod
    async def reset_session(self, session_id: str) -> Dict[str, Any]:
        """
        Clear the selection and return to the select step.

        Args:
            session_id: Unique identifier for the wizard session
        """
        pass

    @abstractmethod
    def get_state(self, session_id: str) -> Dict[str, Any]:
        """
        Get the derived state for a session.

        Args:
            session_id: Unique identifier for the wizard session

        Returns:
            Session state dictionary
        """
        pass
