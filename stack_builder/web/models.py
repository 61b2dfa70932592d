"""Web request/response models for Flask application."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class ToggleRequest:
    """Incoming option toggle request."""

    option_id: str
    category_id: str

    @classmethod
    def from_json(cls, data: Any) -> "ToggleRequest":
        """Create from JSON request."""
        if not isinstance(data, dict):
            data = {}
        return cls(
            option_id=str(data.get("optionId") or "").strip(),
            category_id=str(data.get("categoryId") or "").strip(),
        )

    def is_valid(self) -> bool:
        return bool(self.option_id and self.category_id)


@dataclass
class SubmissionResponse:
    """Response to a contact form submission."""

    state: Optional[Dict[str, Any]] = None
    submission: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    field_errors: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_result(cls, result: Dict[str, Any]) -> "SubmissionResponse":
        """Create from a workflow handler result."""
        return cls(
            state=result.get("state"),
            submission=result.get("submission"),
            error=result.get("error"),
            field_errors=result.get("fieldErrors") or {},
        )

    @property
    def status_code(self) -> int:
        """HTTP status for this response."""
        if not self.error:
            return 200
        if self.field_errors or self.state is None:
            return 400
        # Submitted from a step other than connect
        return 409

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        if self.error:
            result: Dict[str, Any] = {"error": self.error}
            if self.field_errors:
                result["fieldErrors"] = self.field_errors
            if self.state is not None:
                result["state"] = self.state
            return result
        return {"submission": self.submission, "state": self.state}
