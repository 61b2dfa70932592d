"""Shared data models for the stack builder flow."""

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, List, Optional, Tuple

FLOW_STEP_SELECT = "select"
FLOW_STEP_CONNECT = "connect"
FLOW_STEP_SUCCESS = "success"


@dataclass(frozen=True)
class StackOption:
    """A selectable tool; may unlock nested sub-options when selected."""

    id: str
    label: str
    image: str  # Opaque asset identifier, never loaded by the engine
    coming_soon: bool = False
    sub_options: Tuple["StackOption", ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "id": self.id,
            "label": self.label,
            "image": self.image,
            "comingSoon": self.coming_soon,
            "subOptions": [sub.to_dict() for sub in self.sub_options],
        }


@dataclass(frozen=True)
class StackCategory:
    """Top-level grouping of related stack options."""

    id: str
    label: str
    options: Tuple[StackOption, ...]
    required: bool = False  # Informational only
    multi_select: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "id": self.id,
            "label": self.label,
            "required": self.required,
            "multiSelect": self.multi_select,
            "options": [option.to_dict() for option in self.options],
        }


@dataclass(frozen=True)
class AssessmentLevel:
    """Discrete fit rating keyed by an inclusive range of enabled categories."""

    min: int
    max: int
    title: str
    description: str
    fit_text: str
    fit_description: str
    icon: str  # "empty", "warning", "check", "complete"
    ready: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "title": self.title,
            "description": self.description,
            "fitText": self.fit_text,
            "fitDescription": self.fit_description,
            "icon": self.icon,
            "ready": self.ready,
        }


@dataclass(frozen=True)
class FeedbackItem:
    """Capability shown in the assessment panel when a trigger category is covered."""

    id: str
    title: str
    description: str
    trigger_categories: Tuple[str, ...]


@dataclass
class SelectionSnapshot:
    """Read-only view of the engine's derived state after an input."""

    selected_options: FrozenSet[str]
    category_status: Dict[str, bool]
    assessment_level: AssessmentLevel
    enabled_categories_count: int
    current_step: str
    can_continue: bool

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON response."""
        return {
            "selectionSet": sorted(self.selected_options),
            "categoryStatus": dict(self.category_status),
            "assessmentLevel": self.assessment_level.to_dict(),
            "enabledCategoriesCount": self.enabled_categories_count,
            "currentStep": self.current_step,
            "canContinue": self.can_continue,
        }


@dataclass
class ConnectRequest:
    """Contact form submitted on the connect step."""

    name: str
    email: str
    problems: List[str] = field(default_factory=list)
    additional_info: str = ""
    accept_terms: bool = False

    @classmethod
    def from_json(cls, data: Any) -> "ConnectRequest":
        """Create from JSON request. Non-object bodies become an empty form."""
        if not isinstance(data, dict):
            data = {}
        problems = data.get("problems") or []
        if isinstance(problems, str):
            problems = [problems]
        elif not isinstance(problems, (list, tuple)):
            problems = []
        return cls(
            name=str(data.get("name") or "").strip(),
            email=str(data.get("email") or "").strip(),
            problems=[str(problem) for problem in problems],
            additional_info=str(data.get("additionalInfo") or ""),
            accept_terms=data.get("acceptTerms") is True,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase form payload."""
        return {
            "name": self.name,
            "email": self.email,
            "problems": list(self.problems),
            "additionalInfo": self.additional_info,
            "acceptTerms": self.accept_terms,
        }


@dataclass
class SessionData:
    selection: Any  # StackSelection; typed loosely to avoid an import cycle
    submission: Optional[Dict[str, Any]] = None  # Last successful contact payload
