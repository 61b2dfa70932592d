"""Assessment panel presentation logic derived from the selection engine."""

from typing import Any, Dict, List, Mapping, Sequence, Set, Tuple

from stack_builder.core.catalog import ASSESSMENT_FEEDBACK, STACK_CONFIG
from stack_builder.core.models import (
    FLOW_STEP_CONNECT,
    FLOW_STEP_SUCCESS,
    FeedbackItem,
    SelectionSnapshot,
    StackCategory,
)

PANEL_CARD_EMPTY = "empty"
PANEL_CARD_ASSESSMENT = "assessment"
PANEL_CARD_TESTIMONIAL = "testimonial"

# 4x3 grid in the assessment panel
MAX_INTEGRATIONS = 12


def active_feedback(
    category_status: Mapping[str, bool],
    feedback: Sequence[FeedbackItem] = ASSESSMENT_FEEDBACK,
) -> List[Tuple[FeedbackItem, bool]]:
    """Pair each feedback item with whether any of its trigger categories is covered."""
    return [
        (item, any(category_status.get(cat_id, False) for cat_id in item.trigger_categories))
        for item in feedback
    ]


def panel_card(current_step: str, enabled_count: int) -> str:
    """Pick the card shown in the assessment panel."""
    if current_step in (FLOW_STEP_CONNECT, FLOW_STEP_SUCCESS):
        return PANEL_CARD_TESTIMONIAL
    if enabled_count > 0:
        return PANEL_CARD_ASSESSMENT
    return PANEL_CARD_EMPTY


def integrations(
    catalog: Sequence[StackCategory] = STACK_CONFIG,
    limit: int = MAX_INTEGRATIONS,
) -> List[Dict[str, str]]:
    """
    Collect unique top-level integrations for the logo grid.

    Labels are de-duplicated (first occurrence wins) and coming-soon options
    are skipped.
    """
    seen: Set[str] = set()
    result: List[Dict[str, str]] = []

    for category in catalog:
        for option in category.options:
            if option.coming_soon or option.label in seen:
                continue
            seen.add(option.label)
            result.append({"label": option.label, "image": option.image})

    return result[:limit]


def build_assessment_view(
    snapshot: SelectionSnapshot,
    feedback: Sequence[FeedbackItem] = ASSESSMENT_FEEDBACK,
) -> Dict[str, Any]:
    """Render the assessment panel for a snapshot as a JSON-ready dict."""
    level = snapshot.assessment_level
    return {
        "card": panel_card(snapshot.current_step, snapshot.enabled_categories_count),
        **level.to_dict(),
        "feedback": [
            {
                "id": item.id,
                "title": item.title,
                "description": item.description,
                "active": is_active,
            }
            for item, is_active in active_feedback(snapshot.category_status, feedback)
        ],
    }
