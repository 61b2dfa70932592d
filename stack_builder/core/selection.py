"""Selection and flow state machine for one stack builder session."""

import logging
from typing import Dict, FrozenSet, List, Optional, Sequence, Set

from stack_builder.core.catalog import (
    MIN_CATEGORIES_TO_CONTINUE,
    STACK_CONFIG,
    get_assessment_level,
    validate_catalog,
)
from stack_builder.core.models import (
    FLOW_STEP_CONNECT,
    FLOW_STEP_SELECT,
    FLOW_STEP_SUCCESS,
    AssessmentLevel,
    SelectionSnapshot,
    StackCategory,
    StackOption,
)
from stack_builder.core.option_tree import (
    build_category_status_map,
    category_option_ids,
    count_enabled_categories,
    descendant_ids,
    find_category,
    find_option,
    flatten_for_display,
)

# Get logger (setup handled by application entry point)
logger = logging.getLogger(__name__)


class StackSelection:
    """
    Owns the selection set and the current flow step of a wizard session.

    Every derived value (category status, enabled count, assessment level,
    continue eligibility) is recomputed from the selection set on access and
    is never maintained incrementally.

    None of the operations raise: unknown categories and blocked transitions
    are silent no-ops.
    """

    def __init__(self, catalog: Optional[Sequence[StackCategory]] = None):
        """
        Initialize an empty selection on the select step.

        Args:
            catalog: Categories to select from (defaults to STACK_CONFIG)

        Raises:
            CatalogError: If the catalog repeats a category or option id.
        """
        self.catalog: Sequence[StackCategory] = (
            tuple(catalog) if catalog is not None else tuple(STACK_CONFIG)
        )
        validate_catalog(self.catalog)
        self._selected: Set[str] = set()
        self._current_step: str = FLOW_STEP_SELECT

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def toggle(self, option_id: str, category_id: str) -> None:
        """
        Select or deselect an option within its category.

        Deselecting also removes every descendant of the option. Selecting in
        a single-select category first clears the whole category tree.
        """
        category = find_category(self.catalog, category_id)
        if category is None:
            logger.debug(f"Ignoring toggle of {option_id}: unknown category {category_id}")
            return

        next_selected = set(self._selected)
        option_config = find_option(category.options, option_id)
        if option_config is None:
            logger.debug(f"Option {option_id} not found in {category_id}; skipping cascade")

        if self.is_selected(option_id):
            next_selected.discard(option_id)
            if option_config is not None:
                next_selected.difference_update(descendant_ids(option_config))
        elif category.multi_select:
            next_selected.add(option_id)
        else:
            next_selected.difference_update(category_option_ids(category))
            next_selected.add(option_id)

        self._selected = next_selected

    @property
    def selected_options(self) -> FrozenSet[str]:
        return frozenset(self._selected)

    def is_selected(self, option_id: str) -> bool:
        """True if the option id is in the current selection set."""
        return option_id in self._selected

    @property
    def category_status(self) -> Dict[str, bool]:
        return build_category_status_map(self.catalog, self._selected)

    @property
    def enabled_categories_count(self) -> int:
        return count_enabled_categories(self.catalog, self._selected)

    @property
    def assessment_level(self) -> AssessmentLevel:
        return get_assessment_level(self.enabled_categories_count)

    @property
    def can_continue(self) -> bool:
        return self.enabled_categories_count >= MIN_CATEGORIES_TO_CONTINUE

    def visible_options(self, category_id: str) -> List[StackOption]:
        """Options of a category as they should be rendered right now."""
        category = find_category(self.catalog, category_id)
        if category is None:
            return []
        return flatten_for_display(category.options, self._selected)

    # ------------------------------------------------------------------
    # Flow
    # ------------------------------------------------------------------

    @property
    def current_step(self) -> str:
        return self._current_step

    def go_to_connect(self) -> None:
        """Move to the contact step if enough categories are covered."""
        if not self.can_continue:
            logger.debug(
                f"Blocked transition to connect: {self.enabled_categories_count} "
                f"categories enabled, {MIN_CATEGORIES_TO_CONTINUE} required"
            )
            return
        self._current_step = FLOW_STEP_CONNECT

    def go_to_select(self) -> None:
        self._current_step = FLOW_STEP_SELECT

    def go_to_success(self) -> None:
        self._current_step = FLOW_STEP_SUCCESS

    def reset_state(self) -> None:
        """Clear the selection and return to the select step."""
        self._selected = set()
        self._current_step = FLOW_STEP_SELECT

    def snapshot(self) -> SelectionSnapshot:
        """Capture every derived value from the current selection."""
        selected = frozenset(self._selected)
        enabled_count = count_enabled_categories(self.catalog, selected)
        return SelectionSnapshot(
            selected_options=selected,
            category_status=build_category_status_map(self.catalog, selected),
            assessment_level=get_assessment_level(enabled_count),
            enabled_categories_count=enabled_count,
            current_step=self._current_step,
            can_continue=enabled_count >= MIN_CATEGORIES_TO_CONTINUE,
        )
