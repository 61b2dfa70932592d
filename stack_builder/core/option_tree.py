"""Pure helpers for walking the option tree of a catalog.

None of these functions mutate their inputs. They are cheap enough to be
recomputed on every selection change, so callers never cache their results.
"""

from typing import AbstractSet, Dict, Iterator, List, Optional, Sequence, Tuple

from stack_builder.core.models import StackCategory, StackOption


def find_option(options: Sequence[StackOption], option_id: str) -> Optional[StackOption]:
    """Depth-first search for an option by id, including nested sub-options."""
    for option in options:
        if option.id == option_id:
            return option
        found = find_option(option.sub_options, option_id)
        if found is not None:
            return found
    return None


def find_option_in_categories(
    categories: Sequence[StackCategory], option_id: str
) -> Optional[Tuple[StackOption, StackCategory]]:
    """Find an option by id across all categories, returning it with its owner."""
    for category in categories:
        option = find_option(category.options, option_id)
        if option is not None:
            return option, category
    return None


def find_category(
    categories: Sequence[StackCategory], category_id: str
) -> Optional[StackCategory]:
    """Return the category with the given id, or None."""
    for category in categories:
        if category.id == category_id:
            return category
    return None


def descendant_ids(option: StackOption) -> List[str]:
    """
    Return every id below an option, parent-first and depth-first.

    The option's own id is not included.
    """
    ids: List[str] = []
    for sub_option in option.sub_options:
        ids.append(sub_option.id)
        ids.extend(descendant_ids(sub_option))
    return ids


def walk_options(options: Sequence[StackOption]) -> Iterator[StackOption]:
    """Yield every option of a tree, parent-first and depth-first."""
    for option in options:
        yield option
        yield from walk_options(option.sub_options)


def category_option_ids(category: StackCategory) -> List[str]:
    """Return the id of every option in a category's tree, at every depth."""
    return [option.id for option in walk_options(category.options)]


def flatten_for_display(
    options: Sequence[StackOption], selected: AbstractSet[str]
) -> List[StackOption]:
    """
    Flatten options for rendering.

    Each option is followed by its sub-options iff the option itself is
    selected. The same rule is applied to the sub-options, so a hidden parent
    hides its whole subtree.
    """
    flattened: List[StackOption] = []
    for option in options:
        flattened.append(option)
        if option.id in selected and option.sub_options:
            flattened.extend(flatten_for_display(option.sub_options, selected))
    return flattened


def category_has_selection(category: StackCategory, selected: AbstractSet[str]) -> bool:
    """True if any option of the category (at any depth) is selected."""
    return any(option_id in selected for option_id in category_option_ids(category))


def build_category_status_map(
    categories: Sequence[StackCategory], selected: AbstractSet[str]
) -> Dict[str, bool]:
    """Map each category id to whether it has a selection, in catalog order."""
    return {
        category.id: category_has_selection(category, selected) for category in categories
    }


def count_enabled_categories(
    categories: Sequence[StackCategory], selected: AbstractSet[str]
) -> int:
    """Count categories with at least one selected option."""
    return sum(1 for category in categories if category_has_selection(category, selected))
