"""CLI prompts and formatting utilities."""

from typing import Any, Dict, List, Mapping, Sequence, Tuple

from stack_builder.core.models import StackCategory


def print_header(title: str) -> None:
    """Print a formatted section header."""
    print(f"\n{'=' * 60}")
    print(f"=== {title}")
    print(f"{'=' * 60}\n")


def print_error(error: str) -> None:
    """Print error message."""
    print(f"❌ Error: {error}\n", flush=True)


def print_workflow_start() -> None:
    """Print workflow start message."""
    print_header("Select your stack")
    print("Select your stack to see if Cleric is a fit. If it is, get 4 weeks free.\n")


def number_visible_options(
    catalog: Sequence[StackCategory], visible: Mapping[str, List[str]]
) -> List[Tuple[str, str]]:
    """Assign menu numbers (1-based) to visible options as (option_id, category_id) pairs."""
    numbered: List[Tuple[str, str]] = []
    for category in catalog:
        for option_id in visible.get(category.id, []):
            numbered.append((option_id, category.id))
    return numbered


def print_categories(
    catalog: Sequence[StackCategory],
    state: Dict[str, Any],
    labels: Mapping[str, str],
    coming_soon: Sequence[str] = (),
) -> None:
    """Print every category with its numbered, currently visible options."""
    selected = set(state["selectionSet"])
    visible = state["visibleOptions"]
    number = 0

    for category in catalog:
        suffix = " (select all that apply)" if category.multi_select else ""
        required = " *" if category.required else ""
        print(f"{category.label}{required}{suffix}")
        for option_id in visible.get(category.id, []):
            number += 1
            mark = "x" if option_id in selected else " "
            soon = "  [coming soon]" if option_id in coming_soon else ""
            print(f"  {number:>2}. [{mark}] {labels.get(option_id, option_id)}{soon}")
        print()


def print_assessment(state: Dict[str, Any]) -> None:
    """Print the assessment panel for the current state."""
    assessment = state["assessment"]
    print("-" * 60)
    print(f"Assessment: {assessment['title']}")
    if assessment["fitText"]:
        print(f"  {assessment['fitText']} - {assessment['fitDescription']}")
    else:
        print(f"  {assessment['description']}")

    if assessment["card"] == "assessment":
        print("\nWhat Cleric can do:")
        for item in assessment["feedback"]:
            mark = "✅" if item["active"] else "  "
            print(f"  {mark} {item['title']}")
    print("-" * 60)


def print_select_help(can_continue: bool) -> None:
    """Print the commands available on the select step."""
    continue_hint = "c = continue" if can_continue else "c = continue (needs 2+ categories)"
    print(f"Enter option numbers to toggle (e.g. '1 4'), {continue_hint}, r = reset, q = quit")


def print_connect_intro() -> None:
    """Print the contact step header."""
    print_header("Connect with the Cleric team")
    print(
        "A Cleric engineer will set up your dedicated instance (ready in ~24 hours).\n"
        "Book a call to discuss your setup and get started.\n"
    )


def print_field_errors(field_errors: Mapping[str, str]) -> None:
    """Print contact form validation errors."""
    for field_name, message in field_errors.items():
        print(f"  - {field_name}: {message}")
    print()


def print_success() -> None:
    """Print final success message."""
    print_header("Thank you!")
    print(
        "We've received your request. A Cleric engineer will reach out within 24\n"
        "hours to set up your dedicated instance and schedule a call.\n"
    )
