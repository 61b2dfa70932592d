"""Stack Builder - CLI entry point."""

import asyncio
import logging
from typing import Any, Callable, Dict, List

from opentelemetry import trace
from opentelemetry.trace import SpanKind

from stack_builder.core.config import get_log_level, load_environment
from stack_builder.core.connect import PROBLEM_OPTIONS
from stack_builder.core.models import FLOW_STEP_CONNECT, FLOW_STEP_SELECT, FLOW_STEP_SUCCESS
from stack_builder.core.option_tree import walk_options
from stack_builder.cli.interface import CLIInterface
from stack_builder.cli.prompts import (
    number_visible_options,
    print_assessment,
    print_categories,
    print_connect_intro,
    print_error,
    print_field_errors,
    print_select_help,
    print_success,
    print_workflow_start,
)
from stack_builder.shared.async_utils import create_event_loop
from stack_builder.shared.logging import bind_session_id, setup_logging
from stack_builder.shared.metrics import configure_metrics
from stack_builder.shared.tracing import configure_tracing, get_tracer

logger = logging.getLogger(__name__)

SESSION_ID = "cli-session"


def _parse_problem_choices(raw: str) -> List[str]:
    """Map comma/space separated menu numbers to problem option ids."""
    problems: List[str] = []
    for token in raw.replace(",", " ").split():
        if token.isdigit() and 1 <= int(token) <= len(PROBLEM_OPTIONS):
            problem_id = PROBLEM_OPTIONS[int(token) - 1]["id"]
            if problem_id not in problems:
                problems.append(problem_id)
    return problems


def _prompt_connect_form(input_fn: Callable[[str], str]) -> Dict[str, Any]:
    """Collect the contact form fields interactively."""
    name = input_fn("Name: ").strip()
    email = input_fn("Work email: ").strip()

    print("\nWhat are you looking to solve? (numbers, comma separated)")
    for number, option in enumerate(PROBLEM_OPTIONS, start=1):
        print(f"  {number}. {option['label']}")
    problems = _parse_problem_choices(input_fn("Choices: "))

    additional_info = input_fn("Anything else about your setup we should know? ").strip()
    accept = input_fn("I accept the Terms & Conditions (yes/no): ").strip().lower()

    return {
        "name": name,
        "email": email,
        "problems": problems,
        "additionalInfo": additional_info,
        "acceptTerms": accept in ("yes", "y"),
    }


async def _select_step(
    interface: CLIInterface, state: Dict[str, Any], input_fn: Callable[[str], str]
) -> bool:
    """Run one select-step prompt. Returns False when the user quits."""
    catalog = interface.context.catalog
    all_options = [option for category in catalog for option in walk_options(category.options)]
    labels = {option.id: option.label for option in all_options}
    coming_soon = [option.id for option in all_options if option.coming_soon]

    print_categories(catalog, state, labels, coming_soon)
    print_assessment(state)
    print_select_help(state["canContinue"])

    command = input_fn("> ").strip().lower()
    if command in ("q", "quit"):
        return False

    if command in ("r", "reset"):
        await interface.reset_session(SESSION_ID)
        return True

    if command in ("c", "continue"):
        result = await interface.go_to_connect(SESSION_ID)
        if result["currentStep"] != FLOW_STEP_CONNECT:
            print_error("Select at least two categories to continue.")
        return True

    numbered = number_visible_options(catalog, state["visibleOptions"])
    for token in command.replace(",", " ").split():
        if not token.isdigit() or not 1 <= int(token) <= len(numbered):
            print_error(f"Unknown choice: {token}")
            continue
        option_id, category_id = numbered[int(token) - 1]
        await interface.toggle_option(SESSION_ID, option_id, category_id)
    return True


async def _connect_step(interface: CLIInterface, input_fn: Callable[[str], str]) -> bool:
    """Run the contact step. Returns False when the user quits."""
    print_connect_intro()
    command = input_fn("Press Enter to fill in the form, 'b' to go back, 'q' to quit: ")
    command = command.strip().lower()

    if command in ("q", "quit"):
        return False
    if command in ("b", "back"):
        await interface.go_to_select(SESSION_ID)
        return True

    form = _prompt_connect_form(input_fn)
    print("\nSubmitting...")
    result = await interface.submit_connect(SESSION_ID, form)
    if "error" in result:
        print_error(result["error"])
        print_field_errors(result.get("fieldErrors", {}))
    return True


async def run_cli_workflow(
    interface: CLIInterface, input_fn: Callable[[str], str] = input
) -> None:
    """Run the interactive wizard until the user quits or declines to start over."""
    print_workflow_start()

    while True:
        state = interface.get_state(SESSION_ID)
        step = state["currentStep"]

        if step == FLOW_STEP_SELECT:
            if not await _select_step(interface, state, input_fn):
                return
        elif step == FLOW_STEP_CONNECT:
            if not await _connect_step(interface, input_fn):
                return
        elif step == FLOW_STEP_SUCCESS:
            print_success()
            again = input_fn("Start over? (yes/no): ").strip().lower()
            if again not in ("yes", "y"):
                return
            await interface.reset_session(SESSION_ID)
            print_workflow_start()


async def main() -> None:
    """Main entry point for CLI."""
    load_environment()

    setup_logging(
        name="stack_builder_cli",
        level=get_log_level(),
        service_name="stack-builder-cli",
    )

    configure_tracing(service_name="stack-builder-cli")
    configure_metrics()

    tracer = get_tracer(instrumenting_module_name="stack_builder.session")

    # Single long-lived span so all CLI logs correlate.
    session_span = tracer.start_span(
        name="session.cli",
        kind=SpanKind.CLIENT,
        attributes={"session.id": SESSION_ID, "session.type": "cli"},
    )
    try:
        with trace.use_span(session_span, end_on_exit=False), bind_session_id(SESSION_ID):
            await run_cli_workflow(CLIInterface())
    except (KeyboardInterrupt, EOFError):
        print()
    except Exception as e:
        logger.exception("CLI workflow failed")
        print_error(str(e))
    finally:
        session_span.end()


def run() -> None:
    """Console script entry point."""
    loop = create_event_loop()
    asyncio.set_event_loop(loop)

    try:
        loop.run_until_complete(main())
    finally:
        loop.run_until_complete(loop.shutdown_asyncgens())
        loop.close()


if __name__ == "__main__":
    run()
