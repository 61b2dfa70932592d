"""Tests for the selection and flow state machine."""

import pytest

from stack_builder.core.catalog import CategoryIds, OptionIds
from stack_builder.core.models import StackCategory, StackOption
from stack_builder.core.selection import StackSelection
from stack_builder.shared.errors import CatalogError


@pytest.fixture
def selection():
    return StackSelection()


def _enable(selection, count):
    """Cover the first `count` categories with one option each."""
    picks = [
        (OptionIds.SLACK, CategoryIds.COMMUNICATION),
        (OptionIds.LOKI, CategoryIds.LOGS),
        (OptionIds.KUBERNETES, CategoryIds.INFRASTRUCTURE),
        (OptionIds.GITHUB, CategoryIds.SOURCE_CODE),
        (OptionIds.PROMETHEUS, CategoryIds.METRICS),
    ]
    for option_id, category_id in picks[:count]:
        selection.toggle(option_id, category_id)


class TestToggle:
    @pytest.mark.parametrize(
        "option_id,category_id",
        [
            (OptionIds.SLACK, CategoryIds.COMMUNICATION),
            (OptionIds.TEAMS, CategoryIds.COMMUNICATION),
            (OptionIds.LOKI, CategoryIds.LOGS),
            (OptionIds.AWS, CategoryIds.INFRASTRUCTURE),
            (OptionIds.ECS, CategoryIds.INFRASTRUCTURE),
            (OptionIds.GCP_METRICS, CategoryIds.METRICS),
        ],
    )
    def test_double_toggle_restores_previous_selection(self, selection, option_id, category_id):
        selection.toggle(OptionIds.GITHUB, CategoryIds.SOURCE_CODE)
        before = selection.selected_options

        selection.toggle(option_id, category_id)
        assert selection.selected_options != before
        selection.toggle(option_id, category_id)

        assert selection.selected_options == before

    def test_single_select_is_exclusive(self, selection):
        selection.toggle(OptionIds.SLACK, CategoryIds.COMMUNICATION)
        selection.toggle(OptionIds.TEAMS, CategoryIds.COMMUNICATION)

        assert OptionIds.TEAMS in selection.selected_options
        assert OptionIds.SLACK not in selection.selected_options

    def test_multi_select_keeps_both(self, selection):
        selection.toggle(OptionIds.LOKI, CategoryIds.LOGS)
        selection.toggle(OptionIds.SPLUNK, CategoryIds.LOGS)

        assert selection.selected_options == {OptionIds.LOKI, OptionIds.SPLUNK}

    def test_deselecting_parent_removes_sub_options(self, selection):
        selection.toggle(OptionIds.AWS, CategoryIds.INFRASTRUCTURE)
        selection.toggle(OptionIds.ECS, CategoryIds.INFRASTRUCTURE)
        assert selection.selected_options == {OptionIds.AWS, OptionIds.ECS}

        selection.toggle(OptionIds.AWS, CategoryIds.INFRASTRUCTURE)

        assert selection.selected_options == frozenset()

    def test_deselecting_sub_option_keeps_parent(self, selection):
        selection.toggle(OptionIds.AWS, CategoryIds.INFRASTRUCTURE)
        selection.toggle(OptionIds.ECS, CategoryIds.INFRASTRUCTURE)
        selection.toggle(OptionIds.ECS, CategoryIds.INFRASTRUCTURE)

        assert selection.selected_options == {OptionIds.AWS}

    def test_single_select_clears_orphaned_sub_options(self):
        catalog = [
            StackCategory(
                id="cloud",
                label="Cloud",
                multi_select=False,
                options=(
                    StackOption("aws", "AWS", "aws.svg", sub_options=(StackOption("ecs", "ECS", "aws.svg"),)),
                    StackOption("gcp", "GCP", "gcp.svg"),
                ),
            )
        ]
        selection = StackSelection(catalog)
        selection.toggle("aws", "cloud")
        selection.toggle("ecs", "cloud")

        selection.toggle("gcp", "cloud")

        assert selection.selected_options == {"gcp"}

    def test_unknown_category_is_noop(self, selection):
        selection.toggle(OptionIds.LOKI, CategoryIds.LOGS)

        selection.toggle(OptionIds.SLACK, "not-a-category")

        assert selection.selected_options == {OptionIds.LOKI}

    def test_unknown_option_is_added_and_removed_without_cascade(self, selection):
        selection.toggle(OptionIds.AWS, CategoryIds.INFRASTRUCTURE)
        selection.toggle(OptionIds.ECS, CategoryIds.INFRASTRUCTURE)

        selection.toggle("mystery", CategoryIds.INFRASTRUCTURE)
        assert "mystery" in selection.selected_options

        selection.toggle("mystery", CategoryIds.INFRASTRUCTURE)
        assert selection.selected_options == {OptionIds.AWS, OptionIds.ECS}

    def test_coming_soon_option_counts(self, selection):
        selection.toggle(OptionIds.TEAMS, CategoryIds.COMMUNICATION)
        assert selection.category_status[CategoryIds.COMMUNICATION] is True

    def test_selected_options_is_a_copy(self, selection):
        selection.toggle(OptionIds.LOKI, CategoryIds.LOGS)
        snapshot = selection.selected_options
        selection.toggle(OptionIds.LOKI, CategoryIds.LOGS)
        assert snapshot == {OptionIds.LOKI}

    def test_is_selected_tracks_toggles(self, selection):
        assert selection.is_selected(OptionIds.AWS) is False
        selection.toggle(OptionIds.AWS, CategoryIds.INFRASTRUCTURE)
        selection.toggle(OptionIds.ECS, CategoryIds.INFRASTRUCTURE)
        assert selection.is_selected(OptionIds.ECS) is True
        selection.toggle(OptionIds.AWS, CategoryIds.INFRASTRUCTURE)
        assert selection.is_selected(OptionIds.AWS) is False
        assert selection.is_selected(OptionIds.ECS) is False

    def test_visible_options_follow_selection(self, selection):
        assert OptionIds.ECS not in [o.id for o in selection.visible_options(CategoryIds.INFRASTRUCTURE)]
        selection.toggle(OptionIds.AWS, CategoryIds.INFRASTRUCTURE)
        assert OptionIds.ECS in [o.id for o in selection.visible_options(CategoryIds.INFRASTRUCTURE)]
        assert selection.visible_options("missing") == []


class TestDerivedState:
    def test_logs_status_follows_single_option(self, selection):
        assert selection.category_status[CategoryIds.LOGS] is False
        selection.toggle(OptionIds.ELASTICSEARCH, CategoryIds.LOGS)
        assert selection.category_status[CategoryIds.LOGS] is True
        selection.toggle(OptionIds.ELASTICSEARCH, CategoryIds.LOGS)
        assert selection.category_status[CategoryIds.LOGS] is False

    def test_level_boundaries(self, selection):
        assert selection.enabled_categories_count == 0
        assert selection.assessment_level.title == "Select your stack"

        _enable(selection, 1)
        assert selection.assessment_level.ready is False
        assert selection.can_continue is False

        selection.toggle(OptionIds.LOKI, CategoryIds.LOGS)
        assert selection.enabled_categories_count == 2
        assert selection.assessment_level.ready is True
        assert selection.can_continue is True

    def test_complete_coverage(self, selection):
        _enable(selection, 5)
        assert selection.enabled_categories_count == 5
        assert selection.assessment_level.title == "Complete coverage"

    def test_required_category_does_not_block_continue(self, selection):
        selection.toggle(OptionIds.LOKI, CategoryIds.LOGS)
        selection.toggle(OptionIds.PROMETHEUS, CategoryIds.METRICS)
        assert selection.category_status[CategoryIds.COMMUNICATION] is False
        assert selection.can_continue is True

    def test_snapshot_matches_properties(self, selection):
        _enable(selection, 3)
        snapshot = selection.snapshot()

        assert snapshot.selected_options == selection.selected_options
        assert snapshot.category_status == selection.category_status
        assert snapshot.enabled_categories_count == 3
        assert snapshot.assessment_level == selection.assessment_level
        assert snapshot.can_continue is True
        assert snapshot.current_step == "select"

    def test_snapshot_to_dict(self, selection):
        selection.toggle(OptionIds.LOKI, CategoryIds.LOGS)
        selection.toggle(OptionIds.DATADOG_LOGS, CategoryIds.LOGS)

        data = selection.snapshot().to_dict()

        assert data["selectionSet"] == [OptionIds.DATADOG_LOGS, OptionIds.LOKI]
        assert data["enabledCategoriesCount"] == 1
        assert data["canContinue"] is False
        assert data["currentStep"] == "select"
        assert data["assessmentLevel"]["title"] == "Insufficient stack coverage"


class TestFlow:
    def test_starts_on_select(self, selection):
        assert selection.current_step == "select"

    def test_go_to_connect_blocked_with_one_category(self, selection):
        _enable(selection, 1)
        selection.go_to_connect()
        assert selection.current_step == "select"

        selection.toggle(OptionIds.LOKI, CategoryIds.LOGS)
        selection.go_to_connect()
        assert selection.current_step == "connect"

    def test_back_and_success_are_unconditional(self, selection):
        selection.go_to_success()
        assert selection.current_step == "success"
        selection.go_to_select()
        assert selection.current_step == "select"

    def test_deselecting_on_connect_keeps_step(self, selection):
        _enable(selection, 2)
        selection.go_to_connect()
        selection.toggle(OptionIds.SLACK, CategoryIds.COMMUNICATION)

        assert selection.can_continue is False
        assert selection.current_step == "connect"

    def test_reset_clears_selection_and_step(self, selection):
        _enable(selection, 3)
        selection.go_to_connect()
        assert selection.current_step == "connect"

        selection.reset_state()

        assert selection.selected_options == frozenset()
        assert selection.current_step == "select"
        assert selection.enabled_categories_count == 0


def test_malformed_catalog_rejected_at_construction():
    catalog = [
        StackCategory("a", "A", (StackOption("x", "X", "x.svg"), StackOption("x", "X2", "x.svg"))),
    ]
    with pytest.raises(CatalogError):
        StackSelection(catalog)
