"""Static catalog of stack categories, options and assessment levels.

The catalog is immutable configuration: categories own their options and
options own their sub-options. Option ids are unique across the whole
catalog, so an option's category can always be recovered by lookup.
"""

import logging
from typing import List, Sequence, Set

from stack_builder.core.models import AssessmentLevel, FeedbackItem, StackCategory, StackOption
from stack_builder.core.option_tree import walk_options
from stack_builder.shared.errors import CatalogError

logger = logging.getLogger(__name__)

# Minimum number of covered categories before the contact step opens
MIN_CATEGORIES_TO_CONTINUE = 2


class CategoryIds:
    COMMUNICATION = "communication"
    LOGS = "logs"
    INFRASTRUCTURE = "infrastructure"
    SOURCE_CODE = "source-code"
    METRICS = "metrics"


class OptionIds:
    # Communication
    SLACK = "slack"
    TEAMS = "teams"
    # Logs
    DATADOG_LOGS = "datadog-logs"
    LOKI = "loki"
    ELASTICSEARCH = "elasticsearch"
    CLOUDWATCH_LOGS = "cloudwatch-logs"
    GCP_LOGGING = "gcp-logging"
    SPLUNK = "splunk"
    # Infrastructure
    KUBERNETES = "kubernetes"
    AWS = "aws"
    ECS = "ecs"
    AZURE = "azure"
    GCP = "gcp"
    # Source code
    GITHUB = "github"
    GITLAB = "gitlab"
    # Metrics
    PROMETHEUS = "prometheus"
    DATADOG_METRICS = "datadog-metrics"
    CLOUDWATCH_METRICS = "cloudwatch-metrics"
    GCP_METRICS = "gcp-metrics"


ASSESSMENT_LEVELS: List[AssessmentLevel] = [
    AssessmentLevel(
        min=0,
        max=0,
        title="Select your stack",
        description="Select options to see coverage",
        fit_text="",
        fit_description="",
        icon="empty",
        ready=False,
    ),
    AssessmentLevel(
        min=1,
        max=1,
        title="Insufficient stack coverage",
        description="Requires logs or metrics integration",
        fit_text="Poor fit | 1/5 enabled",
        fit_description="Requires logs or metrics integration",
        icon="warning",
        ready=False,
    ),
    AssessmentLevel(
        min=2,
        max=2,
        title="Basic coverage",
        description="2/5 capabilities enabled",
        fit_text="Minimal fit | 2/5 enabled",
        fit_description="Ready to continue",
        icon="warning",
        ready=True,
    ),
    AssessmentLevel(
        min=3,
        max=3,
        title="Good coverage",
        description="3/5 capabilities enabled",
        fit_text="Good fit | 3/5 enabled",
        fit_description="Ready for comprehensive investigations",
        icon="check",
        ready=True,
    ),
    AssessmentLevel(
        min=4,
        max=4,
        title="Good coverage",
        description="4/5 capabilities enabled",
        fit_text="Good fit | 4/5 enabled",
        fit_description="Ready for comprehensive investigations",
        icon="check",
        ready=True,
    ),
    AssessmentLevel(
        min=5,
        max=5,
        title="Complete coverage",
        description="5/5 capabilities enabled",
        fit_text="Excellent fit | 5/5 enabled",
        fit_description="e2e investigations ready",
        icon="complete",
        ready=True,
    ),
]


STACK_CONFIG: List[StackCategory] = [
    StackCategory(
        id=CategoryIds.COMMUNICATION,
        label="Communication",
        required=True,
        multi_select=False,
        options=(
            StackOption(OptionIds.SLACK, "Slack", "logos/slack.svg"),
            StackOption(OptionIds.TEAMS, "Teams", "logos/teams.svg", coming_soon=True),
        ),
    ),
    StackCategory(
        id=CategoryIds.LOGS,
        label="Logs",
        multi_select=True,
        options=(
            StackOption(OptionIds.DATADOG_LOGS, "Datadog", "logos/datadog.svg"),
            StackOption(OptionIds.LOKI, "Loki", "logos/loki.svg"),
            StackOption(OptionIds.ELASTICSEARCH, "Elasticsearch", "logos/elasticsearch.svg"),
            StackOption(OptionIds.CLOUDWATCH_LOGS, "CloudWatch", "logos/aws.svg"),
            StackOption(OptionIds.GCP_LOGGING, "GCP Logging", "logos/gcp.svg"),
            StackOption(OptionIds.SPLUNK, "Splunk", "logos/splunk.svg", coming_soon=True),
        ),
    ),
    StackCategory(
        id=CategoryIds.INFRASTRUCTURE,
        label="Infrastructure",
        multi_select=True,
        options=(
            StackOption(OptionIds.KUBERNETES, "Kubernetes", "logos/kubernetes.svg"),
            StackOption(
                OptionIds.AWS,
                "Amazon Web Services",
                "logos/aws.svg",
                sub_options=(StackOption(OptionIds.ECS, "ECS", "logos/aws.svg"),),
            ),
            StackOption(OptionIds.AZURE, "Azure", "logos/azure.svg"),
            StackOption(OptionIds.GCP, "Google Cloud Platform", "logos/gcp.svg"),
        ),
    ),
    StackCategory(
        id=CategoryIds.SOURCE_CODE,
        label="Source Code",
        multi_select=True,
        options=(
            StackOption(OptionIds.GITHUB, "GitHub", "logos/github.svg"),
            StackOption(OptionIds.GITLAB, "GitLab", "logos/gitlab.svg", coming_soon=True),
        ),
    ),
    StackCategory(
        id=CategoryIds.METRICS,
        label="Metrics",
        multi_select=True,
        options=(
            StackOption(OptionIds.PROMETHEUS, "Prometheus", "logos/prometheus.png"),
            StackOption(OptionIds.DATADOG_METRICS, "Datadog", "logos/datadog.svg"),
            StackOption(OptionIds.CLOUDWATCH_METRICS, "AWS CloudWatch", "logos/aws.svg"),
            StackOption(OptionIds.GCP_METRICS, "GCP Metrics", "logos/gcp.svg"),
        ),
    ),
]


ASSESSMENT_FEEDBACK: List[FeedbackItem] = [
    FeedbackItem(
        id="auto-receive",
        title="Auto-receive alerts via Slack",
        description=(
            "Cleric joins your Slack channels to receive alerts and respond "
            "with investigations automatically"
        ),
        trigger_categories=(CategoryIds.COMMUNICATION,),
    ),
    FeedbackItem(
        id="search-logs",
        title="Search logs and trace errors",
        description=(
            "Query log systems to find error patterns, trace request flows, "
            "and identify root causes across distributed services"
        ),
        trigger_categories=(CategoryIds.LOGS,),
    ),
    FeedbackItem(
        id="query-metrics",
        title="Query metrics and detect anomalies",
        description=(
            "Analyze time-series data to identify performance degradations, "
            "resource bottlenecks, and abnormal patterns"
        ),
        trigger_categories=(CategoryIds.METRICS,),
    ),
    FeedbackItem(
        id="debug-infra",
        title="Debug infrastructure state",
        description=(
            "Run kubectl, AWS CLI, and other cloud tools to inspect pods, containers, "
            "deployments, and cloud resources during investigations"
        ),
        trigger_categories=(CategoryIds.INFRASTRUCTURE,),
    ),
    FeedbackItem(
        id="analyze-code",
        title="Analyze code, deployments, and CI/CD",
        description=(
            "Review recent code changes, examine deployment history, check CI/CD logs, "
            "and suggest code fixes based on error patterns"
        ),
        trigger_categories=(CategoryIds.SOURCE_CODE,),
    ),
]


def get_assessment_level(enabled_count: int) -> AssessmentLevel:
    """
    Return the assessment level whose range contains the enabled-category count.

    Falls back to the first (empty) level when no range matches.
    """
    for level in ASSESSMENT_LEVELS:
        if level.min <= enabled_count <= level.max:
            return level
    return ASSESSMENT_LEVELS[0]


def validate_catalog(categories: Sequence[StackCategory]) -> None:
    """
    Check that category ids and option ids (at every depth) are unique.

    Raises:
        CatalogError: If any id is repeated.
    """
    category_ids: Set[str] = set()
    option_ids: Set[str] = set()

    for category in categories:
        if category.id in category_ids:
            raise CatalogError(f"Duplicate category id in catalog: {category.id}")
        category_ids.add(category.id)
        for option in walk_options(category.options):
            if option.id in option_ids:
                raise CatalogError(f"Duplicate option id in catalog: {option.id}")
            option_ids.add(option.id)

    logger.debug(
        f"Catalog validated: {len(category_ids)} categories, {len(option_ids)} options"
    )
