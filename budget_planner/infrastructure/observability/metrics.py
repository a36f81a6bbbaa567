"""Prometheus metrics for analysis volume, health tiers and scenario outcomes"""

from prometheus_client import Counter, Histogram

analysis_counter = Counter(
    "budget_analysis_total",
    "Total analyses computed",
    ["operation"],  # health | budget | behavior | monthly | goals | scenario
)

health_status_counter = Counter(
    "budget_health_status_total",
    "Financial health reports by status",
    ["status"],
)

goal_status_counter = Counter(
    "budget_goal_status_total",
    "Goal feasibility evaluations by status",
    ["status"],
)

scenario_severity_counter = Counter(
    "budget_scenario_severity_total",
    "Scenario simulations by impact severity",
    ["severity"],
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_analysis(operation: str) -> None:
    analysis_counter.labels(operation=operation).inc()


def record_health(status: str) -> None:
    """Record one health report; status is the tier label"""
    analysis_counter.labels(operation="health").inc()
    health_status_counter.labels(status=status).inc()


def record_goal_statuses(statuses) -> None:
    analysis_counter.labels(operation="goals").inc()
    for status in statuses:
        goal_status_counter.labels(status=status).inc()


def record_scenario(severity: str) -> None:
    analysis_counter.labels(operation="scenario").inc()
    scenario_severity_counter.labels(severity=severity).inc()
