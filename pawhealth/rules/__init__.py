"""
Rules Module — Dog Health Status Scoring

Public API:
- HealthStatusEvaluator: Converts care records into a health verdict
- HealthStatusReport: Score, status band, next action, factors, summary
- HealthStatus: Excellent/Good/Fair/Needs Attention/Poor/Unknown
- evaluate_health_status: Convenience wrapper with default windows
"""

from .evaluator import (
    HealthStatusEvaluator,
    HealthStatusReport,
    HealthSummary,
    HealthStatus,
    StatusColor,
    RecordWindow,
    ScoringRule,
    SubScore,
    apply_rules,
    evaluate_health_status,
    STATUS_BANDS,
    VACCINATION_RULES,
    HEALTH_EVENT_RULES,
    APPOINTMENT_RULES,
    REGULAR_CARE_RULES,
    THRESHOLD_EXCELLENT,
    THRESHOLD_GOOD,
    THRESHOLD_FAIR,
    THRESHOLD_NEEDS_ATTENTION,
    THRESHOLD_POOR,
)

__all__ = [
    "HealthStatusEvaluator",
    "HealthStatusReport",
    "HealthSummary",
    "HealthStatus",
    "StatusColor",
    "RecordWindow",
    "ScoringRule",
    "SubScore",
    "apply_rules",
    "evaluate_health_status",
    "STATUS_BANDS",
    "VACCINATION_RULES",
    "HEALTH_EVENT_RULES",
    "APPOINTMENT_RULES",
    "REGULAR_CARE_RULES",
    "THRESHOLD_EXCELLENT",
    "THRESHOLD_GOOD",
    "THRESHOLD_FAIR",
    "THRESHOLD_NEEDS_ATTENTION",
    "THRESHOLD_POOR",
]
