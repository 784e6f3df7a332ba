from .containers import FairnessObject, FAIRNESS_CHECK_COLUMNS
from .reporting import ReportConfig, VerboseReporter, setup_logger
from .validation import (
    DEFAULT_CUTOFF,
    DEFAULT_EPSILON,
    resolve_protected,
    resolve_cutoff,
    resolve_epsilon,
    check_fairness_objects,
    check_explainers,
    resolve_labels,
)
from .fairness_check import fairness_check, fairness_check_table, FAIRNESS_CHECK_METRICS


__all__ = [
    "FairnessObject",
    "FAIRNESS_CHECK_COLUMNS",
    "ReportConfig",
    "VerboseReporter",
    "setup_logger",
    "DEFAULT_CUTOFF",
    "DEFAULT_EPSILON",
    "resolve_protected",
    "resolve_cutoff",
    "resolve_epsilon",
    "check_fairness_objects",
    "check_explainers",
    "resolve_labels",
    "fairness_check",
    "fairness_check_table",
    "FAIRNESS_CHECK_METRICS",
]
