from .containers import ChosenMetric, GroupMetric, FairnessHeatmap
from .choose_metric import choose_metric
from .group_metric import group_metric, model_performance, PERFORMANCE_METRICS
from .heatmap import fairness_heatmap
from .summary import fairness_check_summary, models_passed


__all__ = [
    "ChosenMetric",
    "GroupMetric",
    "FairnessHeatmap",
    "choose_metric",
    "group_metric",
    "model_performance",
    "PERFORMANCE_METRICS",
    "fairness_heatmap",
    "fairness_check_summary",
    "models_passed",
]
