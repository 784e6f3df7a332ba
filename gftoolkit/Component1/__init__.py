from .containers import METRICS, ConfusionMatrix, ModelExplainer, ModelFairness, ProtectedAttribute
from .utilities import confusion_matrix_counts, group_confusion_matrices, _is_valid_cutoff, _as_1d
from .group_metrics import calculate_metrics, group_metric_matrix, parity_loss, evaluate_group_fairness


__all__ = [
    "METRICS",
    "ConfusionMatrix",
    "ModelExplainer",
    "ModelFairness",
    "ProtectedAttribute",
    "confusion_matrix_counts",
    "group_confusion_matrices",
    "_is_valid_cutoff",
    "_as_1d",
    "calculate_metrics",
    "group_metric_matrix",
    "parity_loss",
    "evaluate_group_fairness",
]
