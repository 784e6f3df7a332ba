"""
Group Fairness Toolkit (gftoolkit)

Top-level public API aggregating Components 1–3.

Naming convention:
- gm_* : Component 1 (Group Metrics: confusion matrices, metrics, parity loss)
- fc_* : Component 2 (Fairness Check: validation and merge of fairness objects)
- rp_* : Component 3 (Reports built from a fairness object)

Users can still import component-specific APIs via:
    from gftoolkit.Component2 import resolve_cutoff
"""
import logging

from .errors import (
    InvalidInputError,
    FairnessCheckError,
    MissingRequiredParameter,
    InvalidLevelError,
    InvalidCutoffShape,
    InvalidEpsilon,
    IncompatibleMergeError,
    InconsistentTargetError,
    NoEvaluationsError,
    LabelMismatchError,
    NaNMetricError,
)

#Component 1: Group Metrics
from .Component1 import (
    METRICS,
    ConfusionMatrix,
    ModelExplainer,
    ModelFairness,
    ProtectedAttribute,
    confusion_matrix_counts as gm_confusion_matrix_counts,
    group_confusion_matrices as gm_group_confusion_matrices,
    calculate_metrics as gm_calculate_metrics,
    group_metric_matrix as gm_group_metric_matrix,
    parity_loss as gm_parity_loss,
    evaluate_group_fairness as gm_evaluate_group_fairness,
)

#Component 2: Fairness Check
from .Component2 import (
    FairnessObject,
    ReportConfig,
    setup_logger,
    fairness_check as fc_fairness_check,
    fairness_check_table as fc_fairness_check_table,
    resolve_cutoff as fc_resolve_cutoff,
)

#Component 3: Reports
from .Component3 import (
    ChosenMetric,
    GroupMetric,
    FairnessHeatmap,
    choose_metric as rp_choose_metric,
    group_metric as rp_group_metric,
    model_performance as rp_model_performance,
    fairness_heatmap as rp_fairness_heatmap,
    fairness_check_summary as rp_fairness_check_summary,
    models_passed as rp_models_passed,
)

logging.getLogger("gftoolkit").addHandler(logging.NullHandler())

__all__ = [
    #----Errors----
    "InvalidInputError",
    "FairnessCheckError",
    "MissingRequiredParameter",
    "InvalidLevelError",
    "InvalidCutoffShape",
    "InvalidEpsilon",
    "IncompatibleMergeError",
    "InconsistentTargetError",
    "NoEvaluationsError",
    "LabelMismatchError",
    "NaNMetricError",

    #----Component 1----
    "METRICS",
    "ConfusionMatrix",
    "ModelExplainer",
    "ModelFairness",
    "ProtectedAttribute",
    "gm_confusion_matrix_counts",
    "gm_group_confusion_matrices",
    "gm_calculate_metrics",
    "gm_group_metric_matrix",
    "gm_parity_loss",
    "gm_evaluate_group_fairness",

    #----Component 2----
    "FairnessObject",
    "ReportConfig",
    "setup_logger",
    "fc_fairness_check",
    "fc_fairness_check_table",
    "fc_resolve_cutoff",

    #----Component 3----
    "ChosenMetric",
    "GroupMetric",
    "FairnessHeatmap",
    "rp_choose_metric",
    "rp_group_metric",
    "rp_model_performance",
    "rp_fairness_heatmap",
    "rp_fairness_check_summary",
    "rp_models_passed",
]
