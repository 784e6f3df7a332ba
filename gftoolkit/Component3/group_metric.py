import logging
from typing import Optional
import pandas as pd
from sklearn.metrics import roc_auc_score
from ..Component1.containers import ConfusionMatrix
from ..Component1.group_metrics import calculate_metrics
from ..Component2.containers import FairnessObject
from .choose_metric import _check_metric
from .containers import GroupMetric


logger = logging.getLogger("gftoolkit")

#performance metric -> metric id computed on the pooled confusion matrix
PERFORMANCE_METRICS = {
    "recall": "TPR",
    "precision": "PPV",
    "accuracy": "ACC",
    "f1": "F1",
    "auc": None,
}


def _check_performance_metric(performance_metric: str) -> None:
    if performance_metric not in PERFORMANCE_METRICS:
        raise ValueError(
            f"Unknown performance metric '{performance_metric}'; use one of: {', '.join(PERFORMANCE_METRICS)}"
        )


def _pooled_confusion_matrix(cms) -> ConfusionMatrix:
    return ConfusionMatrix(
        tp=sum(cm.tp for cm in cms.values()),
        fp=sum(cm.fp for cm in cms.values()),
        tn=sum(cm.tn for cm in cms.values()),
        fn=sum(cm.fn for cm in cms.values()),
    )


def model_performance(fobject: FairnessObject, label: str, performance_metric: str) -> float:
    """
    Performance of one model. Threshold-based metrics use the model's
    per-group cutoffs (pooled group confusion matrices); auc uses the raw
    probabilities.
    """
    _check_performance_metric(performance_metric)
    if performance_metric == "auc":
        explainer = next(e for e in fobject.explainers if e.label == label)
        try:
            return float(roc_auc_score(explainer.y, explainer.y_hat))
        except ValueError:
            return float("nan")   #single class in y
    pooled = _pooled_confusion_matrix(fobject.groups_confusion_matrices[label])
    return float(calculate_metrics(pooled)[PERFORMANCE_METRICS[performance_metric]])


def group_metric(
    fobject: FairnessObject,
    fairness_metric: Optional[str] = None,
    performance_metric: Optional[str] = None,
    parity_loss: bool = False,
) -> GroupMetric:
    """
    Per-group values of one fairness metric for every model, next to one
    performance score per model.

    With parity_loss=True values become |metric[group] - metric[privileged]|,
    privileged rows are dropped and the metric name gets a " parity loss"
    suffix.
    """
    if not isinstance(parity_loss, bool):
        raise TypeError("parity_loss must be a bool.")

    if fairness_metric is None:
        fairness_metric = "TPR"
        logger.info("Fairness metric not given, setting default (%s)", fairness_metric)
    if performance_metric is None:
        performance_metric = "accuracy"
        logger.info("Performance metric not given, setting default (%s)", performance_metric)
    _check_metric(fairness_metric)
    _check_performance_metric(performance_metric)

    privileged = fobject.privileged
    frames = []
    for lb in fobject.label:
        values = fobject.groups_data[lb].loc[fairness_metric]
        if parity_loss:
            values = (values - values[privileged]).abs()
        frames.append(pd.DataFrame({
            "group": list(values.index),
            "value": values.to_numpy(dtype=float),
            "label": lb,
        }))
    group_metric_data = pd.concat(frames, ignore_index=True)

    performance_data = pd.DataFrame({
        "x": list(fobject.label),
        "y": [model_performance(fobject, lb, performance_metric) for lb in fobject.label],
    })

    if parity_loss:
        fairness_metric = f"{fairness_metric} parity loss"
        group_metric_data = group_metric_data[group_metric_data["group"] != privileged].reset_index(drop=True)

    return GroupMetric(
        group_metric_data=group_metric_data,
        performance_data=performance_data,
        fairness_metric=fairness_metric,
        performance_metric=performance_metric,
        label=fobject.label,
    )
