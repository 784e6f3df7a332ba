import pandas as pd
from ..Component1.containers import METRICS
from ..Component2.containers import FairnessObject
from .containers import ChosenMetric


def _check_metric(metric: str) -> None:
    if metric not in METRICS:
        raise ValueError(f"Unknown fairness metric '{metric}'; use one of: {', '.join(METRICS)}")


def choose_metric(fobject: FairnessObject, fairness_metric: str = "FPR") -> ChosenMetric:
    """Parity loss of one metric for every model in the fairness object."""
    _check_metric(fairness_metric)
    data = pd.DataFrame({
        "parity_loss_metric": fobject.parity_loss_metric_data[fairness_metric].to_numpy(dtype=float),
        "label": list(fobject.label),
    })
    return ChosenMetric(parity_loss_metric_data=data, metric=fairness_metric, label=fobject.label)
