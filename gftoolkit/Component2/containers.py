from dataclasses import dataclass, field
from typing import Dict, Tuple
import pandas as pd
from ..Component1.containers import ConfusionMatrix, ModelExplainer, ProtectedAttribute


#long-format fairness check table columns
FAIRNESS_CHECK_COLUMNS = ["score", "subgroup", "metric", "model"]


@dataclass(frozen=True, eq=False)
class FairnessObject:
    """
    Result of `fairness_check`: parity losses, per-group metrics and
    confusion matrices for every model label, plus the shared protected
    variable, privileged level and epsilon.

    Treated as a read-only snapshot. Passing it back into `fairness_check`
    builds a new object; this one is never modified.
    """
    parity_loss_metric_data: pd.DataFrame = field(repr=False)  #labels x METRICS
    groups_data: Dict[str, pd.DataFrame] = field(repr=False)    #label -> METRICS x levels
    groups_confusion_matrices: Dict[str, Dict[str, ConfusionMatrix]] = field(repr=False)
    explainers: Tuple[ModelExplainer, ...] = field(repr=False)
    privileged: str
    protected: ProtectedAttribute = field(repr=False)
    label: Tuple[str, ...]
    cutoff: Dict[str, Dict[str, float]]
    epsilon: float
    fairness_check_data: pd.DataFrame = field(repr=False)
    n_nan: int = 0

    #accessors shared with ModelExplainer-side inputs of a merge
    def labels(self) -> Tuple[str, ...]:
        return self.label

    def all_explainers(self) -> Tuple[ModelExplainer, ...]:
        return self.explainers
