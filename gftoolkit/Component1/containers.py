from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
from ..errors import InconsistentTargetError, InvalidInputError, InvalidLevelError


#Fixed order of the per-group metrics. Downstream tables are indexed by it.
METRICS: List[str] = [
    "TPR", "TNR", "PPV", "NPV", "FNR", "FPR", "FDR",
    "FOR", "TS", "STP", "ACC", "F1", "MCC",
]


@dataclass(frozen=True)
class ConfusionMatrix:
    tp: int
    fp: int
    tn: int
    fn: int

    @property
    def n(self) -> int:
        return self.tp + self.fp + self.tn + self.fn

    def as_dict(self) -> Dict[str, int]:
        return {"TP": self.tp, "FP": self.fp, "TN": self.tn, "FN": self.fn}


@dataclass(frozen=True, eq=False)
class ModelExplainer:
    """
    Predictions of one model on a shared test set.

    `y` holds the 0/1 ground truth and `y_hat` the predicted probability of
    the positive class, aligned row by row with the protected attribute.
    """
    label: str
    y: np.ndarray = field(repr=False)
    y_hat: np.ndarray = field(repr=False)

    def __post_init__(self):
        y = np.asarray(self.y, dtype=float)
        y_hat = np.asarray(self.y_hat, dtype=float)
        if y.ndim != 1 or y_hat.ndim != 1:
            raise InconsistentTargetError(
                f"Explainer '{self.label}': y and y_hat must be one-dimensional, got shapes {y.shape} and {y_hat.shape}."
            )
        if y.size != y_hat.size:
            raise InconsistentTargetError(
                f"Explainer '{self.label}': y has {y.size} rows but y_hat has {y_hat.size}."
            )
        if not np.isin(y, (0.0, 1.0)).all():
            raise InvalidInputError(f"Explainer '{self.label}': y must only contain 0 and 1.")
        #frozen dataclass, so bypass __setattr__ for the coerced arrays
        object.__setattr__(self, "label", str(self.label))
        object.__setattr__(self, "y", y)
        object.__setattr__(self, "y_hat", y_hat)

    def __len__(self) -> int:
        return int(self.y.size)

    #accessors shared with FairnessObject inputs of a merge
    def labels(self) -> Tuple[str, ...]:
        return (self.label,)

    def all_explainers(self) -> Tuple["ModelExplainer", ...]:
        return (self,)


@dataclass(frozen=True, eq=False)
class ProtectedAttribute:
    """
    Categorical protected variable with a fixed, ordered level set.

    Build it with `from_values`, which is the only place raw vectors are
    turned into categories. Level names are always strings.
    """
    values: pd.Categorical = field(repr=False)
    #category values before they were turned into level names
    raw_levels: Tuple[Any, ...] = field(default=(), repr=False)

    @classmethod
    def from_values(cls, values: Any, levels: Optional[Sequence[Any]] = None) -> "ProtectedAttribute":
        if isinstance(values, ProtectedAttribute):
            if levels is None:
                return values
            values = values.values
        if levels is not None:
            cat = pd.Categorical(values, categories=list(levels))
        else:
            #keeps existing categories; otherwise sorted unique values
            cat = pd.Categorical(values)
        if cat.isna().any():
            raise InvalidLevelError("Protected variable contains missing values or values outside its levels.")
        raw = tuple(cat.categories)
        names = [str(c) for c in raw]
        if len(set(names)) != len(names):
            raise InvalidLevelError(f"Protected variable levels {list(raw)} are not distinct once written as text.")
        cat = cat.rename_categories(names)
        return cls(values=cat, raw_levels=raw)

    @property
    def levels(self) -> List[str]:
        return list(self.values.categories)

    def match_level(self, value: Any) -> Optional[str]:
        """Level name for `value`, compared first with the original category values."""
        for raw, level in zip(self.raw_levels or self.levels, self.levels):
            if not isinstance(raw, str) and not isinstance(value, str) and raw == value:
                return level
        text = str(value)
        return text if text in self.levels else None

    @property
    def codes(self) -> np.ndarray:
        return np.asarray(self.values.codes)

    def to_numpy(self) -> np.ndarray:
        return np.asarray(self.values.astype(object))

    def equals(self, other: "ProtectedAttribute") -> bool:
        return len(self) == len(other) and np.array_equal(self.to_numpy(), other.to_numpy())

    def __len__(self) -> int:
        return len(self.values)


@dataclass(frozen=True, eq=False)
class ModelFairness:
    """Everything computed for one explainer against the protected attribute."""
    label: str
    confusion_matrices: Dict[str, ConfusionMatrix]
    group_metric_matrix: pd.DataFrame = field(repr=False)
    parity_loss: pd.Series = field(repr=False)

    @property
    def n_nan(self) -> int:
        return int(self.parity_loss.isna().sum())
