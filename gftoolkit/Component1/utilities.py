from typing import Any, Dict, Mapping
import numpy as np
from sklearn.metrics import confusion_matrix
from .containers import ConfusionMatrix, ProtectedAttribute
from ..errors import InvalidInputError


def _as_1d(x: Any, name: str) -> np.ndarray:
    arr = np.asarray(x, dtype=float)
    if arr.ndim > 1:
        raise InvalidInputError(f"{name} must be one-dimensional, got shape {arr.shape}.")
    return arr.ravel()

#Helper function to check a single threshold (bools are not thresholds)
def _is_valid_cutoff(cutoff: Any) -> bool:
    if isinstance(cutoff, (bool, np.bool_)):
        return False
    try:
        c = float(cutoff)
    except (TypeError, ValueError):
        return False
    return 0.0 <= c <= 1.0


#Helper function to turn probabilities into TP/FP/TN/FN counts for one group
def confusion_matrix_counts(probs, y_true, cutoff: float = 0.5) -> ConfusionMatrix:
    """
    Threshold `probs` at `cutoff` (predicted 1 when p >= cutoff) and count
    TP, FP, TN, FN against the 0/1 `y_true`. An empty slice gives an
    all-zero matrix.
    """
    p = _as_1d(probs, "probs")
    y = _as_1d(y_true, "y_true")
    if p.size != y.size:
        raise InvalidInputError(f"probs has {p.size} rows but y_true has {y.size}.")
    if not _is_valid_cutoff(cutoff):
        raise InvalidInputError(f"Cutoff must be a number between 0 and 1, got {cutoff!r}.")
    if p.size == 0:
        return ConfusionMatrix(tp=0, fp=0, tn=0, fn=0)
    if not np.isin(y, (0.0, 1.0)).all():
        raise InvalidInputError("y_true must only contain 0 and 1.")

    y_hat = (p >= float(cutoff)).astype(int)
    #fixed labels keep the 2x2 shape for single-class groups
    tn, fp, fn, tp = confusion_matrix(y.astype(int), y_hat, labels=[0, 1]).ravel()
    return ConfusionMatrix(tp=int(tp), fp=int(fp), tn=int(tn), fn=int(fn))


#Helper function to compute one confusion matrix per level of the protected variable
def group_confusion_matrices(
    protected: ProtectedAttribute,
    probs,
    y_true,
    cutoff: Mapping[str, float],
) -> Dict[str, ConfusionMatrix]:
    """
    Returns {level: ConfusionMatrix} in level order. Levels without rows
    still get an (all-zero) matrix so tables stay indexed by every level.
    """
    p = _as_1d(probs, "probs")
    y = _as_1d(y_true, "y_true")
    if not (p.size == y.size == len(protected)):
        raise InvalidInputError(
            f"probs ({p.size}), y_true ({y.size}) and protected ({len(protected)}) must have the same length."
        )

    codes = protected.codes
    out: Dict[str, ConfusionMatrix] = {}
    for i, level in enumerate(protected.levels):
        if level not in cutoff:
            raise InvalidInputError(f"No cutoff given for level '{level}'.")
        mask = codes == i
        out[level] = confusion_matrix_counts(p[mask], y[mask], cutoff[level])
    return out
