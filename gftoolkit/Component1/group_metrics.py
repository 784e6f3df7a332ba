from typing import Dict, Mapping
import numpy as np
import pandas as pd
from .containers import METRICS, ConfusionMatrix, ModelExplainer, ModelFairness, ProtectedAttribute
from .utilities import group_confusion_matrices


#Zero denominators give NaN rather than an error (sparse groups are common)
def _div(num: float, den: float) -> float:
    return float(num) / float(den) if den != 0 else np.nan


def calculate_metrics(cm: ConfusionMatrix) -> pd.Series:
    """
    The 13 group metrics of one confusion matrix, indexed by METRICS.

    Rates: TPR, TNR, PPV, NPV, FNR, FPR, FDR, FOR.
    TS  = TP / (TP + FN + FP)            threat score
    STP = (TP + FP) / n                  statistical parity (positive rate)
    ACC = (TP + TN) / n
    F1  = 2 * PPV * TPR / (PPV + TPR)
    MCC = (TP*TN - FP*FN) / sqrt((TP+FP)(TP+FN)(TN+FP)(TN+FN))
    Any metric with a zero denominator (or NaN input) is NaN.
    """
    tp, fp, tn, fn = cm.tp, cm.fp, cm.tn, cm.fn
    pos = tp + fn
    neg = tn + fp
    n = pos + neg

    tpr = _div(tp, pos)
    ppv = _div(tp, tp + fp)
    #NaN in PPV or TPR carries through to F1
    f1 = _div(2 * ppv * tpr, ppv + tpr)
    mcc_den = float(tp + fp) * float(tp + fn) * float(tn + fp) * float(tn + fn)
    mcc = _div(tp * tn - fp * fn, np.sqrt(mcc_den))

    values = {
        "TPR": tpr,
        "TNR": _div(tn, neg),
        "PPV": ppv,
        "NPV": _div(tn, tn + fn),
        "FNR": _div(fn, pos),
        "FPR": _div(fp, neg),
        "FDR": _div(fp, fp + tp),
        "FOR": _div(fn, fn + tn),
        "TS": _div(tp, tp + fn + fp),
        "STP": _div(tp + fp, n),
        "ACC": _div(tp + tn, n),
        "F1": f1,
        "MCC": mcc,
    }
    return pd.Series(values, index=METRICS, dtype=float)


def group_metric_matrix(confusion_matrices: Mapping[str, ConfusionMatrix]) -> pd.DataFrame:
    """Metrics (rows, METRICS order) x protected levels (columns, input order)."""
    columns = {level: calculate_metrics(cm) for level, cm in confusion_matrices.items()}
    gmm = pd.DataFrame(columns, index=METRICS, columns=list(confusion_matrices.keys()), dtype=float)
    gmm.columns.name = "group"
    return gmm


def parity_loss(gmm: pd.DataFrame, privileged: str) -> pd.Series:
    """
    sum(|metric[group] - metric[privileged]|) for every metric.

    The privileged column adds 0. A NaN anywhere in a metric's row makes
    that metric's parity loss NaN (no skipping).
    """
    if privileged not in gmm.columns:
        raise KeyError(f"Privileged level '{privileged}' not found in group metric matrix.")
    scaled = gmm.sub(gmm[privileged], axis=0).abs()
    loss = scaled.sum(axis=1, skipna=False)
    loss.name = "parity_loss"
    return loss


def evaluate_group_fairness(
    explainer: ModelExplainer,
    protected: ProtectedAttribute,
    privileged: str,
    cutoff: Mapping[str, float],
) -> ModelFairness:
    """Run confusion matrices -> group metric matrix -> parity loss for one explainer."""
    cms: Dict[str, ConfusionMatrix] = group_confusion_matrices(
        protected=protected, probs=explainer.y_hat, y_true=explainer.y, cutoff=cutoff
    )
    gmm = group_metric_matrix(cms)
    return ModelFairness(
        label=explainer.label,
        confusion_matrices=cms,
        group_metric_matrix=gmm,
        parity_loss=parity_loss(gmm, privileged),
    )
