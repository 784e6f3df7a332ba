import pandas as pd
from ..Component2.containers import FairnessObject
from ..Component2.fairness_check import FAIRNESS_CHECK_METRICS


def fairness_check_summary(fobject: FairnessObject) -> pd.DataFrame:
    """
    One row per (model, fairness check metric): `passed` is True when every
    subgroup difference lies inside (-epsilon, epsilon). NaN differences
    never pass.
    """
    eps = fobject.epsilon
    data = fobject.fairness_check_data.copy()
    data["within"] = data["score"].abs() < eps      #NaN compares False

    rows = []
    for model in fobject.label:
        model_rows = data[data["model"] == model]
        for metric_name in FAIRNESS_CHECK_METRICS.values():
            within = model_rows.loc[model_rows["metric"] == metric_name, "within"]
            rows.append({"model": model, "metric": metric_name, "passed": bool(within.all())})
    return pd.DataFrame(rows, columns=["model", "metric", "passed"])


def models_passed(fobject: FairnessObject) -> pd.Series:
    """Number of fairness check metrics (0-5) each model passes."""
    summary = fairness_check_summary(fobject)
    passed = summary.groupby("model", sort=False)["passed"].sum().astype(int)
    passed.name = "metrics_passed"
    return passed.reindex(list(fobject.label))
