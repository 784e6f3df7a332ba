import pandas as pd
from scipy.stats import zscore
from ..Component2.containers import FairnessObject
from .containers import FairnessHeatmap


def fairness_heatmap(fobject: FairnessObject, scale: bool = False) -> FairnessHeatmap:
    """
    Models x parity-loss metrics, ready for a heatmap. With scale=True each
    metric column is standardised (mean 0, sd 1, NaN ignored); a column with
    no spread becomes NaN.
    """
    if len(fobject.label) < 2:
        raise ValueError("Number of explainers must be more than 1")

    matrix_model = fobject.parity_loss_metric_data.astype(float).copy()
    if scale:
        matrix_model = pd.DataFrame(
            zscore(matrix_model.to_numpy(), axis=0, ddof=1, nan_policy="omit"),
            index=matrix_model.index,
            columns=matrix_model.columns,
        )
    matrix_model.index = pd.Index(list(fobject.label), name="label")

    data = (
        matrix_model.rename_axis("model")
        .reset_index()
        .melt(id_vars="model", var_name="metric", value_name="score")[["metric", "model", "score"]]
    )
    data["score"] = data["score"].round(2)

    return FairnessHeatmap(data=data, matrix_model=matrix_model, scale=scale, label=fobject.label)
