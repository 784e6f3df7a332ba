import dataclasses
import logging
from typing import Any, Dict, List, Optional, Tuple, Union
import pandas as pd
from ..Component1.containers import METRICS, ModelExplainer, ModelFairness
from ..Component1.group_metrics import evaluate_group_fairness
from ..errors import NaNMetricError
from .containers import FAIRNESS_CHECK_COLUMNS, FairnessObject
from .reporting import ReportConfig, VerboseReporter
from .validation import (
    check_explainers,
    check_fairness_objects,
    resolve_cutoff,
    resolve_epsilon,
    resolve_labels,
    resolve_protected,
)


#metric id -> name of its difference in the fairness check table (table order)
FAIRNESS_CHECK_METRICS: Dict[str, str] = {
    "ACC": "Accuracy equality difference",
    "PPV": "Predictive parity difference",
    "FPR": "Predictive equality difference",
    "TPR": "Equal opportunity difference",
    "STP": "Statistical parity difference",
}

MergeSource = Union[ModelExplainer, FairnessObject]


def fairness_check_table(gmm: pd.DataFrame, privileged: str, label: str) -> pd.DataFrame:
    """
    Long table of metric[level] - metric[privileged] for the five fairness
    check metrics, one row per (metric, non-privileged level). Columns:
    score, subgroup, metric, model.
    """
    diffs = gmm.sub(gmm[privileged], axis=0)
    subgroups = [lvl for lvl in gmm.columns if lvl != privileged]

    frames = []
    for metric_id, metric_name in FAIRNESS_CHECK_METRICS.items():
        frames.append(pd.DataFrame({
            "score": diffs.loc[metric_id, subgroups].to_numpy(dtype=float),
            "subgroup": subgroups,
            "metric": metric_name,
            "model": label,
        }))
    return pd.concat(frames, ignore_index=True)[FAIRNESS_CHECK_COLUMNS]


#Helper function to split the mixed inputs into the two merge variants
def _split_sources(objects: Tuple[Any, ...]) -> Tuple[List[ModelExplainer], List[FairnessObject]]:
    explainers: List[ModelExplainer] = []
    fobjects: List[FairnessObject] = []
    for obj in objects:
        if isinstance(obj, ModelExplainer):
            explainers.append(obj)
        elif isinstance(obj, FairnessObject):
            fobjects.append(obj)
        else:
            raise TypeError(
                f"fairness_check accepts ModelExplainer and FairnessObject, got {type(obj).__name__}."
            )
    return explainers, fobjects


def fairness_check(
    *objects: MergeSource,
    protected: Any = None,
    privileged: Any = None,
    cutoff: Any = None,
    label: Any = None,
    epsilon: Optional[float] = None,
    report: Optional[ReportConfig] = None,
    strict_nan: bool = False,
    logger: Optional[logging.Logger] = None,
) -> FairnessObject:
    """
    Build a FairnessObject from new explainers, merged with any fairness
    objects passed alongside them.

    Metrics are computed only for the new explainers; fairness objects
    contribute their stored results unchanged. New models come first (in
    input order), then each fairness object's models in stored order.

    Parameters
    ----------
    protected : values of the protected variable (or a ProtectedAttribute).
        Taken from the first fairness object when omitted.
    privileged : level of `protected` parity loss is measured against.
    cutoff : None (0.5), a single threshold, or {level: threshold}.
    label : labels for the new explainers (default: their own labels).
    epsilon : fairness check tolerance, default 0.1.
    report : ReportConfig for progress messages (verbose / colorize).
    strict_nan : raise NaNMetricError instead of reporting NaN parity losses.

    All checks run before any computation; on failure nothing is built and
    the inputs are untouched.
    """
    reporter = VerboseReporter(report, logger)
    reporter.message("Creating fairness object")

    explainers, fobjects = _split_sources(objects)

    #--- validation ---
    protected_attr, privileged = resolve_protected(protected, privileged, fobjects, reporter)
    cutoff_map = resolve_cutoff(cutoff, protected_attr.levels, reporter)
    epsilon = resolve_epsilon(epsilon, reporter)
    check_fairness_objects(fobjects, protected_attr, privileged, reporter)

    prior_explainers = [e for fo in fobjects for e in fo.all_explainers()]
    new_explainers = [e for src in explainers for e in src.all_explainers()]
    check_explainers(new_explainers, new_explainers + prior_explainers, protected_attr, reporter)

    labels = resolve_labels(label, new_explainers, fobjects)
    new_explainers = [
        e if e.label == lb else dataclasses.replace(e, label=lb)
        for e, lb in zip(new_explainers, labels)
    ]

    #--- metric calculation (new explainers only) ---
    results: List[ModelFairness] = [
        evaluate_group_fairness(e, protected_attr, privileged, cutoff_map) for e in new_explainers
    ]

    n_nan = sum(r.n_nan for r in results)
    if n_nan > 0:
        reporter.step("Metric calculation", "successful", f"{n_nan} NA created", "info")
        if strict_nan:
            nan_labels = [r.label for r in results if r.n_nan > 0]
            raise NaNMetricError(f"Parity loss is NaN for {n_nan} metric(s) of models {nan_labels}.")
        reporter.message(f"{n_nan} NA created in parity loss metrics", level=logging.WARNING)
    else:
        reporter.step("Metric calculation", "successful")

    #--- merge with fairness objects ---
    parity_loss_metric_data = pd.DataFrame(
        [r.parity_loss.to_numpy() for r in results],
        index=[r.label for r in results],
        columns=METRICS,
        dtype=float,
    )
    groups_data = {r.label: r.group_metric_matrix for r in results}
    groups_cms = {r.label: dict(r.confusion_matrices) for r in results}
    cutoffs = {r.label: dict(cutoff_map) for r in results}
    fcheck_frames = [fairness_check_table(r.group_metric_matrix, privileged, r.label) for r in results]

    for fo in fobjects:
        parity_loss_metric_data = pd.concat([parity_loss_metric_data, fo.parity_loss_metric_data])
        for lb in fo.labels():
            groups_data[lb] = fo.groups_data[lb].copy()
            groups_cms[lb] = dict(fo.groups_confusion_matrices[lb])
            cutoffs[lb] = dict(fo.cutoff[lb])
        fcheck_frames.append(fo.fairness_check_data)

    all_labels = tuple(labels) + tuple(lb for fo in fobjects for lb in fo.labels())
    parity_loss_metric_data.index = pd.Index(all_labels, name="label")
    fairness_check_data = pd.concat(fcheck_frames, ignore_index=True)[FAIRNESS_CHECK_COLUMNS]

    fobject = FairnessObject(
        parity_loss_metric_data=parity_loss_metric_data,
        groups_data=groups_data,
        groups_confusion_matrices=groups_cms,
        explainers=tuple(new_explainers) + tuple(prior_explainers),
        privileged=privileged,
        protected=protected_attr,
        label=all_labels,
        cutoff=cutoffs,
        epsilon=epsilon,
        fairness_check_data=fairness_check_data,
        n_nan=n_nan,
    )
    reporter.message("Fairness object created successfully", status="ok")
    return fobject
