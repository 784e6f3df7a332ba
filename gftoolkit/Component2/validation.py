"""
Parameter resolution and compatibility checks run by `fairness_check`
before any metric is computed. Each check raises its own error type and
reports one progress line.
"""
import numbers
from collections.abc import Iterable, Mapping
from typing import Any, Dict, List, Optional, Sequence, Tuple
import numpy as np
import pandas as pd
from ..Component1.containers import ModelExplainer, ProtectedAttribute
from ..Component1.utilities import _is_valid_cutoff
from ..errors import (
    IncompatibleMergeError,
    InconsistentTargetError,
    InvalidCutoffShape,
    InvalidEpsilon,
    InvalidLevelError,
    LabelMismatchError,
    MissingRequiredParameter,
    NoEvaluationsError,
)
from .containers import FairnessObject
from .reporting import VerboseReporter


DEFAULT_CUTOFF = 0.5
DEFAULT_EPSILON = 0.1


def _is_number(x: Any) -> bool:
    return isinstance(x, numbers.Real) and not isinstance(x, (bool, np.bool_))


#Helper function to unwrap length-1 sequences/arrays into a scalar
def _single_number(x: Any) -> Optional[float]:
    if _is_number(x):
        return float(x)
    if isinstance(x, (list, tuple, np.ndarray)):
        arr = np.asarray(x, dtype=object).ravel()
        if arr.size == 1 and _is_number(arr[0]):
            return float(arr[0])
    return None


def resolve_protected(
    protected: Any,
    privileged: Any,
    fobjects: Sequence[FairnessObject],
    reporter: VerboseReporter,
) -> Tuple[ProtectedAttribute, str]:
    """Take protected/privileged from the call, else from the first fairness object."""
    if privileged is None:
        if not fobjects:
            raise MissingRequiredParameter("Privileged cannot be None if fairness objects are not provided.")
        privileged = fobjects[0].privileged
        reporter.step("Privileged subgroup", type(privileged).__name__, "from first fairness object", "info")
    elif isinstance(privileged, str):
        reporter.step("Privileged subgroup", "str", "Ok", "ok")
    else:
        reporter.step("Privileged subgroup", "str", f"changed from {type(privileged).__name__}", "changed")

    if protected is None:
        if not fobjects:
            raise MissingRequiredParameter("Protected cannot be None if fairness objects are not provided.")
        protected = fobjects[0].protected
        reporter.step("Protected variable", "categorical", "from first fairness object", "info")
    elif isinstance(protected, (ProtectedAttribute, pd.Categorical)) or isinstance(
        getattr(protected, "dtype", None), pd.CategoricalDtype
    ):
        reporter.step("Protected variable", "categorical", "Ok", "ok")
    else:
        reporter.step("Protected variable", "categorical", f"changed from {type(protected).__name__}", "changed")
    protected = ProtectedAttribute.from_values(protected)

    level = protected.match_level(privileged)
    if level is None:
        raise InvalidLevelError(
            f"Privileged subgroup '{privileged}' is not in protected variable levels {protected.levels}."
        )
    return protected, level


def resolve_cutoff(cutoff: Any, levels: List[str], reporter: VerboseReporter) -> Dict[str, float]:
    """
    None -> 0.5 for every level; a single number -> that number for every
    level; a mapping level -> cutoff -> completed with 0.5 for missing levels.
    """
    if cutoff is None:
        reporter.step("Cutoff values for explainers", f"{DEFAULT_CUTOFF} (for all subgroups)")
        return {level: DEFAULT_CUTOFF for level in levels}

    if isinstance(cutoff, Mapping):
        keys = [str(k) for k in cutoff.keys()]
        if len(set(keys)) != len(keys):
            raise InvalidCutoffShape("Names of cutoff mapping must be unique.")
        unknown = [k for k in keys if k not in levels]
        if unknown:
            raise InvalidCutoffShape(f"Names of cutoff mapping do not match levels in protected: {unknown}.")
        values = list(cutoff.values())
        if not all(_is_number(v) for v in values):
            raise InvalidCutoffShape("Elements of cutoff mapping must be numeric.")
        if not all(_is_valid_cutoff(v) for v in values):
            raise InvalidCutoffShape("Cutoff value must be between 0 and 1.")

        given = dict(zip(keys, (float(v) for v in values)))
        resolved = {level: given.get(level, DEFAULT_CUTOFF) for level in levels}
        reporter.step("Cutoff values for explainers", ", ".join(f"{k}: {v}" for k, v in resolved.items()))
        return resolved

    single = _single_number(cutoff)
    if single is None:
        if isinstance(cutoff, (list, tuple, np.ndarray)):
            raise InvalidCutoffShape(
                "Please provide cutoff as a mapping with the same names as levels in protected."
            )
        raise InvalidCutoffShape(f"Cutoff must be None, a number or a mapping, got {type(cutoff).__name__}.")
    if not _is_valid_cutoff(single):
        raise InvalidCutoffShape("Cutoff value must be between 0 and 1.")
    reporter.step("Cutoff values for explainers", f"{single} (for all subgroups)")
    return {level: single for level in levels}


def resolve_epsilon(epsilon: Any, reporter: VerboseReporter) -> float:
    if epsilon is None:
        reporter.step("Epsilon", DEFAULT_EPSILON, "default", "info")
        return DEFAULT_EPSILON
    if not _is_number(epsilon):
        raise InvalidEpsilon("Epsilon must be a single, numeric value.")
    if not float(epsilon) > 0:
        raise InvalidEpsilon("Epsilon must be a positive number.")
    reporter.step("Epsilon", float(epsilon), "Ok", "ok")
    return float(epsilon)


def check_fairness_objects(
    fobjects: Sequence[FairnessObject],
    protected: ProtectedAttribute,
    privileged: str,
    reporter: VerboseReporter,
) -> None:
    """Every fairness object must share the resolved protected vector and privileged level."""
    noun = "object" if len(fobjects) == 1 else "objects"
    if not fobjects:
        reporter.step("Fairness objects", f"0 {noun}")
        return
    if not all(fo.protected.equals(protected) for fo in fobjects):
        reporter.step("Fairness objects", f"{len(fobjects)} {noun}", "not compatible", "error")
        raise IncompatibleMergeError(
            "Fairness objects must have the same protected vector as the one passed in fairness check."
        )
    if not all(fo.privileged == privileged for fo in fobjects):
        reporter.step("Fairness objects", f"{len(fobjects)} {noun}", "not compatible", "error")
        raise IncompatibleMergeError(
            "Fairness objects must have the same privileged argument as the one passed in fairness check."
        )
    reporter.step("Fairness objects", f"{len(fobjects)} {noun}", "compatible", "compatible")


def check_explainers(
    explainers: Sequence[ModelExplainer],
    all_explainers: Sequence[ModelExplainer],
    protected: ProtectedAttribute,
    reporter: VerboseReporter,
) -> None:
    """New explainers must exist; all explainers must share y, aligned with protected."""
    total = f"{len(all_explainers)} in total"
    if not explainers:
        reporter.step("Checking explainers", total, "no explainers", "error")
        raise NoEvaluationsError("At least one explainer must be provided.")

    y_ref = all_explainers[0].y
    if not all(e.y.size == y_ref.size for e in all_explainers):
        reporter.step("Checking explainers", total, "y not equal", "error")
        raise InconsistentTargetError("All explainer targets (y) must have the same length.")
    if not all(np.array_equal(e.y, y_ref) for e in all_explainers):
        reporter.step("Checking explainers", total, "y not equal", "error")
        raise InconsistentTargetError("All explainers must have the same values of the target variable.")
    if not all(e.y.size == len(protected) for e in all_explainers):
        reporter.step("Checking explainers", total, "not compatible", "error")
        raise InconsistentTargetError("Lengths of protected variable and target variable in explainer differ.")
    reporter.step("Checking explainers", total, "compatible", "compatible")


def resolve_labels(
    label: Any,
    explainers: Sequence[ModelExplainer],
    fobjects: Sequence[FairnessObject],
) -> List[str]:
    """Labels for the new explainers; unique among themselves and against fairness objects."""
    if label is None:
        labels = [e.label for e in explainers]
    else:
        #a bare string or scalar is one label
        labels = [label] if isinstance(label, str) or not isinstance(label, Iterable) else list(label)
        if len(labels) != len(explainers):
            raise LabelMismatchError(
                "Number of labels must be equal to number of explainers (outside fairness objects)."
            )
        labels = [str(lb) for lb in labels]

    if len(set(labels)) != len(labels):
        raise LabelMismatchError(
            "Explainers don't have unique labels (pass parameter 'label' to fairness_check())."
        )

    prior_labels: List[str] = [lb for fo in fobjects for lb in fo.labels()]
    if len(set(prior_labels)) != len(prior_labels):
        raise LabelMismatchError("Fairness objects share model labels with each other.")
    clashes = sorted(set(labels) & set(prior_labels))
    if clashes:
        raise LabelMismatchError(f"Explainer has the same label as a label in fairness object: {clashes}.")
    return labels
