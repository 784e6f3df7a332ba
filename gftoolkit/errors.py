"""
Exceptions raised while building and merging fairness objects.

Every error derives from ValueError so callers that already guard the
toolkit with ``except ValueError`` keep working.
"""


class InvalidInputError(ValueError):
    """Probabilities, targets or cutoff cannot form a confusion matrix."""


class FairnessCheckError(ValueError):
    """Base class for conditions that abort a fairness check / merge."""


class MissingRequiredParameter(FairnessCheckError):
    pass


class InvalidLevelError(FairnessCheckError):
    pass


class InvalidCutoffShape(FairnessCheckError):
    pass


class InvalidEpsilon(FairnessCheckError):
    pass


class IncompatibleMergeError(FairnessCheckError):
    pass


class InconsistentTargetError(FairnessCheckError):
    pass


class NoEvaluationsError(FairnessCheckError):
    pass


class LabelMismatchError(FairnessCheckError):
    pass


class NaNMetricError(FairnessCheckError):
    """Raised only in strict mode, when a parity loss evaluates to NaN."""
