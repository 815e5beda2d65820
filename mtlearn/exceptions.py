"""Errors raised by the problem transformation methods
"""
from sklearn.exceptions import NotFittedError


class NotTrainedError(NotFittedError):
    """Raised when predict or update is called before train."""


class SchemaMismatchError(ValueError):
    """Raised when an instance disagrees with a cached projection template."""


class UpdateUnsupportedError(TypeError):
    """Raised when incremental update is requested from a base classifier
    without ``partial_fit``."""


class BaseLearnerError(RuntimeError):
    """Wraps a failure of a base classifier.

    Parameters
    ----------
    strategy : str
        Name of the strategy that owns the failing model.

    target : int
        Index of the target whose model failed.

    operation : str
        One of 'train', 'predict' or 'update'.
    """

    def __init__(self, strategy, target, operation, cause=None):
        self.strategy = strategy
        self.target = target
        self.operation = operation
        msg = "{}: {} failed for target {}".format(strategy, operation, target)
        if cause is not None:
            msg += " ({}: {})".format(type(cause).__name__, cause)
        super().__init__(msg)
