"""Base classifier adapter

Every per-target model goes through :class:`ModelWrapper`, which gives any
scikit-learn classifier the same train / predict_distribution / update /
copy interface regardless of which classes it saw during training.

Wrapped models must not modify shared state in ``predict_proba`` or
``predict``; concurrent predictions on a trained strategy rely on it.
"""
import numpy as np
from sklearn.base import clone
from sklearn.ensemble import RandomForestClassifier
from sklearn.linear_model import LogisticRegression, Perceptron, SGDClassifier
from sklearn.naive_bayes import GaussianNB
from sklearn.neighbors import KNeighborsClassifier
from sklearn.tree import DecisionTreeClassifier

from .exceptions import UpdateUnsupportedError

BASE_CLFS = {
    'logistic': LogisticRegression,
    'naive_bayes': GaussianNB,
    'sgd': SGDClassifier,
    'perceptron': Perceptron,
    'tree': DecisionTreeClassifier,
    'forest': RandomForestClassifier,
    'knn': KNeighborsClassifier,
}


def get_base_clf(name, **options):
    """Instantiate a registered base classifier by name."""
    if name not in BASE_CLFS:
        raise ValueError("unknown base classifier {!r}, expected one of "
                         "{}".format(name, sorted(BASE_CLFS)))
    return BASE_CLFS[name](**options)


def supports_update(model):
    return callable(getattr(model, 'partial_fit', None))


class ModelWrapper():
    """Uniform interface over a single-target classifier.

    Training sets with a single class are handled without calling the model
    (unless it is updateable), and distributions are always aligned to the
    full domain ``0..n_classes-1`` of the target.

    Parameters
    ----------
    model : sklearn classifier object instance.

    n_classes : int, optional
        Size of the target domain. Set by :meth:`train` when omitted.
    """

    def __init__(self, model, n_classes=None):
        if isinstance(model, ModelWrapper):
            model = model.model
        self.model = model
        self.n_classes = n_classes
        self.cls = None

    @property
    def supports_update(self):
        return supports_update(self.model)

    def copy(self, n_classes=None):
        """An untrained, independent copy of this configuration."""
        return ModelWrapper(clone(self.model, safe=False), n_classes)

    def train(self, X, y):
        y = np.asarray(y).astype(int)
        if self.n_classes is None:
            self.n_classes = max(2, int(y.max()) + 1)
        seen = np.unique(y)
        self.cls = None
        if self.supports_update and len(seen) < self.n_classes:
            self.model.partial_fit(X, y, classes=np.arange(self.n_classes))
        elif len(seen) == 1:
            self.cls = int(seen[0])
        else:
            self.model.fit(X, y)

    def update(self, X, y):
        if not self.supports_update:
            raise UpdateUnsupportedError(
                "{} has no partial_fit".format(type(self.model).__name__))
        y = np.asarray(y).astype(int)
        if not hasattr(self.model, 'classes_'):
            self.model.partial_fit(X, y, classes=np.arange(self.n_classes))
        else:
            self.model.partial_fit(X, y)

    def predict_distribution(self, X):
        """Per-class probabilities, shape (n_samples, n_classes)."""
        ret = np.zeros((len(X), self.n_classes))
        if self.cls is not None:
            ret[:, self.cls] = 1.
            return ret
        classes = np.asarray(self.model.classes_).astype(int)
        if hasattr(self.model, 'predict_proba'):
            ret[:, classes] = self.model.predict_proba(X)
        else:
            pred = np.asarray(self.model.predict(X)).astype(int)
            ret[np.arange(len(X)), pred] = 1.
        return ret

    def predict(self, X):
        return self.predict_distribution(X).argmax(axis=1)
