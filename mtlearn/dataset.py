"""Multi-label / multi-target dataset representation

A dataset is a dense matrix whose first ``n_targets`` columns are the
targets (integer codes of nominal values) and whose remaining columns are
the features. The attribute layout lives in a :class:`Schema`.
"""
from collections import namedtuple

import numpy as np

from .exceptions import SchemaMismatchError


class Attribute(namedtuple('Attribute', ['name', 'values'])):
    """A named attribute. ``values`` is None for numeric attributes and the
    tuple of nominal values otherwise."""
    __slots__ = ()

    def __new__(cls, name, values=None):
        if values is not None:
            values = tuple(values)
        return super().__new__(cls, name, values)

    @property
    def is_nominal(self):
        return self.values is not None

    @property
    def n_values(self):
        return len(self.values) if self.values is not None else 0


def _mismatch(what, expected, got):
    return SchemaMismatchError("{} mismatch: expected {}, got {}".format(
        what, expected, got))


class Schema():
    """Ordered attribute layout of a dataset.

    Parameters
    ----------
    attributes : sequence of Attribute
        Targets first, then features.

    n_targets : int
        Number of leading attributes that are targets.
    """

    def __init__(self, attributes, n_targets):
        self.attributes = tuple(attributes)
        self.n_targets = int(n_targets)
        if not 0 < self.n_targets <= len(self.attributes):
            raise ValueError("n_targets should be in [1, {}], got {}".format(
                len(self.attributes), n_targets))
        for attr in self.target_attributes:
            if not attr.is_nominal or attr.n_values < 2:
                raise ValueError("target {!r} should be nominal with at "
                                 "least two values".format(attr.name))

    @property
    def target_attributes(self):
        return self.attributes[:self.n_targets]

    @property
    def feature_attributes(self):
        return self.attributes[self.n_targets:]

    @property
    def n_features(self):
        return len(self.attributes) - self.n_targets

    @property
    def is_multilabel(self):
        return all(a.n_values == 2 for a in self.target_attributes)

    def domain_size(self, j):
        return self.attributes[j].n_values

    def check_features(self, other):
        """Raise SchemaMismatchError if the features of ``other`` (a Schema
        or a sequence of attributes) differ in count, order or domain."""
        if isinstance(other, Schema):
            other = other.feature_attributes
        other = tuple(other)
        mine = self.feature_attributes
        if len(mine) != len(other):
            raise _mismatch("number of features", len(mine), len(other))
        for i, (a, b) in enumerate(zip(mine, other)):
            if a != b:
                raise _mismatch("feature {}".format(i), a, b)

    def __eq__(self, other):
        return (isinstance(other, Schema)
                and self.n_targets == other.n_targets
                and self.attributes == other.attributes)

    def __hash__(self):
        return hash((self.attributes, self.n_targets))

    def __repr__(self):
        return "Schema(n_targets={}, n_features={})".format(
            self.n_targets, self.n_features)


class MultiTargetDataset():
    """Dense multi-target dataset.

    Parameters
    ----------
    data : array-like, shape (n_samples, n_targets + n_features)
        Target codes in the first ``schema.n_targets`` columns. Unknown
        target values (at prediction time) are NaN.

    schema : Schema
    """

    def __init__(self, data, schema):
        data = np.array(data, dtype=float, ndmin=2)
        if data.ndim != 2 or data.shape[1] != len(schema.attributes):
            raise _mismatch("number of attributes", len(schema.attributes),
                            data.shape[-1])
        self.data = data
        self.schema = schema

    @classmethod
    def from_arrays(cls, X, Y, feature_names=None, target_names=None,
                    target_values=None):
        """Build a dataset from a feature matrix and a label matrix.

        ``target_values`` optionally gives the domain of every target;
        otherwise it is ``range(max(2, max(Y[:, j]) + 1))``.
        """
        X = np.asarray(X, dtype=float)
        Y = np.asarray(Y)
        if Y.ndim == 1:
            Y = Y.reshape(-1, 1)
        if X.shape[0] != Y.shape[0]:
            raise ValueError("X and Y have different numbers of rows: "
                             "{} != {}".format(X.shape[0], Y.shape[0]))
        n_targets = Y.shape[1]
        if target_names is None:
            target_names = ['y{}'.format(j) for j in range(n_targets)]
        if feature_names is None:
            feature_names = ['x{}'.format(i) for i in range(X.shape[1])]
        if target_values is None:
            highest = np.nanmax(Y, axis=0) if len(Y) else np.zeros(n_targets)
            target_values = [range(max(2, int(h) + 1)) for h in highest]
        attributes = [Attribute(name, [str(v) for v in values])
                      for name, values in zip(target_names, target_values)]
        attributes += [Attribute(name) for name in feature_names]
        return cls(np.hstack((Y.astype(float), X)),
                   Schema(attributes, n_targets))

    @property
    def n_targets(self):
        return self.schema.n_targets

    @property
    def X(self):
        return self.data[:, self.n_targets:]

    @property
    def Y(self):
        return self.data[:, :self.n_targets]

    def __len__(self):
        return self.data.shape[0]

    def instance(self, i):
        return self.data[i].copy()

    def subset(self, indices):
        """Rows at ``indices`` in the given order (repetitions allowed)."""
        return MultiTargetDataset(self.data[np.asarray(indices, dtype=int)],
                                  self.schema)

    def copy(self):
        return MultiTargetDataset(self.data.copy(), self.schema)

    def __repr__(self):
        return "MultiTargetDataset(n_samples={}, n_targets={}, " \
               "n_features={})".format(len(self), self.n_targets,
                                       self.schema.n_features)


def as_instances(x, schema):
    """Wrap ``x`` as a dataset bound to ``schema``.

    ``x`` may be a MultiTargetDataset (its feature schema is checked), a
    single row or a 2-d array. Rows may omit the target block, in which
    case the targets are NaN.
    """
    if isinstance(x, MultiTargetDataset):
        schema.check_features(x.schema)
        if x.n_targets != schema.n_targets:
            raise _mismatch("number of targets", schema.n_targets,
                            x.n_targets)
        return x
    x = np.array(x, dtype=float, ndmin=2)
    if x.shape[1] == schema.n_features:
        x = np.hstack((np.full((x.shape[0], schema.n_targets), np.nan), x))
    return MultiTargetDataset(x, schema)
