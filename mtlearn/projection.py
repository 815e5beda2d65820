"""Per-target projection

Turns a multi-target dataset into the single-target problem of one target:
the selected target becomes the label, the values of some other targets are
appended to the features and every other target is dropped.
"""
from collections import namedtuple

import numpy as np

from .exceptions import NotTrainedError, SchemaMismatchError


class ProjectionTemplate(namedtuple('ProjectionTemplate', [
        'target', 'label', 'extra_targets', 'extra_attributes',
        'feature_attributes'])):
    """Attribute layout of a projected dataset.

    Attributes
    ----------
    target : int
        Index of the label in the source dataset.

    label : Attribute

    extra_targets : tuple of int
        Source indices of the targets appended as features, in order.

    extra_attributes : tuple of Attribute

    feature_attributes : tuple of Attribute
        The source features, unchanged.
    """
    __slots__ = ()

    @property
    def n_classes(self):
        return self.label.n_values

    @property
    def n_inputs(self):
        return len(self.feature_attributes) + len(self.extra_targets)

    @classmethod
    def from_schema(cls, schema, target, extra_targets):
        attrs = schema.attributes
        return cls(target, attrs[target], tuple(extra_targets),
                   tuple(attrs[k] for k in extra_targets),
                   schema.feature_attributes)

    def check(self, other):
        """Raise SchemaMismatchError unless ``other`` has the same layout."""
        for field in self._fields:
            if getattr(self, field) != getattr(other, field):
                raise SchemaMismatchError(
                    "projection template {} mismatch: expected {}, got "
                    "{}".format(field, getattr(self, field),
                                getattr(other, field)))


ProjectedDataset = namedtuple('ProjectedDataset', ['X', 'y', 'template'])


def _check_indices(n_targets, target, extra_targets):
    if not 0 <= target < n_targets:
        raise ValueError("target index {} out of range [0, {})".format(
            target, n_targets))
    extra_targets = tuple(int(k) for k in extra_targets)
    if len(set(extra_targets)) != len(extra_targets):
        raise ValueError("repeated extra targets: {}".format(extra_targets))
    for k in extra_targets:
        if k == target or not 0 <= k < n_targets:
            raise ValueError("invalid extra target {} for target {}".format(
                k, target))
    return extra_targets


def project(dataset, target, extra_targets=(), template=None):
    """Project ``dataset`` onto a single target.

    Parameters
    ----------
    dataset : MultiTargetDataset
        Never modified.

    target : int
        The target used as label.

    extra_targets : sequence of int
        Targets whose values are appended, in this order, after the features.

    template : ProjectionTemplate or None
        None on the first training call; a template is then derived from
        ``dataset``. Otherwise ``dataset`` is checked against it.

    Returns
    -------
    ProjectedDataset
        ``X`` of shape (n_samples, n_features + len(extra_targets)), ``y`` the
        label column (float, NaN where unknown) and the template.
    """
    target = int(target)
    extra_targets = _check_indices(dataset.n_targets, target, extra_targets)
    live = ProjectionTemplate.from_schema(dataset.schema, target,
                                          extra_targets)
    if template is None:
        template = live
    else:
        template.check(live)

    data = dataset.data
    X = np.hstack((data[:, dataset.n_targets:], data[:, list(extra_targets)]))
    y = data[:, target].copy()
    return ProjectedDataset(X, y, template)


class TemplateSlots():
    """Write-once storage of one projection template per target."""

    def __init__(self, n_targets):
        self._slots = [None] * n_targets

    def __len__(self):
        return len(self._slots)

    def __iter__(self):
        return iter(self._slots)

    def set(self, j, template):
        if self._slots[j] is not None:
            raise ValueError("template of target {} already set".format(j))
        self._slots[j] = template

    def get(self, j):
        if self._slots[j] is None:
            raise NotTrainedError("no template for target {}".format(j))
        return self._slots[j]

    @property
    def complete(self):
        return all(t is not None for t in self._slots)
