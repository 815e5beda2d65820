"""Problem transformation core

One model per target, each trained on a per-target projection of the data.
Binary relevance and classifier chains only differ in which other targets
are appended to the features (the parent policy) and in the order targets
are resolved (the chain).
"""
import logging
import threading

import numpy as np

from ..dataset import MultiTargetDataset, as_instances
from ..exceptions import (
    BaseLearnerError,
    NotTrainedError,
    UpdateUnsupportedError,
)
from ..model_wrapper import ModelWrapper
from ..ordering import check_chain, no_parents
from ..projection import TemplateSlots, project
from ..utils import timer

logger = logging.getLogger(__name__)


class ProblemTransformation():
    """Per-target decomposition of a multi-label / multi-target problem.

    Parameters
    ----------
    base_clf : sklearn classifier object instance.
        Copied once per target.

    chain : sequence of int, optional (default=None)
        Order in which the targets are trained and predicted. None means
        ``0, ..., L-1``.

    parent_policy : callable, optional (default=no_parents)
        Maps a chain to ``{target: targets appended to its features}``.

    multitarget : bool, optional (default=False)
        If True, :meth:`distribution_for_instance` returns the decisions
        followed by their confidences (length ``2L``) instead of the
        probability of the positive class of each target.

    incremental : bool, optional (default=False)
        Allow :meth:`update`. The base classifier must have ``partial_fit``.

    debug : bool, optional (default=False)
        Log progress at INFO level instead of DEBUG.

    Attributes
    ----------
    clfs\\_ : list of ModelWrapper
        One trained model per target, indexed by target.

    templates\\_ : TemplateSlots
        Projection template of every target.

    chain\\_ : tuple of int

    schema\\_ : Schema
        Layout of the training data.
    """

    def __init__(self, base_clf, chain=None, parent_policy=no_parents,
                 multitarget=False, incremental=False, debug=False):
        self.base_clf = ModelWrapper(base_clf).copy()
        self.chain = chain
        self.parent_policy = parent_policy
        self.multitarget = multitarget
        self.incremental = incremental
        self.debug = debug
        if incremental and not self.base_clf.supports_update:
            raise UpdateUnsupportedError(
                "{} can not be incremental: {} has no partial_fit".format(
                    self.name, type(self.base_clf.model).__name__))

        self.n_labels = None
        self.clfs_ = []
        self.templates_ = None
        self.chain_ = None
        self.parents_ = None
        self.schema_ = None
        self._update_lock = threading.Lock()

    @property
    def name(self):
        return type(self).__name__

    def _log(self, msg, *args):
        logger.log(logging.INFO if self.debug else logging.DEBUG,
                   "%s: " + msg, self.name, *args)

    def __getstate__(self):
        state = self.__dict__.copy()
        del state['_update_lock']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._update_lock = threading.Lock()

    def _check_trained(self):
        if self.templates_ is None or not self.templates_.complete:
            raise NotTrainedError("{} is not trained yet".format(self.name))

    def train(self, dataset):
        """Train one model per target.

        The fitted state is replaced only once every model is trained, so a
        failing base classifier leaves the previous state untouched.
        """
        if not isinstance(dataset, MultiTargetDataset):
            raise TypeError("train expects a MultiTargetDataset, got "
                            "{}".format(type(dataset).__name__))
        n_labels = dataset.n_targets
        chain = check_chain(self.chain, n_labels)
        parents = self.parent_policy(chain)

        clfs = [None] * n_labels
        templates = TemplateSlots(n_labels)
        self._log("creating %d models (%s), chain %s", n_labels,
                  type(self.base_clf.model).__name__, list(chain))
        with timer("{}: training".format(self.name), self.debug, logger):
            for j in chain:
                projected = project(dataset, j, parents[j])
                if np.isnan(projected.y).any():
                    raise ValueError("target {} has missing values in the "
                                     "training data".format(j))
                clf = self.base_clf.copy(projected.template.n_classes)
                try:
                    clf.train(projected.X, projected.y)
                except Exception as exc:
                    raise BaseLearnerError(self.name, j, 'train', exc) from exc
                self._log("built model for %s", projected.template.label.name)
                clfs[j] = clf
                templates.set(j, projected.template)

        self.n_labels = n_labels
        self.chain_ = chain
        self.parents_ = parents
        self.schema_ = dataset.schema
        self.clfs_ = clfs
        self.templates_ = templates

    def _resolve(self, X):
        """Predict every target in chain order.

        Returns the decisions and the per-target distributions. Decisions of
        earlier targets are written into a copy of the data so later targets
        see them as features.
        """
        self._check_trained()
        # target values are overwritten below, so only the feature layout and
        # the number of targets have to agree with the training schema
        data = as_instances(X, self.schema_)
        data = MultiTargetDataset(data.data, self.schema_)
        n_samples = len(data)
        decisions = np.zeros((n_samples, self.n_labels), dtype=int)
        dists = [None] * self.n_labels
        for j in self.chain_:
            projected = project(data, j, self.parents_[j],
                                self.templates_.get(j))
            try:
                dist = self.clfs_[j].predict_distribution(projected.X)
            except Exception as exc:
                raise BaseLearnerError(self.name, j, 'predict', exc) from exc
            # argmax keeps the lowest code on ties
            decisions[:, j] = dist.argmax(axis=1)
            data.data[:, j] = decisions[:, j]
            dists[j] = dist
        return decisions, dists

    def predict_with_confidence(self, X):
        """Decisions and the probability of each decision.

        Returns
        -------
        decisions : array, shape (n_samples, n_labels), int

        confidences : array, shape (n_samples, n_labels), float
        """
        decisions, dists = self._resolve(X)
        rows = np.arange(len(decisions))
        confidences = np.zeros(decisions.shape)
        for j, dist in enumerate(dists):
            confidences[:, j] = dist[rows, decisions[:, j]]
        return decisions, confidences

    def predict(self, X):
        return self._resolve(X)[0]

    def predict_proba(self, X):
        """Probability of the positive class of every (binary) target."""
        self._check_trained()
        if not self.schema_.is_multilabel:
            raise ValueError("predict_proba needs binary targets, use "
                             "predict_with_confidence instead")
        _, dists = self._resolve(X)
        return np.column_stack([dist[:, 1] for dist in dists])

    def distribution_for_instance(self, x):
        """Prediction for a single row.

        Multi-label output: the ``L`` positive class probabilities.
        Multi-target output: ``L`` decisions followed by ``L`` confidences.
        """
        x = np.asarray(x, dtype=float)
        if x.ndim != 1:
            raise ValueError("expected a single instance, got shape "
                             "{}".format(x.shape))
        if self.multitarget:
            decisions, confidences = self.predict_with_confidence(x)
            return np.concatenate((decisions[0], confidences[0]))
        return self.predict_proba(x)[0]

    def update(self, X):
        """Incrementally update every model with labelled rows.

        The rows are projected as in :meth:`train` (true values of the
        parents as features) and passed to the models in chain order.
        """
        if not self.incremental:
            raise UpdateUnsupportedError(
                "{} was not configured with incremental=True".format(
                    self.name))
        self._check_trained()
        data = as_instances(X, self.schema_)
        if np.isnan(data.Y).any():
            raise ValueError("update needs the true values of all targets")
        with self._update_lock:
            self._log("updating %d models with %d instances", self.n_labels,
                      len(data))
            for j in self.chain_:
                projected = project(data, j, self.parents_[j],
                                    self.templates_.get(j))
                try:
                    self.clfs_[j].update(projected.X, projected.y)
                except Exception as exc:
                    raise BaseLearnerError(self.name, j, 'update',
                                           exc) from exc
