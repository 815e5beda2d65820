"""Bagging of multi-label / multi-target classifiers
"""
import copy
import logging
import threading

import numpy as np
from joblib import Parallel, delayed

from ..dataset import MultiTargetDataset, as_instances
from ..exceptions import NotTrainedError, UpdateUnsupportedError
from ..utils import seed_random_state, timer

logger = logging.getLogger(__name__)


def train_single_clf(clf, dataset):
    """
    helper function to train the members in parallel
    """
    clf.train(dataset)
    return clf


def max_item(votes):
    """Key with the largest weight; the first inserted wins ties."""
    best, best_weight = None, None
    for value, weight in votes.items():
        if best_weight is None or weight > best_weight:
            best, best_weight = value, weight
    return best, best_weight


class BaggingML():
    """
    Bootstrap AGGregatING of multi-label / multi-target strategies

    Each member is trained on its own bootstrap sample. Predictions are
    combined by weighted voting: for every target, each member votes for its
    decision with its confidence, and the value with the largest total wins.
    On equal totals the value voted for first (in member order) wins.

    Parameters
    ----------
    base_strategy : strategy object or callable
        An untrained strategy (e.g. ClassifierChains), deep-copied for every
        member, or a function without arguments returning a new strategy.

    n_clfs : int, optional (default=10)
        The number of members.

    bag_size_percent : int, optional (default=100)
        Size of each bootstrap sample as a percentage of the training set.

    n_jobs : int, optional (default=1)
        The number of jobs to train the members in parallel. If -1, then
        the number of jobs is set to the number of cores.

    random_state : {int, np.random.RandomState instance, None}, optional (default=None)
        If int or None, random_state is passed as parameter to generate
        np.random.RandomState instance. if np.random.RandomState instance,
        random_state is the random number generate.

    debug : bool, optional (default=False)

    Attributes
    ----------
    clfs\\_ : list
        The trained members, in voting order.

    References
    ----------
    .. [1] Breiman, Leo. "Bagging predictors." Machine learning 24.2 (1996):
           123-140.
    .. [2] Read, Jesse, et al. "Classifier chains for multi-label
           classification." Machine learning 85.3 (2011): 333-359.
    """

    def __init__(self, base_strategy, n_clfs=10, bag_size_percent=100,
                 n_jobs=1, random_state=None, debug=False):
        if n_clfs < 1:
            raise ValueError("n_clfs should be positive, got {}".format(
                n_clfs))
        if bag_size_percent <= 0:
            raise ValueError("bag_size_percent should be positive, got "
                             "{}".format(bag_size_percent))
        self.base_strategy = base_strategy
        self.n_clfs = n_clfs
        self.bag_size_percent = bag_size_percent
        self.n_jobs = n_jobs
        self.random_state_ = seed_random_state(random_state)
        self.debug = debug

        self.n_labels = None
        self.clfs_ = None
        self._update_lock = threading.Lock()

    @property
    def name(self):
        return type(self).__name__

    def __getstate__(self):
        state = self.__dict__.copy()
        del state['_update_lock']
        return state

    def __setstate__(self, state):
        self.__dict__.update(state)
        self._update_lock = threading.Lock()

    def _new_member(self):
        if callable(self.base_strategy):
            return self.base_strategy()
        return copy.deepcopy(self.base_strategy)

    def _check_trained(self):
        if self.clfs_ is None:
            raise NotTrainedError("{} is not trained yet".format(self.name))

    def train(self, dataset):
        if not isinstance(dataset, MultiTargetDataset):
            raise TypeError("train expects a MultiTargetDataset, got "
                            "{}".format(type(dataset).__name__))
        n_samples = len(dataset)
        bag_size = max(1, int(round(n_samples * self.bag_size_percent / 100.)))
        # all samples are drawn up front so n_jobs does not change them
        bags = [self.random_state_.randint(0, n_samples, bag_size)
                for _ in range(self.n_clfs)]
        members = [self._new_member() for _ in range(self.n_clfs)]

        logger.log(logging.INFO if self.debug else logging.DEBUG,
                   "%s: training %d members on %d instances each",
                   self.name, self.n_clfs, bag_size)
        with timer("{}: training".format(self.name), self.debug, logger):
            members = Parallel(n_jobs=self.n_jobs, backend='threading')(
                delayed(train_single_clf)(clf, dataset.subset(bag))
                for clf, bag in zip(members, bags)
            )

        self.n_labels = dataset.n_targets
        self.clfs_ = list(members)

    def predict_with_confidence(self, X):
        """Voted decisions and the mean confidence behind each of them.

        Returns
        -------
        decisions : array, shape (n_samples, n_labels), int

        confidences : array, shape (n_samples, n_labels), float
            Total weight of the winning value divided by ``n_clfs``.
        """
        self._check_trained()
        outputs = [clf.predict_with_confidence(X) for clf in self.clfs_]
        n_samples = outputs[0][0].shape[0]
        decisions = np.zeros((n_samples, self.n_labels), dtype=int)
        confidences = np.zeros((n_samples, self.n_labels))
        for i in range(n_samples):
            for j in range(self.n_labels):
                votes = {}
                for dec, conf in outputs:
                    value = int(dec[i, j])
                    votes[value] = votes.get(value, 0.) + conf[i, j]
                value, weight = max_item(votes)
                decisions[i, j] = value
                confidences[i, j] = weight / len(self.clfs_)
        return decisions, confidences

    def predict(self, X):
        return self.predict_with_confidence(X)[0]

    def distribution_for_instance(self, x):
        """The voted value of every target for a single row."""
        x = np.asarray(x, dtype=float)
        if x.ndim != 1:
            raise ValueError("expected a single instance, got shape "
                             "{}".format(x.shape))
        return self.predict(x)[0].astype(float)


class BaggingMLUpdateable(BaggingML):
    """Online bagging

    Trained like :class:`BaggingML`. :meth:`update` gives every incoming
    instance to each member ``k ~ Poisson(1)`` times. With
    ``bag_size_percent=100`` every member gets every instance once.

    The members must be incremental strategies.

    References
    ----------
    .. [1] Oza, Nikunj C., and Stuart Russell. "Online bagging and boosting."
           Artificial Intelligence and Statistics (2001): 105-112.
    """

    def __init__(self, base_strategy, n_clfs=10, bag_size_percent=67,
                 n_jobs=1, random_state=None, debug=False):
        member = base_strategy() if callable(base_strategy) else base_strategy
        if not getattr(member, 'incremental', False):
            raise UpdateUnsupportedError(
                "{} needs incremental members, got {}".format(
                    type(self).__name__, type(member).__name__))
        super().__init__(base_strategy, n_clfs=n_clfs,
                         bag_size_percent=bag_size_percent, n_jobs=n_jobs,
                         random_state=random_state, debug=debug)

    def update(self, X):
        self._check_trained()
        data = as_instances(X, self.clfs_[0].schema_)
        with self._update_lock:
            for i in range(len(data)):
                for clf in self.clfs_:
                    k = self.random_state_.poisson(1.0)
                    if self.bag_size_percent == 100:
                        k = 1
                    if k > 0:
                        clf.update(data.subset([i] * k))
