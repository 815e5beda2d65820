""" Test incremental updates of the problem transformation methods
"""
import os
import shutil
import tempfile
import threading
import unittest

import joblib
import numpy as np
from numpy.testing import assert_array_equal
from sklearn.linear_model import LogisticRegression
from sklearn.naive_bayes import GaussianNB

from mtlearn.dataset import MultiTargetDataset
from mtlearn.exceptions import (
    BaseLearnerError,
    NotTrainedError,
    UpdateUnsupportedError,
)
from mtlearn.models import BinaryRelevance, ClassifierChains


def make_noisy(n_samples=60, random_state=1126):
    random_state = np.random.RandomState(random_state)
    X = random_state.randn(n_samples, 4)
    Y = random_state.randint(0, 2, (n_samples, 3))
    return MultiTargetDataset.from_arrays(X, Y)


class FrozenNB(GaussianNB):
    """Trains with fit, refuses every update."""

    def partial_fit(self, X, y, classes=None, sample_weight=None):
        raise ValueError("frozen")


class IncrementalTestCase(unittest.TestCase):

    def setUp(self):
        self.dataset = make_noisy()

    def test_unsupported_at_configuration(self):
        with self.assertRaises(UpdateUnsupportedError):
            BinaryRelevance(LogisticRegression(), incremental=True)
        with self.assertRaises(UpdateUnsupportedError):
            ClassifierChains(LogisticRegression(), incremental=True)

    def test_update_needs_incremental(self):
        model = BinaryRelevance(GaussianNB())
        model.train(self.dataset)
        with self.assertRaises(UpdateUnsupportedError):
            model.update(self.dataset)

    def test_update_before_train(self):
        model = BinaryRelevance(GaussianNB(), incremental=True)
        with self.assertRaises(NotTrainedError):
            model.update(self.dataset.instance(0))

    def test_update_raises_confidence(self):
        model = BinaryRelevance(GaussianNB(), incremental=True)
        model.train(self.dataset)
        x = self.dataset.instance(0)
        truth = self.dataset.Y[0]

        def true_label_proba():
            proba = model.predict_proba(x)[0]
            return np.where(truth == 1, proba, 1 - proba)

        before = true_label_proba()
        for _ in range(20):
            model.update(x)
        after = true_label_proba()
        for j in range(3):
            self.assertGreater(after[j], before[j])

    def test_update_keeps_templates(self):
        model = ClassifierChains(GaussianNB(), chain=[2, 0, 1],
                                 incremental=True)
        model.train(self.dataset)
        templates = list(model.templates_)
        counts = [clf.model.class_count_.sum() for clf in model.clfs_]

        model.update(self.dataset.subset(range(10)))
        self.assertEqual(list(model.templates_), templates)
        for j in range(3):
            self.assertIs(model.templates_.get(j), templates[j])
            self.assertEqual(model.clfs_[j].model.class_count_.sum(),
                             counts[j] + 10)

    def test_update_needs_targets(self):
        model = BinaryRelevance(GaussianNB(), incremental=True)
        model.train(self.dataset)
        with self.assertRaises(ValueError):
            model.update(self.dataset.X[:2])

    def test_base_learner_error_on_update(self):
        model = ClassifierChains(FrozenNB(), chain=[1, 2, 0],
                                 incremental=True)
        model.train(self.dataset)
        with self.assertRaises(BaseLearnerError) as cm:
            model.update(self.dataset.instance(0))
        self.assertEqual(cm.exception.target, 1)
        self.assertEqual(cm.exception.operation, 'update')
        self.assertIsInstance(cm.exception.__cause__, ValueError)

    def test_update_waits_for_lock(self):
        model = BinaryRelevance(GaussianNB(), incremental=True)
        model.train(self.dataset)
        rows = self.dataset.subset(range(5))
        threads = [threading.Thread(target=model.update, args=(rows,))
                   for _ in range(4)]
        with model._update_lock:
            for thread in threads:
                thread.start()
            for thread in threads:
                thread.join(0.1)
                self.assertTrue(thread.is_alive())
            for clf in model.clfs_:
                self.assertEqual(clf.model.class_count_.sum(), 60)
        for thread in threads:
            thread.join()
        for clf in model.clfs_:
            self.assertEqual(clf.model.class_count_.sum(), 80)

class PersistenceTestCase(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_dump_and_load(self):
        dataset = make_noisy()
        model = ClassifierChains(GaussianNB(), incremental=True)
        model.train(dataset)
        path = os.path.join(self.tmpdir, "cc.joblib")
        joblib.dump(model, path)
        loaded = joblib.load(path)

        assert_array_equal(loaded.predict_proba(dataset),
                           model.predict_proba(dataset))
        loaded.update(dataset.instance(1))
        model.update(dataset.instance(1))
        assert_array_equal(loaded.predict_proba(dataset),
                           model.predict_proba(dataset))


if __name__ == '__main__':
    unittest.main()
