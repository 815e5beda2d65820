import logging
import sys

import numpy as np

from sklearn.datasets import make_multilabel_classification
from sklearn.linear_model import LogisticRegression
from sklearn.model_selection import train_test_split
from sklearn.naive_bayes import GaussianNB

from mtlearn.criteria import pairwise_f1_score, pairwise_hamming_loss
from mtlearn.dataset import MultiTargetDataset
from mtlearn.models import (
    BaggingML,
    BaggingMLUpdateable,
    BinaryRelevance,
    ClassifierChains,
)
from mtlearn.ordering import random_order
from mtlearn.utils import load_data


def get_dataset():
    # a MEKA ARFF path (without extension) may be given on the command line
    if len(sys.argv) > 1:
        return load_data(sys.argv[1])
    X, Y = make_multilabel_classification(n_samples=500, n_features=20,
                                          n_classes=6, random_state=1126)
    return MultiTargetDataset.from_arrays(X, Y)


def report(name, model, test):
    pred = model.predict(test)
    print(name, np.mean(pairwise_hamming_loss(test.Y, pred)),
          np.mean(pairwise_f1_score(test.Y, pred)))


def main():
    logging.basicConfig(level=logging.INFO,
                        format="[%(asctime)s] %(name)s: %(message)s")
    dataset = get_dataset()
    train_id, test_id = train_test_split(range(len(dataset)), test_size=0.3,
                                         random_state=1126)
    train, test = dataset.subset(train_id), dataset.subset(test_id)
    lr = LogisticRegression(solver="liblinear", random_state=1126)

    print("Running BR ...")
    model = BinaryRelevance(lr, debug=True)
    model.train(train)
    report("BR", model, test)

    print("Running CC ...")
    model = ClassifierChains(lr, chain=random_order(dataset.n_targets, 0),
                             debug=True)
    model.train(train)
    report("CC", model, test)

    print("Running ECC ...")
    chain_seeds = np.random.RandomState(1126)
    model = BaggingML(lambda: ClassifierChains(
        lr, chain=random_order(dataset.n_targets,
                               chain_seeds.randint(np.iinfo(np.int32).max))),
        n_clfs=10, random_state=1126, debug=True)
    model.train(train)
    report("ECC", model, test)

    print("Running online bagging of BR ...")
    model = BaggingMLUpdateable(BinaryRelevance(GaussianNB(), incremental=True),
                                n_clfs=10, random_state=1126)
    half = len(train) // 2
    model.train(train.subset(range(half)))
    for i in range(half, len(train)):
        model.update(train.instance(i))
    report("BaggingMLUpdateable", model, test)


if __name__ == '__main__':
    main()
