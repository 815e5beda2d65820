"""Row-wise scores for multi-label and multi-target predictions

Every function takes the truth ``Z`` and the prediction ``Y``, two matrices
of the same shape (dense or scipy.sparse), and returns one value per row,
except :func:`per_target_accuracy` which returns one value per column.
"""
import numpy as np
import scipy.sparse as ss


def _dense_pair(Z, Y):
    if ss.issparse(Z):
        Z = Z.toarray()
    if ss.issparse(Y):
        Y = Y.toarray()
    Z = np.asarray(Z, dtype=int)
    Y = np.asarray(Y, dtype=int)
    if Z.shape != Y.shape:
        raise ValueError("shape mismatch: {} != {}".format(Z.shape, Y.shape))
    return Z, Y


def pairwise_hamming_loss(Z, Y):
    """Fraction of targets predicted wrong. Works for multi-target data."""
    Z, Y = _dense_pair(Z, Y)
    return (Z != Y).astype(float).mean(axis=1)


def exact_match(Z, Y):
    """1 where every target of the row is right (subset accuracy)."""
    Z, Y = _dense_pair(Z, Y)
    return np.all(Z == Y, axis=1).astype(float)


def pairwise_f1_score(Z, Y):
    """
    Z and Y should be the same size 2-d binary matrix
    """
    # calculate F1 by sum(2*y_i*h_i) / (sum(y_i) + sum(h_i))
    Z, Y = _dense_pair(Z, Y)
    up = 2 * np.sum(Z & Y, axis=1).astype(float)
    down = np.sum(Z, axis=1) + np.sum(Y, axis=1)

    ind = (down == 0)  # avoid divide by zero error
    down[ind] = 1
    up[ind] = 1.

    return up / down


def pairwise_accuracy_score(Z, Y):
    """Jaccard index of the true and predicted label sets."""
    Z, Y = _dense_pair(Z, Y)
    inter = 1.0 * ((Z > 0) & (Y > 0)).sum(axis=1)
    union = 1.0 * ((Z > 0) | (Y > 0)).sum(axis=1)
    inter[union == 0] = 1.0
    inter[union > 0] /= union[union > 0]
    return inter


def pairwise_rank_loss(Z, Y):
    """
    Z: truth
    Y: predict
    Z and Y should be the same size 2-d binary matrix
    """
    Z, Y = _dense_pair(Z, Y)
    rankloss = ((Z == 0) & (Y == 1)).sum(axis=1) * \
        ((Z == 1) & (Y == 0)).sum(axis=1)
    tie0 = 0.5 * ((Z == 0) & (Y == 0)).sum(axis=1) * \
        ((Z == 1) & (Y == 0)).sum(axis=1)
    tie1 = 0.5 * ((Z == 0) & (Y == 1)).sum(axis=1) * \
        ((Z == 1) & (Y == 1)).sum(axis=1)
    return rankloss + tie0 + tie1


def per_target_accuracy(Z, Y):
    """Accuracy of every target over the rows."""
    Z, Y = _dense_pair(Z, Y)
    return (Z == Y).astype(float).mean(axis=0)


SCORING_FNS = {
    'hamming': pairwise_hamming_loss,
    'exact_match': exact_match,
    'f1': pairwise_f1_score,
    'acc': pairwise_accuracy_score,
    'rankloss': pairwise_rank_loss,
}


def get_scoring_fn(scoring):
    if scoring not in SCORING_FNS:
        raise ValueError("unknown scoring {!r}, expected one of {}".format(
            scoring, sorted(SCORING_FNS)))
    return SCORING_FNS[scoring]
