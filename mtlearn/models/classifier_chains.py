"""Classifier Chain module
"""
from ..ordering import parents_in_chain
from .problem_transformation import ProblemTransformation


class ClassifierChains(ProblemTransformation):
    """
    Classifier Chain

    Target ``chain[k]`` is trained with the true values of
    ``chain[0], ..., chain[k-1]`` appended to the features. At prediction
    time the values already predicted for those targets are used instead.

    Parameters
    ----------
    base_clf : sklearn classifier object instance.

    chain : sequence of int, optional (default=None)
        A permutation of the target indices; the natural order if None.
        See :mod:`mtlearn.ordering` for random chains.

    incremental : bool, optional (default=False)

    debug : bool, optional (default=False)

    Attributes
    ----------
    clfs\\_ : list
        A list of the model instances used in this algorithm.

    References
    ----------
    .. [1] Read, Jesse, et al. "Classifier chains for multi-label
           classification." Machine learning 85.3 (2011): 333-359.
    """

    def __init__(self, base_clf, chain=None, incremental=False, debug=False):
        super().__init__(base_clf, chain=chain,
                         parent_policy=parents_in_chain, multitarget=False,
                         incremental=incremental, debug=debug)


class MultiTargetClassifierChains(ProblemTransformation):
    """Classifier Chain for multi-target data.

    Same training and prediction as :class:`ClassifierChains`, for targets
    with any number of values. :meth:`distribution_for_instance` returns the
    ``L`` decisions followed by their ``L`` confidences, which is what
    :class:`mtlearn.models.BaggingML` votes with.
    """

    def __init__(self, base_clf, chain=None, incremental=False, debug=False):
        super().__init__(base_clf, chain=chain,
                         parent_policy=parents_in_chain, multitarget=True,
                         incremental=incremental, debug=debug)
