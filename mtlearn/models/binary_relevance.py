"""Binary Relevance Module
"""
from ..ordering import no_parents
from .problem_transformation import ProblemTransformation


class BinaryRelevance(ProblemTransformation):
    """Binary Relevance

    Trains one independent model per target on the features only.

    Parameters
    ----------
    base_clf : sklearn classifier object instance.

    incremental : bool, optional (default=False)
        Allow :meth:`update`; ``base_clf`` must have ``partial_fit``.

    debug : bool, optional (default=False)

    Attributes
    ----------
    clfs\\_ : list
        A list of the model instances used in this algorithm.

    References
    ----------
    Tsoumakas, Grigorios, and Ioannis Katakis. "Multi-label classification:
    An overview." International Journal of Data Warehousing and Mining 3.3
    (2006).
    """

    def __init__(self, base_clf, incremental=False, debug=False):
        super().__init__(base_clf, chain=None, parent_policy=no_parents,
                         multitarget=False, incremental=incremental,
                         debug=debug)
