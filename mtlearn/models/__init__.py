
from .problem_transformation import ProblemTransformation
from .binary_relevance import BinaryRelevance
from .classifier_chains import ClassifierChains, MultiTargetClassifierChains
from .bagging import BaggingML, BaggingMLUpdateable

__all__ = ['ProblemTransformation', 'BinaryRelevance', 'ClassifierChains',
           'MultiTargetClassifierChains', 'BaggingML', 'BaggingMLUpdateable']
