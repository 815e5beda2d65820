"""Problem transformation methods for multi-label and multi-target learning
"""
from .dataset import Attribute, MultiTargetDataset, Schema
from .exceptions import (
    BaseLearnerError,
    NotTrainedError,
    SchemaMismatchError,
    UpdateUnsupportedError,
)

__version__ = '0.1.0'
