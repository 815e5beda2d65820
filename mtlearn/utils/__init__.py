"""
Thanks to Ian Lin for the first version of the data loading functions
"""
import logging
import re
from contextlib import contextmanager

import arff    # liac-arff
import numpy as np
import pandas as pd
from bistiming import Stopwatch

from ..dataset import Attribute, MultiTargetDataset, Schema

logger = logging.getLogger(__name__)


def load_data(dataset_path: str):
    """Dataset loading function for MEKA style datasets (``<path>.arff``).
    """
    return load_arff(dataset_path + ".arff")


def load_arff(arff_filename: str):
    """Read a MEKA ARFF file.

    The relation name carries the number of targets as ``-C <L>``, e.g.
    ``@relation 'scene: -C 6'``; the first ``L`` attributes are the targets.
    """
    with open(arff_filename, "r") as fp:
        data = arff.load(fp)

    match = re.search(r"-C\s+(-?\d+)", data["relation"])
    if match is None:
        raise ValueError("relation {!r} has no -C option".format(
            data["relation"]))
    n_targets = int(match.group(1))
    if n_targets < 0:
        # MEKA allows counting the targets from the end of the attributes
        raise ValueError("targets at the end (-C {}) are not supported".format(
            n_targets))

    # build converters to convert nominal data to numerical data
    attributes = []
    converters = {}
    for name, kind in data["attributes"]:
        if isinstance(kind, list):
            converters[name] = {cls: e for e, cls in enumerate(kind)}
            attributes.append(Attribute(name, kind))
        elif kind.upper() in ('NUMERIC', 'REAL', 'INTEGER'):
            attributes.append(Attribute(name))
        else:
            raise NotImplementedError(
                "attribute {} of type {} is not supported.".format(name, kind))

    columns = [a.name for a in attributes]
    df = pd.DataFrame(data['data'], columns=columns)
    for name, converter in converters.items():
        df[name] = df[name].map(converter)

    logger.debug("loaded %s: %d instances, %d targets", arff_filename,
                 len(df), n_targets)
    return MultiTargetDataset(df.values.astype(float),
                              Schema(attributes, n_targets))


def seed_random_state(seed):
    """Turn seed into np.random.RandomState instance
    """
    if (seed is None) or isinstance(seed, (int, np.integer)):
        return np.random.RandomState(seed)
    elif isinstance(seed, np.random.RandomState):
        return seed
    raise ValueError("%r can not be used to generate numpy.random.RandomState"
                     " instance" % seed)


@contextmanager
def timer(description, debug=False, log=None):
    """Log the time spent in the block to ``log`` when ``debug`` is set."""
    if not debug:
        yield
        return
    with Stopwatch(description, logger=log or logger,
                   logging_level=logging.INFO):
        yield
