"""Chain orders

A chain is a permutation of the target indices. Strategies take it as
given; the helpers here only build and validate one.
"""
import numpy as np

from .utils import seed_random_state


def natural_order(n_targets):
    return tuple(range(n_targets))


def random_order(n_targets, random_state=None):
    """Seeded random chain, e.g. to build ensembles of classifier chains."""
    random_state = seed_random_state(random_state)
    return tuple(int(j) for j in random_state.permutation(n_targets))


def check_chain(chain, n_targets):
    """Return ``chain`` as a tuple, or the natural order if it is None."""
    if chain is None:
        return natural_order(n_targets)
    chain = tuple(int(j) for j in chain)
    if sorted(chain) != list(range(n_targets)):
        raise ValueError("chain {} is not a permutation of {} targets".format(
            list(chain), n_targets))
    return chain


def no_parents(chain):
    """Every target on its own (binary relevance)."""
    return {j: () for j in chain}


def parents_in_chain(chain):
    """Map each target to the targets that precede it in ``chain``."""
    chain = tuple(chain)
    return {j: chain[:pos] for pos, j in enumerate(chain)}
