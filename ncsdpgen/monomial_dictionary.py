# -*- coding: utf-8 -*-
"""
The dictionary that maps canonical monomials to the position of the first
cell of the moment matrix that produced them. Every later cell with the same
canonical monomial reuses that position, hence the same SDP variable.

@author: Peter Wittek
"""
from threading import Lock


class UnregisteredMonomialError(KeyError):

    """Raised when a monomial is not registered in the moment matrix."""

    def __init__(self, monomial):
        super(UnregisteredMonomialError, self).__init__(monomial)
        self.monomial = monomial

    def __str__(self):
        return "The requested monomial %s could not be found in the " \
               "moment matrix." % (self.monomial,)


def index2linear(row, column, n_monomials):
    """Map a position of the moment matrix to the linear index of its SDP
    variable. Index 0 is reserved for constant entries.
    """
    return row * n_monomials + column + 1


class MonomialDictionary(object):

    """Thread-safe mapping from canonical monomials to (row, column)
    positions.
    """

    def __init__(self):
        self._positions = {}
        self._lock = Lock()

    def setdefault(self, monomial, position):
        """Register a monomial at a position unless it is already known.

        :param monomial: Canonical monomial.
        :param position: The (row, column) of the cell that produced it.
        :type position: tuple of int.

        :returns: the position stored for the monomial.
        """
        with self._lock:
            return self._positions.setdefault(monomial, position)

    def get(self, monomial, default=None):
        with self._lock:
            return self._positions.get(monomial, default)

    def __getitem__(self, monomial):
        position = self.get(monomial)
        if position is None:
            raise UnregisteredMonomialError(monomial)
        return position

    def __contains__(self, monomial):
        with self._lock:
            return monomial in self._positions

    def __len__(self):
        with self._lock:
            return len(self._positions)

    def items(self):
        with self._lock:
            return list(self._positions.items())
