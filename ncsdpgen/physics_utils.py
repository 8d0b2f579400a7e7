# -*- coding: utf-8 -*-
"""
The module contains helper functions for physics applications.

Created on Fri May 16 14:27:47 2014

@author: Peter Wittek
"""
from __future__ import division, print_function


def get_neighbors(index, lattice_dimension):
    """Get the neighbors of a site in a square lattice.

    :param index: Linear index of operator.
    :type index: int.
    :param lattice_dimension: The size of the 2D lattice in either dimension.
    :type lattice_dimension: int.

    :returns: list of int -- the neighbors in linear index.
    """
    neighbors = []
    row, column = divmod(index, lattice_dimension)
    if row > 0:
        neighbors.append(index - lattice_dimension)
    if row < lattice_dimension - 1:
        neighbors.append(index + lattice_dimension)
    if column > 0:
        neighbors.append(index - 1)
    if column < lattice_dimension - 1:
        neighbors.append(index + 1)
    return neighbors
