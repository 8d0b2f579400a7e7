# -*- coding: utf-8 -*-
"""
This file contains helper functions to work with SDPA.

Created on Fri May 16 13:52:58 2014

@author: Peter Wittek
"""
from __future__ import division, print_function
import numpy as np
from .nc_utils import convert_monomial_to_string


def _check_relaxation(sdp):
    if sdp.F is None:
        raise Exception("Relaxation is not generated yet. Call "
                        "'SdpRelaxation.get_relaxation' first")


def write_to_sdpa(sdp, filename):
    """Write the SDP relaxation to SDPA format.

    :param sdp: The SDP relaxation to write.
    :type sdp: :class:`ncsdpgen.SdpRelaxation`.
    :param filename: The name of the file. It must have the suffix ".dat-s"
    :type filename: str.
    """
    _check_relaxation(sdp)
    if sdp.verbose > 0:
        print('Writing problem in %s' % filename)
    with open(filename, 'w') as file_:
        file_.write('"file ' + filename + ' generated by ncsdpgen"\n')
        file_.write(str(sdp.n_vars) + ' = number of vars\n')
        # bloc structure
        file_.write(str(len(sdp.block_struct)) + ' = number of blocs\n')
        file_.write(str(sdp.block_struct).replace('[', '(')
                    .replace(']', ')'))
        file_.write(' = BlocStructure\n')
        # c vector (objective)
        file_.write(str([float(c) for c in sdp.obj_facvar])
                    .replace('[', '{').replace(']', '}'))
        file_.write('\n')
        # Coefficient matrices
        for k in range(sdp.n_vars + 1):
            for e in sdp.F[k]:
                file_.write('{0}\t{1}\t{2}\t{3}\t{4}\n'.format(
                    k, e.block_index, e.row, e.column, float(e.value)))


def read_sdpa(filename):
    """Helper function to parse a problem file in sparse SDPA format.

    :param filename: The name of the SDPA input file.
    :type filename: str.
    :returns: tuple of the number of variables, the block structure, the
              objective vector, and a list of the entries as tuples of
              (variable index, block index, row, column, value).
    """
    with open(filename, 'r') as file_:
        lines = [line.strip() for line in file_]
    lines = [line for line in lines
             if len(line) > 0 and not line.startswith('"') and
             not line.startswith('*')]
    n_vars = int(lines[0].split()[0])
    n_blocks = int(lines[1].split()[0])
    structure = lines[2][lines[2].find('(')+1:lines[2].find(')')]
    block_struct = [int(size) for size in structure.split(',')]
    if len(block_struct) != n_blocks:
        raise ValueError("The block structure of %s does not have %d "
                         "blocks" % (filename, n_blocks))
    objective = lines[3][lines[3].find('{')+1:lines[3].find('}')]
    obj_facvar = [float(c) for c in objective.split(',')] if n_vars > 0 \
        else []
    entries = []
    for line in lines[4:]:
        fields = line.split()
        entries.append((int(fields[0]), int(fields[1]), int(fields[2]),
                        int(fields[3]), float(fields[4])))
    return n_vars, block_struct, obj_facvar, entries


def convert_to_dense(sdp, k):
    """Return the constraint matrices of an SDP variable as dense symmetric
    arrays, one for each block.

    :param sdp: The SDP relaxation.
    :type sdp: :class:`ncsdpgen.SdpRelaxation`.
    :param k: The index of the SDP variable, 0 for the constant matrices.
    :type k: int.
    :returns: list of `numpy.array`.
    """
    _check_relaxation(sdp)
    matrices = [np.zeros((abs(block_size), abs(block_size)))
                for block_size in sdp.block_struct]
    for e in sdp.F[k]:
        matrix = matrices[e.block_index - 1]
        matrix[e.row - 1, e.column - 1] += e.value
        if e.row != e.column:
            matrix[e.column - 1, e.row - 1] += e.value
    return matrices


def save_monomial_dictionary(sdp, filename):
    """Save a monomial dictionary for debugging purposes.

    :param sdp: The SDP relaxation.
    :type sdp: :class:`ncsdpgen.SdpRelaxation`.
    :param filename: The name of the file to save to.
    :type filename: str.
    """
    _check_relaxation(sdp)
    monomial_translation = {}
    for monomial, (row, column) in sdp.monomial_dictionary.items():
        k = sdp._linear_index((row, column))
        monomial_translation[k] = convert_monomial_to_string(monomial)
    with open(filename, 'w') as file_:
        for k in sorted(monomial_translation):
            file_.write('%s %s\n' % (k, monomial_translation[k]))
