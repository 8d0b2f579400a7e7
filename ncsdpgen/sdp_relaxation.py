# -*- coding: utf-8 -*-
"""
The module converts a noncommutative optimization problem provided in SymPy
format to a sparse SDPA semidefinite programming problem.

Created on Sun May 26 15:06:17 2013

@author: Peter Wittek
"""
from __future__ import division, print_function
import sys
from functools import partial
from threading import Lock
import multiprocessing
from sympy import sympify
from .monomial_dictionary import MonomialDictionary, \
    UnregisteredMonomialError, index2linear
from .nc_utils import DEFAULT_MAX_PASSES, canonical_terms, \
    count_ncmonomials, flatten, get_all_monomials, localizing_matrix, \
    moment_of_cell, ncconjugate, unique
from .sdpa_utils import save_monomial_dictionary, write_to_sdpa


class Entry(object):

    """Class for storing entries in the constraint matrices of the SDP
    relaxation.
    """

    def __init__(self, block_index, row, column, value):
        self.block_index = block_index
        self.row = row
        self.column = column
        self.value = value

    def __repr__(self):
        return 'Entry(%d, %d, %d, %s)' % (self.block_index, self.row,
                                          self.column, self.value)


class SdpRelaxation(object):

    """Class for obtaining sparse SDP relaxation.

    :param variables: Noncommutative Hermitian variables.
    :type variables: list of
                     :class:`sympy.physics.quantum.operator.HermitianOperator`
    :param verbose: Optional parameter for level of verbosity:

                       * 0: quiet
                       * 1: verbose
    :type verbose: int.
    :param parallel: Optional parameter for allowing parallel computations.
    :type parallel: bool.
    :param n_workers: Optional number of worker processes. Defaults to the
                      number of cores.
    :type n_workers: int.
    :param max_substitution_passes: Optional ceiling on the number of passes
                                    over the substitution rules.
    :type max_substitution_passes: int.

    Attributes:
      - `monomials`: The monomial basis that generates the moment matrix.

      - `monomial_dictionary`: Maps canonical monomials to the position of
        their representative cell in the moment matrix.

      - `constraints`: The inequalities, including the pairs derived from
        the equalities.

      - `F`: Entries of the constraint matrices, one list per SDP variable.

      - `block_struct`: The block structure of the SDP.

      - `obj_facvar`: The dense objective vector.
    """

    def __init__(self, variables, verbose=0, parallel=False, n_workers=None,
                 max_substitution_passes=DEFAULT_MAX_PASSES):
        if isinstance(variables, (list, tuple)):
            self.variables = unique(flatten(list(variables)))
        else:
            self.variables = [variables]
        self.verbose = verbose
        self.max_substitution_passes = max_substitution_passes
        self.substitutions = {}
        self.monomials = []
        self.n_monomials = 0
        self.n_vars = 0
        self.F = None
        self.block_struct = []
        self.obj_facvar = []
        self.constraints = []
        self.monomial_dictionary = MonomialDictionary()
        self._variable_map = None
        self._moment_lock = Lock()
        self._entry_lock = Lock()
        self._parallel = parallel
        self._n_workers = n_workers
        if parallel and verbose > 0:
            print("Parallel processing on %d cores" %
                  (n_workers or multiprocessing.cpu_count()))

    def _get_pool(self):
        if not self._parallel:
            return None
        return multiprocessing.Pool(self._n_workers)

    def _chunksize(self, n_tasks):
        # This is just a guess and can be optimized
        n_workers = self._n_workers or multiprocessing.cpu_count()
        return max(int(n_tasks / (4 * n_workers)), 1)

    def _linear_index(self, position):
        k = index2linear(position[0], position[1], self.n_monomials)
        if self._variable_map is not None:
            return self._variable_map[k]
        return k

    ########################################################################
    # ROUTINES RELATED TO GENERATING THE MOMENT MATRIX                     #
    ########################################################################

    def _add_normalization_block(self):
        """Define the top left entry of the moment matrix, y_1 = 1, as a
        free block of two diagonal entries.
        """
        block_index = 1
        k = index2linear(0, 0, self.n_monomials)
        for position, value in ((1, 1.0), (2, -1.0)):
            entry = Entry(block_index, position, position, value)
            self.F[0].append(entry)
            self.F[k].append(entry)
        self.block_struct.append(-2)
        return block_index + 1

    def _extra_position(self):
        """Allocate an SDP variable beyond the cells of the moment matrix.
        The position it returns lies below the last row, so that
        index2linear keeps numbering the variables consecutively.
        """
        n_extra = self.n_vars - self.n_monomials ** 2
        self.n_vars += 1
        self.F.append([])
        return (self.n_monomials + n_extra // self.n_monomials,
                n_extra % self.n_monomials)

    def _process_monomials(self, terms, row, column, factor, facvar):
        """Register the canonical monomials of a cell and add their scaled
        coefficients to facvar by SDP variable. The first monomial we have
        not seen before is registered at (row, column), any further one in
        the same cell at an extra position.
        """
        free = True
        for monomial, coeff in terms:
            if free:
                position = self.monomial_dictionary.setdefault(
                    monomial, (row, column))
                free = position != (row, column)
            else:
                position = self.monomial_dictionary.get(monomial)
                if position is None:
                    position = self.monomial_dictionary.setdefault(
                        monomial, self._extra_position())
            k = index2linear(position[0], position[1], self.n_monomials)
            facvar[k] = facvar.get(k, 0.0) + factor * coeff

    def _process_moment_cell(self, block_index, row, column, terms,
                             terms_dagger):
        """Push the entries of a moment matrix cell. The dictionary keys are
        coefficient-free monomials; the coefficient of each term, sign and
        magnitude, goes into the value of the entry.
        """
        with self._moment_lock:
            facvar = {}
            if row == column:
                self._process_monomials(terms, row, column, 1.0, facvar)
            else:
                # Special care must be taken so that the resulting
                # constraint matrices are symmetric, not just
                # Hermitian.
                self._process_monomials(terms, row, column, 0.5, facvar)
                self._process_monomials(terms_dagger, column, row, 0.5,
                                        facvar)
            for k, value in facvar.items():
                if value != 0:
                    self.F[k].append(Entry(block_index, row + 1, column + 1,
                                           value))

    def _generate_moment_matrix(self, block_index):
        """Generate the moment matrix of monomials.

        Arguments:
        block_index -- current block index in the constraints matrices of the
                       SDP relaxation
        """
        n_monomials = self.n_monomials
        func = partial(moment_of_cell, monomials=self.monomials,
                       substitutions=self.substitutions,
                       max_passes=self.max_substitution_passes)
        # We process the M_d(u,w) entries in the moment matrix
        cells = ((row, column) for row in range(n_monomials)
                 for column in range(row, n_monomials))
        pool = self._get_pool()
        if pool is not None:
            iter_ = pool.imap(func, cells, self._chunksize(
                n_monomials * (n_monomials + 1) // 2))
        else:
            iter_ = map(func, cells)
        try:
            for cell in iter_:
                self._process_moment_cell(block_index, *cell)
        finally:
            if pool is not None:
                pool.close()
                pool.join()
        self.block_struct.append(n_monomials)
        return block_index + 1

    ########################################################################
    # ROUTINES RELATED TO GENERATING THE LOCALIZING MATRICES AND THE       #
    # OBJECTIVE FUNCTION                                                   #
    ########################################################################

    def _get_index_of_monomial(self, monomial):
        """Returns the SDP variables of a canonical monomial, each with the
        factor its coefficient must be multiplied by. A monomial that is not
        in the moment matrix is looked up through its conjugate, which the
        substitutions may turn into several terms.
        """
        position = self.monomial_dictionary.get(monomial)
        if position is not None:
            return [(self._linear_index(position), 1.0)]
        indices = []
        for monomial_dagger, coeff in canonical_terms(
                ncconjugate(monomial), self.substitutions,
                self.max_substitution_passes):
            position = self.monomial_dictionary.get(monomial_dagger)
            if position is None:
                raise UnregisteredMonomialError(monomial)
            indices.append((self._linear_index(position), coeff))
        return indices

    def _push_facvar_sparse(self, terms, block_index, i, j):
        """Calculate the sparse vector representation of a polynomial
        and pushes it to the F structure.
        """
        facvar = {}
        for monomial, coeff in terms:
            # k identifies the mapped value of a word (monomial) w
            for k, coeff2 in self._get_index_of_monomial(monomial):
                facvar[k] = facvar.get(k, 0.0) + coeff * coeff2
        with self._entry_lock:
            for k, value in facvar.items():
                if value != 0:
                    self.F[k].append(Entry(block_index, i + 1, j + 1, value))

    def _get_facvar(self, polynomial):
        """Return dense vector representation of a polynomial. This function is
        nearly identical to _push_facvar_sparse, but instead of pushing
        sparse entries to the constraint matrices, it returns a dense
        vector.
        """
        facvar = [0.0] * self.n_vars
        for monomial, coeff in canonical_terms(polynomial, self.substitutions,
                                               self.max_substitution_passes):
            for k, coeff2 in self._get_index_of_monomial(monomial):
                facvar[k - 1] += coeff * coeff2
        return facvar

    def _process_inequalities(self, block_index, order):
        """Generate localizing matrices

        Arguments:
        block_index -- the current block index in constraint matrices of the
                       SDP relaxation
        order -- the order of the relaxation
        """
        # Identify the correct set of monomials
        n_ineq_monomials = count_ncmonomials(self.monomials, order - 1)
        monomials = self.monomials[:n_ineq_monomials]
        for _ in self.constraints:
            self.block_struct.append(n_ineq_monomials)
        if len(self.constraints) == 0:
            return block_index
        func = partial(localizing_matrix, monomials=monomials,
                       substitutions=self.substitutions,
                       max_passes=self.max_substitution_passes)
        pool = self._get_pool()
        if pool is not None:
            iter_ = pool.imap(func, self.constraints)
        else:
            iter_ = map(func, self.constraints)
        try:
            for k, entries in enumerate(iter_):
                # Process M_y(gy)(u,w) entries
                for row, column, terms in entries:
                    self._push_facvar_sparse(terms, block_index + k, row,
                                             column)
                if self.verbose > 0:
                    sys.stdout.write("\r\x1b[KProcessing %d/%d constraints..."
                                     % (k + 1, len(self.constraints)))
                    sys.stdout.flush()
        finally:
            if pool is not None:
                pool.close()
                pool.join()
        if self.verbose > 0:
            sys.stdout.write("\n")
        return block_index + len(self.constraints)

    def get_relaxation(self, order, objective=0, inequalities=None,
                       equalities=None, substitutions=None):
        """Get the SDP relaxation of a noncommutative polynomial optimization
        problem.

        :param order: The order of the relaxation.
        :type order: int.
        :param objective: The objective function to minimize.
        :type objective: :class:`sympy.core.expr.Expr`.
        :param inequalities: Optional parameter to list inequality constraints.
        :type inequalities: list of :class:`sympy.core.expr.Expr`.
        :param equalities: Optional parameter to list equality constraints.
        :type equalities: list of :class:`sympy.core.expr.Expr`.
        :param substitutions: Optional parameter containing monomials that can
                              be replaced (e.g., idempotent variables).
        :type substitutions: dict of :class:`sympy.core.expr.Expr`.
        """
        if order < 1:
            raise ValueError("Invalid level of relaxation: %s" % order)
        self.substitutions = dict(substitutions) if substitutions else {}
        self.monomial_dictionary = MonomialDictionary()
        self._variable_map = None
        self.block_struct = []
        # Generate the set W_d containing words (monomials) of length up to d
        self.monomials = get_all_monomials(self.variables, self.substitutions,
                                           order,
                                           self.max_substitution_passes)
        self.n_monomials = len(self.monomials)
        self.n_vars = self.n_monomials ** 2
        if self.verbose > 0:
            print('Generating moment matrix...')
        # Initialize sparse constant matrices in the target SDP
        self.F = [[] for _ in range(self.n_vars + 1)]
        block_index = self._add_normalization_block()
        block_index = self._generate_moment_matrix(block_index)
        if self.verbose > 0:
            print('Number of SDP variables: %d' % self.n_vars)

        # Objective function needs dense representation
        self.obj_facvar = self._get_facvar(objective)

        self.constraints = [sympify(ineq) for ineq in inequalities or []]
        equalities = [sympify(eq) for eq in equalities or []]
        # Equalities are converted to pairs of inequalities
        if self.verbose > 0:
            print('Transforming %d equalities to %d inequalities...' %
                  (len(equalities), 2 * len(equalities)))
        for equality in equalities:
            self.constraints.append(equality)
            self.constraints.append(-equality)
        if self.verbose > 0:
            print('Processing %d inequalities...' % len(self.constraints))
        self._process_inequalities(block_index, order)

    def get_variable_index(self, monomial):
        """Return the index of the SDP variable of a monomial.
        """
        terms = canonical_terms(monomial, self.substitutions,
                                self.max_substitution_passes)
        if len(terms) == 1:
            indices = self._get_index_of_monomial(terms[0][0])
            if len(indices) == 1:
                return indices[0][0]
        raise ValueError("The monomial %s does not correspond to a single "
                         "SDP variable" % monomial)

    def compact(self):
        """Discard unused relaxation variables. Variables that represent a
        monomial of the moment matrix are kept.
        """
        if self.F is None:
            raise Exception("Relaxation is not generated yet. Call "
                            "'SdpRelaxation.get_relaxation' first")
        registered = set(self._linear_index(position) for _, position
                         in self.monomial_dictionary.items())
        variable_map = {0: 0}
        new_F = [self.F[0]]
        new_obj_facvar = []
        for k in range(1, self.n_vars + 1):
            if len(self.F[k]) > 0 or self.obj_facvar[k - 1] != 0 or \
                    k in registered:
                variable_map[k] = len(new_F)
                new_F.append(self.F[k])
                new_obj_facvar.append(self.obj_facvar[k - 1])
        if self._variable_map is None:
            self._variable_map = variable_map
        else:
            self._variable_map = dict(
                (key, variable_map[k])
                for key, k in self._variable_map.items() if k in variable_map)
        self.n_vars = len(new_F) - 1
        self.F = new_F
        self.obj_facvar = new_obj_facvar

    def write_to_sdpa(self, filename):
        """Write the SDP relaxation to SDPA format.

        :param filename: The name of the file. It must have the suffix
                         ".dat-s"
        :type filename: str.
        """
        write_to_sdpa(self, filename)

    def save_monomial_dictionary(self, filename):
        """Save the monomial dictionary for debugging purposes.

        :param filename: The name of the file to save to.
        :type filename: str.
        """
        save_monomial_dictionary(self, filename)
