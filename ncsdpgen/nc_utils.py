# -*- coding: utf-8 -*-
"""
This file contains helper functions to work with noncommutative polynomials:
classification of terms, conjugation, degrees, coefficients, monomial
substitutions, and the generation of the monomial basis.

Created on Thu May  2 16:03:05 2013

@author: Peter Wittek
"""
from __future__ import division, print_function
import warnings
from sympy import S, Symbol, Number, Add, Mul, expand, sympify
from sympy.physics.quantum import HermitianOperator, Operator
from sympy.physics.quantum.qexpr import split_commutative_parts

NUMERIC = 'numeric'
SYMBOL = 'symbol'
POWER = 'power'
PRODUCT = 'product'
SUM = 'sum'

DEFAULT_MAX_PASSES = 1000


class SubstitutionError(RuntimeError):

    """Raised when the monomial substitutions do not reach a fixed point."""

    pass


def flatten(lol):
    """Flatten a list of lists to a list.

    :param lol: A list of lists in arbitrary depth.
    :type lol: list of list.

    :returns: flat list of elements.
    """
    new_list = []
    for element in lol:
        if element is None:
            continue
        elif not isinstance(element, list) and not isinstance(element, tuple):
            new_list.append(element)
        elif len(element) > 0:
            new_list.extend(flatten(element))
    return new_list


def is_number_type(exp):
    return isinstance(exp, (int, float, complex, Number))


def classify_term(term):
    """Classify a term as numeric, symbol, power, product, or sum. Returns
    None if the term is none of these.
    """
    if is_number_type(term):
        return NUMERIC
    if isinstance(term, (Symbol, Operator)):
        return SYMBOL
    if getattr(term, 'is_Pow', False):
        return POWER
    if getattr(term, 'is_Mul', False):
        return PRODUCT
    if getattr(term, 'is_Add', False):
        return SUM
    return None


def _not_a_monomial(term):
    warnings.warn('Not a monomial: %s' % (term,), UserWarning)


def _split_product(element):
    """Separate the constant factor from a product. Float factors and the
    unflattened products left by noncommutative expansion are absorbed
    into the constant.

    :returns: tuple of the constant and the list of the remaining factors.
    """
    comm_factors, nc_factors = split_commutative_parts(element)
    coeff = S.One
    factors = []
    for factor in comm_factors:
        if isinstance(factor, Number):
            coeff *= factor
        else:
            factors.append(factor)
    for factor in nc_factors:
        if factor.is_Mul:
            inner_coeff, inner_factors = _split_product(factor)
            coeff *= inner_coeff
            factors.extend(inner_factors)
        else:
            factors.append(factor)
    return coeff, factors


def ncconjugate(monomial):
    """A simple routine of conjugating a monomial of Hermitian variables.
    The order of the factors is reversed.
    """
    kind = classify_term(monomial)
    if kind in (NUMERIC, SYMBOL, POWER):
        return monomial
    if kind == PRODUCT:
        coeff, factors = _split_product(monomial)
        result = coeff
        for factor in reversed(factors):
            result = result * factor
        return result
    if kind == SUM:
        return Add(*[ncconjugate(term) for term in monomial.args])
    _not_a_monomial(monomial)
    return monomial


def _factor_degree(factor):
    if factor.is_Pow:
        return int(factor.exp)
    if isinstance(factor, (Symbol, Operator)):
        return 1
    return 0


def ncdegree(polynomial):
    """Returns the degree of a noncommutative polynomial.

    :param polynomial: Polynomial of noncommutive variables.
    :type polynomial: :class:`sympy.core.expr.Expr`.

    :returns: int -- the degree of the polynomial.
    """
    kind = classify_term(polynomial)
    if kind == NUMERIC:
        return 0
    if kind in (SYMBOL, POWER):
        return _factor_degree(polynomial)
    if kind == PRODUCT:
        _, factors = _split_product(polynomial)
        return sum(_factor_degree(factor) for factor in factors)
    if kind == SUM:
        return max(ncdegree(term) for term in polynomial.args)
    _not_a_monomial(polynomial)
    return 0


def get_coefficient(monomial):
    """Helper function to get the coefficient of a monomial.
    """
    kind = classify_term(monomial)
    if kind == NUMERIC:
        return float(monomial)
    if kind == PRODUCT:
        coeff, _ = _split_product(monomial)
        return float(coeff)
    elif kind is None:
        _not_a_monomial(monomial)
    return 1.0


def separate_scalar_factor(element):
    """Construct a monomial with the coefficient separated
    from an element in a polynomial.

    :returns: tuple of the monomial and the coefficient as a float.
    """
    kind = classify_term(element)
    if kind == NUMERIC:
        return S.One, float(element)
    if kind != PRODUCT:
        if kind is None:
            _not_a_monomial(element)
        return element, 1.0
    coeff, factors = _split_product(element)
    return Mul(*factors), float(coeff)


def _split_word(monomial):
    """Split a monomial into its coefficient and a list of (base, exponent)
    pairs.
    """
    coeff, factors = _split_product(sympify(monomial))
    word = []
    for factor in factors:
        if factor.is_Pow:
            word.append((factor.base, int(factor.exp)))
        else:
            word.append((factor, 1))
    return coeff, word


def _match_at(word, pattern, position):
    """Match a pattern at a position of a word. Returns the exponents of the
    left and right remainders, or None if there is no match.
    """
    last = len(pattern) - 1
    left_remainder, right_remainder = 0, 0
    for j, (base, exponent) in enumerate(pattern):
        factor_base, factor_exponent = word[position + j]
        if factor_base != base or factor_exponent < exponent:
            return None
        if factor_exponent > exponent:
            if j == last:
                right_remainder = factor_exponent - exponent
            elif j == 0:
                left_remainder = factor_exponent - exponent
            else:
                return None
    return left_remainder, right_remainder


def fast_substitute(monomial, old_sub, new_sub):
    """Fast substitution routine for noncommutative monomials. The first
    contiguous occurrence of the factors of `old_sub` is replaced by
    `new_sub`. The first and the last factor of the pattern may match part
    of a higher power, leaving a remainder.

    :param monomial: The monomial with parts need to be substituted.
    :param old_sub: The part to be replaced.
    :param new_sub: The replacement.
    """
    kind = classify_term(monomial)
    if kind == NUMERIC:
        return monomial
    if kind == SUM:
        return expand(Add(*[fast_substitute(term, old_sub, new_sub)
                            for term in monomial.args]))
    if kind is None:
        _not_a_monomial(monomial)
        return monomial
    new_sub = sympify(new_sub)
    coeff, word = _split_word(monomial)
    _, pattern = _split_word(old_sub)
    if len(pattern) == 0:
        return monomial
    for i in range(len(word) - len(pattern) + 1):
        remainders = _match_at(word, pattern, i)
        if remainders is None:
            continue
        left_remainder, right_remainder = remainders
        new_monomial = coeff
        for base, exponent in word[:i]:
            new_monomial *= base**exponent
        if left_remainder > 0:
            new_monomial *= pattern[0][0]**left_remainder
        new_monomial *= new_sub
        if right_remainder > 0:
            new_monomial *= pattern[-1][0]**right_remainder
        for base, exponent in word[i + len(pattern):]:
            new_monomial *= base**exponent
        if new_sub.is_Add:
            return expand(new_monomial)
        return new_monomial
    return monomial


def apply_substitutions(monomial, monomial_substitutions,
                        max_passes=DEFAULT_MAX_PASSES):
    """Apply the substitution rules until the monomial no longer changes.

    :param monomial: The monomial to normalize.
    :param monomial_substitutions: Rules mapping a monomial to a polynomial.
    :type monomial_substitutions: dict.
    :param max_passes: Maximum number of passes over the rules.
    :type max_passes: int.

    :returns: the canonical form of the monomial.
    :raises SubstitutionError: if no fixed point is reached.
    """
    if is_number_type(monomial) or not monomial_substitutions:
        return monomial
    for _ in range(max_passes):
        original_monomial = monomial
        for lhs, rhs in monomial_substitutions.items():
            monomial = fast_substitute(monomial, lhs, rhs)
        if original_monomial == monomial:
            return monomial
    raise SubstitutionError("The rewrite system did not converge on %s "
                            "within %d passes" % (monomial, max_passes))


def canonical_terms(polynomial, monomial_substitutions,
                    max_passes=DEFAULT_MAX_PASSES):
    """Split a polynomial into its terms and return the canonical monomial
    and the coefficient of each. A term that the substitutions turn into a
    polynomial contributes all of its terms. Coefficients of the same
    monomial are summed and zero sums are dropped.

    :param polynomial: The polynomial to normalize.
    :param monomial_substitutions: Rules mapping a monomial to a polynomial.
    :type monomial_substitutions: dict.
    :param max_passes: Maximum number of passes over the rules.
    :type max_passes: int.

    :returns: list of tuples of a coefficient-free monomial and a float.
    """
    coefficients = {}
    for element in Add.make_args(expand(sympify(polynomial))):
        monomial, coeff = separate_scalar_factor(element)
        if coeff == 0:
            continue
        monomial = apply_substitutions(monomial, monomial_substitutions,
                                       max_passes)
        for term in Add.make_args(expand(monomial)):
            word, coeff2 = separate_scalar_factor(term)
            coefficients[word] = coefficients.get(word, 0.0) + coeff * coeff2
    return [(word, coeff) for word, coeff in coefficients.items()
            if coeff != 0]


def generate_variables(name, n_vars=1):
    """Generates a number of Hermitian noncommutative variables.

    :param name: The prefix in the symbolic representation of the noncommuting
                 variables. This will be suffixed by a number from 0 to
                 n_vars-1 if n_vars > 1.
    :type name: str.
    :param n_vars: The number of variables.
    :type n_vars: int.

    :returns: list of
              :class:`sympy.physics.quantum.operator.HermitianOperator`

    :Example:

    >>> generate_variables('X', 2)
    [X0, X1]
    """
    variables = []
    for i in range(n_vars):
        if n_vars > 1:
            var_name = '%s%s' % (name, i)
        else:
            var_name = '%s' % name
        variables.append(HermitianOperator(var_name))
    return variables


def unique(seq):
    """Helper function to include only unique monomials in a basis."""
    seen = set()
    result = []
    for item in seq:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def get_ncmonomials(variables, degree):
    """Generates all noncommutative monomials up to a degree

    :param variables: The noncommutative variables to generate monomials from
    :type variables: list of
                     :class:`sympy.physics.quantum.operator.HermitianOperator`.
    :param degree: The maximum degree.
    :type degree: int.

    :returns: list of monomials.
    """
    ncmonomials = []
    if degree > 0:
        ncmonomials.extend(variables)
    for _ in range(1, degree):
        temp = []
        for var in variables:
            for monomial in ncmonomials:
                temp.append(var * monomial)
        ncmonomials.extend(temp)
    ncmonomials.insert(0, S.One)
    return unique(ncmonomials)


def get_all_monomials(variables, substitutions, degree,
                      max_passes=DEFAULT_MAX_PASSES):
    """Return the monomial basis of a relaxation. Monomials that appear on
    the left-hand side of a substitution are removed, the rest are replaced
    by the monomials of their canonical form.
    """
    monomials = get_ncmonomials(variables, degree)
    if not substitutions:
        return monomials
    monomials = [monomial for monomial in monomials
                 if monomial not in substitutions]
    canonical_monomials = []
    for monomial in monomials:
        for word, _ in canonical_terms(monomial, substitutions, max_passes):
            canonical_monomials.append(word)
    return unique(canonical_monomials)


def count_ncmonomials(monomials, degree):
    """Given a list of monomials, it counts those that have a certain degree,
    or less. The function is useful when certain monomials were eliminated
    from the basis.

    :param monomials: List of monomials (the monomial basis).
    :param degree:  Maximum degree to count.

    :returns: The count of appropriate monomials.
    """
    ncmoncount = 0
    for monomial in monomials:
        if ncdegree(monomial) <= degree:
            ncmoncount += 1
        else:
            break
    return ncmoncount


def convert_monomial_to_string(monomial):
    monomial_str = ('%s' % monomial)
    monomial_str = monomial_str.replace('**', '^')
    return monomial_str


def moment_of_cell(pos, monomials, substitutions, max_passes):
    """Canonical terms of a cell of the moment matrix and of its
    Hermitian-conjugate cell.
    """
    row, column = pos
    terms = canonical_terms(ncconjugate(monomials[row]) * monomials[column],
                            substitutions, max_passes)
    if row == column:
        return row, column, terms, None
    terms_dagger = canonical_terms(
        ncconjugate(monomials[column]) * monomials[row], substitutions,
        max_passes)
    return row, column, terms, terms_dagger


def localizing_matrix(ineq, monomials, substitutions, max_passes):
    """Canonical terms of every upper triangular entry of the localizing
    matrix of an inequality.
    """
    entries = []
    n_monomials = len(monomials)
    for row in range(n_monomials):
        for column in range(row, n_monomials):
            polynomial = ncconjugate(monomials[row]) * ineq * \
                monomials[column]
            if row != column:
                polynomial_dagger = ncconjugate(monomials[column]) * ineq * \
                    monomials[row]
                polynomial = 0.5 * polynomial_dagger + 0.5 * polynomial
            entries.append((row, column,
                            canonical_terms(polynomial, substitutions,
                                            max_passes)))
    return entries
