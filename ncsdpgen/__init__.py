"""Ncsdpgen
=====

Provides
 1. A converter from a noncommutative polynomial optimization problem to a
    sparse semidefinite programming relaxation in SDPA format.
 2. Helper functions to define the monomial basis and substitution rules.

"""
__version__ = "1.0.0"
from .sdp_relaxation import SdpRelaxation
from .monomial_dictionary import MonomialDictionary, \
    UnregisteredMonomialError
from .nc_utils import apply_substitutions, count_ncmonomials, flatten, \
    generate_variables, get_all_monomials, get_ncmonomials, ncconjugate, \
    ncdegree, SubstitutionError
from .sdpa_utils import convert_to_dense, read_sdpa, write_to_sdpa
from .physics_utils import get_neighbors

__all__ = ['SdpRelaxation',
           'MonomialDictionary',
           'UnregisteredMonomialError',
           'SubstitutionError',
           'apply_substitutions',
           'count_ncmonomials',
           'flatten',
           'generate_variables',
           'get_all_monomials',
           'get_ncmonomials',
           'ncconjugate',
           'ncdegree',
           'convert_to_dense',
           'read_sdpa',
           'write_to_sdpa',
           'get_neighbors']
