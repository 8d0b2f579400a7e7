# -*- coding: utf-8 -*-
"""
Exporting a Hamiltonian ground state problem to SDPA. The Hamiltonian
is described in the following paper:

Corboz, P.; Evenbly, G.; Verstraete, F. & Vidal, G. (2009),
Simulation of interacting fermions with entanglement renormalization.
arXiv:0904.4151

Created on Fri May 10 09:45:11 2013

@author: Peter Wittek
"""
import time
from ncsdpgen import generate_variables, get_neighbors, SdpRelaxation

# Lattice dimension
lattice_dimension = 2
n_vars = lattice_dimension * lattice_dimension
# Order of relaxation
order = 2

# Parameters for the Hamiltonian
gam, lam = 1, 2

# Get Hermitian variables
C = generate_variables('C', n_vars)

hamiltonian = 0
for r in range(n_vars):
    hamiltonian -= 2 * lam * C[r] * C[r]
    for s in get_neighbors(r, lattice_dimension):
        hamiltonian += C[r] * C[s] + C[s] * C[r]
        hamiltonian -= gam * (C[r] * C[s] + C[s] * C[r])

# Monomial substitutions result in much sparser SDPs, but they are slower to
# generate
substitutions = {}
equalities = []
for r in range(n_vars):
    for s in range(r, n_vars):
        if r != s:
            substitutions[C[r] * C[s]] = -C[s] * C[r]
        else:
            equalities.append(C[r] * C[s] + C[s] * C[r] - 1)

time0 = time.time()
# Obtain SDP relaxation
sdpRelaxation = SdpRelaxation(C, verbose=1, parallel=True)
sdpRelaxation.get_relaxation(order, objective=hamiltonian,
                             equalities=equalities,
                             substitutions=substitutions)
sdpRelaxation.write_to_sdpa('hamiltonian.dat-s')
print('%d %0.2f s' % (lattice_dimension, (time.time() - time0)))
