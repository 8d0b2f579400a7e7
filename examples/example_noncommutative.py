# -*- coding: utf-8 -*-
"""
An example that exports to sparse SDPA format for scalable computation. The
description of the example is in the following paper:

Pironio, S.; Navascués, M. & Acín, A. Convergent relaxations of
polynomial optimization problems with noncommuting variables SIAM Journal
on Optimization, SIAM, 2010, 20, 2157-2180.

Created on Fri May 10 09:45:11 2013

@author: Peter Wittek
"""
from ncsdpgen import generate_variables, SdpRelaxation

# Number of Hermitian variables
n_vars = 2
# Order of relaxation
order = 2

# Get Hermitian variables
X = generate_variables('X', n_vars)

# Define the objective function
obj = X[0] * X[1] + X[1] * X[0]

# Inequality constraints
inequalities = [-X[1] ** 2 + X[1] + 0.5]

# Simple monomial substitutions
substitutions = {X[0] ** 2: X[0]}

# Obtain SDP relaxation
sdpRelaxation = SdpRelaxation(X, verbose=1)
sdpRelaxation.get_relaxation(order, objective=obj, inequalities=inequalities,
                             substitutions=substitutions)
sdpRelaxation.write_to_sdpa('examplenc.dat-s')
