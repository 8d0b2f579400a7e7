# -*- coding: utf-8 -*-
"""
An example that exports to sparse SDPA format for benchmarking.

Created on Fri May 10 09:45:11 2013

@author: Peter Wittek
"""
import time
from ncsdpgen import generate_variables, SdpRelaxation

# Number of Hermitian variables
n_vars = 10
# Order of relaxation
order = 1

# Get Hermitian variables
X = generate_variables('X', n_vars)

# Define the objective function
obj = 0
for i in range(n_vars):
    for j in range(n_vars):
        obj += X[i] * X[j]

# Inequality constraints
inequalities = [X[i] * X[i - 1] - 0.5 for i in range(1, n_vars)]

# Idempotent variables
substitutions = {}
for i in range(n_vars):
    substitutions[X[i] * X[i]] = X[i]

# Obtain SDP relaxation
time0 = time.time()
sdpRelaxation = SdpRelaxation(X, parallel=True)
sdpRelaxation.get_relaxation(order, objective=obj, inequalities=inequalities,
                             substitutions=substitutions)
sdpRelaxation.write_to_sdpa('benchmark.dat-s')
print('%d %0.2f s' % (n_vars, (time.time() - time0)))
