"""
Ncsdpgen: A converter from noncommutative polynomial optimization problems
to sparse SDP input formats.
"""

from setuptools import setup
setup(
    name='ncsdpgen',
    version='1.0.0',
    author='Peter Wittek',
    author_email='peterwittek@users.noreply.github.com',
    packages=['ncsdpgen'],
    keywords=[
        'sdp',
        'semidefinite programming',
        'relaxation',
        'polynomial optimization problem',
        'noncommuting variable',
        'sdpa'],
    license='GPLv3',
    description='Generate the sparse SDPA relaxation of polynomial\
                 optimization problems of noncommutative operators',
    long_description=open('README.rst').read(),
    classifiers=[
        'License :: OSI Approved :: GNU General Public License v3 (GPLv3)',
        'Operating System :: OS Independent',
        'Development Status :: 4 - Beta',
        'Topic :: Scientific/Engineering :: Mathematics',
        'Topic :: Scientific/Engineering :: Physics',
        'Intended Audience :: Science/Research',
        'Programming Language :: Python :: 3'
    ],
    install_requires=[
        "sympy >= 1.0",
        "numpy"
    ],
    extras_require={
        "test": ["pytest"]
    },
    test_suite="tests"
)
