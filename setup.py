#!/usr/bin/env python

from setuptools import setup


setup(
    name="PlasticNet",
    version="0.1.0",
    packages=['plasticnet', 'plasticnet.mock', 'plasticnet.recording',
              'plasticnet.standardmodels', 'plasticnet.utility'],
    author="The PlasticNet team",
    description="Synaptic plasticity experiments on spiking neural networks, in serial or with MPI",
    long_description=open("README.rst").read(),
    license="CeCILL http://www.cecill.info",
    keywords="computational neuroscience simulation plasticity STDP BCPNN MPI",
    classifiers=['Development Status :: 3 - Alpha',
                 'Environment :: Console',
                 'Intended Audience :: Science/Research',
                 'License :: Other/Proprietary License',
                 'Natural Language :: English',
                 'Operating System :: OS Independent',
                 'Programming Language :: Python :: 3',
                 'Topic :: Scientific/Engineering'],
    install_requires=['numpy>=1.8.2', 'neo>=0.9.0',
                      'quantities>=0.12.1'],
    extras_require={
        'MPI': ['mpi4py'],
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': ['plasticnet-run = plasticnet.experiment:main'],
    },
)
