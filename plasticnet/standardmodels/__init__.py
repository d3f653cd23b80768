"""
Machinery for implementation of "standard models", i.e. neuron and synapse
models whose parameters are understood by every simulation kernel.

Classes:
    StandardModelType
    StandardCellType
    StandardSynapseType

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.

"""

from .base import (                # noqa: F401
    StandardCellType,
    StandardModelType,
    StandardSynapseType,
)
