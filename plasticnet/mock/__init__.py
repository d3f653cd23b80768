"""
Mock implementation of the simulation kernel, for testing and documentation
purposes.

This kernel instantiates populations and connectivity like a real one, but
generates random data rather than really running simulations.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

from .kernel import MockKernel, DEFAULT_TIMESTEP      # noqa: F401
from .recording import Recorder                        # noqa: F401
