# encoding: utf-8
"""
A collection of utility functions and classes.

Functions:
    init_logging()    - convenience function for setting up logging to file and
                        to the screen.

    Timer    - a convenience wrapper around MPI.Wtime() or time.perf_counter()

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.

"""

from .script_tools import init_logging     # noqa: F401
from .timer import Timer, wall_time        # noqa: F401
