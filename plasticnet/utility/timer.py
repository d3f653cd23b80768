"""
Wall-clock timing of experiment phases.

:copyright: Copyright 2024 by the PlasticNet team, see AUTHORS.
:license: CeCILL, see LICENSE for details.
"""

import time

try:
    from mpi4py import MPI
except ImportError:
    MPI = None


def wall_time():
    """MPI.Wtime() when mpi4py is available, time.perf_counter() otherwise."""
    if MPI is not None:
        return MPI.Wtime()
    return time.perf_counter()


class Timer(object):
    """
    Measures wall-clock time from its creation, or from the last `start()`.

    `clock` is any callable returning seconds; every MPI process uses its own
    clock, so times are only meaningful on the process that measured them.
    """

    def __init__(self, clock=wall_time):
        self.clock = clock
        self.start()

    def start(self):
        self._start_time = self._last_check = self.clock()

    def elapsed_time(self, format=None):
        """
        Seconds since the timer was started, or with ``format="long"`` the
        same in words, e.g. "2 minutes, 3 seconds".
        """
        self._last_check = self.clock()
        elapsed = self._last_check - self._start_time
        if format == "long":
            return Timer.time_in_words(elapsed)
        return elapsed

    def diff(self, format=None):
        """Seconds since the last call to elapsed_time() or diff()."""
        now = self.clock()
        interval, self._last_check = now - self._last_check, now
        if format == "long":
            return Timer.time_in_words(interval)
        return interval

    @staticmethod
    def time_in_words(s):
        """
        Formats a time in seconds in days, hours, minutes and seconds,
        dropping the parts that are zero::

            >>> Timer.time_in_words(3725)
            '1 hour, 2 minutes, 5 seconds'
        """
        parts = []
        for name, length in (("day", 86400), ("hour", 3600), ("minute", 60), ("second", 1)):
            count, s = divmod(s, length)
            if count >= 1:
                parts.append("%d %s%s" % (count, name, "s" if count >= 2 else ""))
        return ", ".join(parts) or "0 seconds"
