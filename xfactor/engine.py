"""Computation of the xfactor site factor."""

import logging
import math
from datetime import datetime, timezone
from typing import Callable, FrozenSet, Iterable, Optional
from .models import NICE_OFFSET, ElapsedUnit, JobView, XFactorConfig
from .params import PLUGIN_TYPE

log = logging.getLogger(__name__)

PRIORITY_FLAG = "priority"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FactorEngine:
    """Derives the bounded, weighted site factor of pending jobs.

    The factor grows with the time a job has been accruing priority,
    measured in multiples of its time limit.
    """

    def __init__(
        self,
        nice_offset: int = NICE_OFFSET,
        elapsed_unit: ElapsedUnit = ElapsedUnit.MINUTES,
        debug_flags: FrozenSet[str] = frozenset(),
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.nice_offset = nice_offset
        self.elapsed_unit = ElapsedUnit(elapsed_unit)
        self.debug_flags = frozenset(flag.lower() for flag in debug_flags)
        self.clock = clock or _utcnow

    def _elapsed(self, job: JobView) -> float:
        delta = (self.clock() - job.accrue_time).total_seconds()
        if delta <= 0:
            return 0.0
        # Whole seconds, like the host's time_t bookkeeping
        delta = float(int(delta))
        if self.elapsed_unit == ElapsedUnit.MINUTES:
            return delta / 60.0
        return delta

    @staticmethod
    def effective_time_limit(job: JobView, config: XFactorConfig) -> int:
        """Job time limit, else partition limit, else 1, floored at min_time."""
        if job.time_limit is not None:
            time_limit = job.time_limit
        elif job.partition_max_time is not None:
            time_limit = job.partition_max_time
        else:
            time_limit = 1
        return max(time_limit, config.min_time)

    def compute_factor(self, job: JobView, config: XFactorConfig) -> int:
        if not config.weight or job.accrue_time is None:
            return 0

        delta = self._elapsed(job)
        if not delta:
            return 0

        quotient = delta / self.effective_time_limit(job, config)
        # Round half away from zero; quotient is never negative here
        factor = int(math.floor(quotient + 0.5))
        factor = min(factor * config.weight, config.max_factor)

        if PRIORITY_FLAG in self.debug_flags:
            log.debug("%s: weightened site_factor=%d", PLUGIN_TYPE, factor)
        return factor

    def apply_to_job(self, job: JobView, config: XFactorConfig) -> None:
        """Store the factor re-centered on the neutral offset."""
        job.site_factor = self.compute_factor(job, config) + self.nice_offset

    def update_if_pending(self, job: JobView, config: XFactorConfig) -> None:
        if job.is_pending:
            self.apply_to_job(job, config)

    def recompute_all(self, jobs: Iterable[JobView], config: XFactorConfig) -> None:
        """Refresh the site factor of every pending job in ``jobs``."""
        for job in jobs:
            self.update_if_pending(job, config)
