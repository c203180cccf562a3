"""Host-facing lifecycle of the xfactor site factor plugin."""

import logging
from typing import Callable, Optional
from .engine import FactorEngine
from .models import JobView, XFactorConfig
from .params import PLUGIN_TYPE, ParameterStore
from .registry import JobRegistry
from .settings import HostSettings

log = logging.getLogger(__name__)

PLUGIN_NAME = "xfactor site_factor plugin"

SLURM_SUCCESS = 0


class SiteFactorPlugin:
    """Wires host settings, the parameter store and the factor engine."""

    plugin_name = PLUGIN_NAME
    plugin_type = PLUGIN_TYPE

    def __init__(
        self,
        registry: Optional[JobRegistry] = None,
        settings_factory: Callable[[], HostSettings] = HostSettings,
        clock=None,
    ):
        self.registry = registry
        self.settings_factory = settings_factory
        self.clock = clock
        self.settings = settings_factory()
        self.store = ParameterStore(self.settings.nice_offset)
        self.engine = self._make_engine()

    def _make_engine(self) -> FactorEngine:
        return FactorEngine(
            nice_offset=self.settings.nice_offset,
            elapsed_unit=self.settings.elapsed_unit,
            debug_flags=self.settings.debug_flag_set(),
            clock=self.clock,
        )

    @property
    def config(self) -> XFactorConfig:
        return self.store.config

    def init(self) -> int:
        log.debug("init: %s loaded", self.plugin_name)
        self.store.reload(self.settings.site_factor_params)
        return SLURM_SUCCESS

    def fini(self) -> int:
        log.debug("fini: unloading %s", self.plugin_name)
        return SLURM_SUCCESS

    def reconfigure(self) -> None:
        """Fetch fresh host settings and re-parse the parameters."""
        self.settings = self.settings_factory()
        self.engine = self._make_engine()
        self.store.set_nice_offset(self.settings.nice_offset)
        self.store.reload(self.settings.site_factor_params)

    def set(self, job: JobView) -> None:
        """Score a single job."""
        self.engine.apply_to_job(job, self.config)

    def update(self) -> int:
        """Refresh the site factor of all pending jobs in the registry."""
        if self.registry is None:
            raise RuntimeError("No job registry attached to the plugin")
        config = self.config
        return self.registry.for_each(lambda job: self.engine.update_if_pending(job, config))
