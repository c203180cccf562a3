"""Host settings read from the environment."""

from typing import FrozenSet, Optional
from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from .models import NICE_OFFSET, ElapsedUnit


class HostSettings(BaseSettings):
    """Values the scheduler host hands to the site factor plugin.

    Every field maps to an ``XFACTOR_`` environment variable, e.g.
    ``XFACTOR_SITE_FACTOR_PARAMS="xfactor_min_time=5,xfactor_max=100,xfactor_weight=2"``.
    """
    model_config = SettingsConfigDict(env_prefix="XFACTOR_")

    site_factor_params: Optional[str] = None
    debug_flags: str = ""  # comma separated, e.g. "priority,backfill"
    nice_offset: int = NICE_OFFSET
    elapsed_unit: ElapsedUnit = ElapsedUnit.MINUTES
    data_dir: str = ".xfactor"

    @field_validator("nice_offset", mode="before")
    @classmethod
    def _base_prefixed(cls, value):
        # Accept "0x80000000" as well as decimal text
        if isinstance(value, str):
            return int(value.strip(), 0)
        return value

    def debug_flag_set(self) -> FrozenSet[str]:
        return frozenset(
            flag.strip().lower() for flag in self.debug_flags.split(",") if flag.strip()
        )
