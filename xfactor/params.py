"""Parsing of the PrioritySiteFactorParameters line."""

import logging
import re
from typing import Optional, Tuple
from .models import NICE_OFFSET, XFactorConfig

log = logging.getLogger(__name__)

PLUGIN_TYPE = "site_factor/xfactor"

MAX_MIN_TIME = 129600  # 90 days in minutes

_ATOI = re.compile(r"\s*([+-]?\d+)")


def atoi(text: str) -> int:
    """Parse a leading decimal integer the way C's atoi does (0 if none)."""
    match = _ATOI.match(text)
    if not match:
        return 0
    return int(match.group(1))


def find_value(params: str, key: str) -> Optional[int]:
    """Return the integer following ``key`` in ``params``, or None if absent.

    The key is matched case-insensitively anywhere in the line.
    """
    match = re.search(re.escape(key), params, re.IGNORECASE)
    if match is None:
        return None
    return atoi(params[match.end():])


class ParameterStore:
    """Owns the xfactor parameters and re-parses them on demand."""

    def __init__(self, nice_offset: int = NICE_OFFSET):
        self.nice_offset = nice_offset
        self.config = XFactorConfig(max_factor=nice_offset)

    def set_nice_offset(self, nice_offset: int) -> None:
        """Move the parameter domain to a new host nice offset.

        A ceiling still at the old default follows the new offset; other
        values are clamped into the new domain.
        """
        if self.config.max_factor == self.nice_offset:
            self.config.max_factor = nice_offset
        self.config.max_factor = min(self.config.max_factor, nice_offset)
        self.config.weight = min(self.config.weight, nice_offset)
        self.nice_offset = nice_offset

    def _fields(self) -> Tuple[Tuple[str, str, int, int], ...]:
        # (config field, key, lowest, highest) in parse order
        return (
            ("min_time", "xfactor_min_time", 1, MAX_MIN_TIME),
            ("max_factor", "xfactor_max", 1, self.nice_offset),
            ("weight", "xfactor_weight", 1, self.nice_offset),
        )

    def reload(self, raw_params: Optional[str]) -> None:
        """Update the parameters from a raw ``key=value`` line.

        Keys are processed in order and parsing stops at the first missing
        or invalid one; fields updated before that point keep their new
        value. Errors are logged, never raised.
        """
        if not raw_params:
            log.error("%s: PrioritySiteFactorParameters not set.", PLUGIN_TYPE)
        else:
            for field, key, lowest, highest in self._fields():
                value = find_value(raw_params, key + "=")
                if value is None:
                    log.error("%s: %s not configured.", PLUGIN_TYPE, key)
                    break
                if value < lowest or value > highest:
                    log.error("%s: invalid %s value.", PLUGIN_TYPE, key)
                    break
                setattr(self.config, field, value)

        log.debug(
            "%s: xfactor_min_time=%d, xfactor_max=%d, xfactor_weight=%d",
            PLUGIN_TYPE,
            self.config.min_time,
            self.config.max_factor,
            self.config.weight,
        )
