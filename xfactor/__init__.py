"""xfactor site factor plugin."""

from .engine import FactorEngine
from .models import NICE_OFFSET, ElapsedUnit, JobState, JobView, XFactorConfig
from .params import ParameterStore
from .plugin import SiteFactorPlugin

__version__ = "1.0.0"
