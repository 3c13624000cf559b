# booru must load before utils, which imports booru.errors.
from .booru import *  # noqa: F401,F403
from .booru import __all__

__version__ = "1.0.0"
