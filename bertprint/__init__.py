"""Public API for :mod:`bertprint`."""

from . import codec as _codec
from . import constants as _constants
from .codec import *  # noqa: F401,F403
from .constants import *  # noqa: F401,F403

__version__ = "0.2.0"

__all__ = []
__all__ += getattr(_constants, "__all__", [])
__all__ += getattr(_codec, "__all__", [])
