from __future__ import annotations

from ._posixtime import *
from ._posixtime import __all__

__version__ = "0.1.0"
