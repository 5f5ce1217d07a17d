from importlib.metadata import version

from .ansi import ANSI, Color
from .log import Level, PrefixFormatter, StatusLog, format_prefix
from .progress import FrameState, ProgressRenderer, RenderConfig, render

__version__ = version("termstatus")

__all__ = [
    "ANSI",
    "Color",
    "FrameState",
    "Level",
    "PrefixFormatter",
    "ProgressRenderer",
    "RenderConfig",
    "StatusLog",
    "__version__",
    "format_prefix",
    "render",
]
