"""OmniFocus access through JXA scripts."""

from .gateway import OmnifocusGateway
from .scripting import OmnifocusError, OmnifocusScriptError

__all__ = [
    "OmnifocusError",
    "OmnifocusGateway",
    "OmnifocusScriptError",
]
