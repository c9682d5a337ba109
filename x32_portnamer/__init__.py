"""Name host audio ports after the routing of a Behringer / Midas console"""

from .errors import DiscoveryError, HostRenameError, MixerConnectionError, MixerError, QueryTimeout
from .scanner import MixerScanner, open_scanner

__version__ = "0.1.0"

__all__ = [
    "DiscoveryError",
    "HostRenameError",
    "MixerConnectionError",
    "MixerError",
    "MixerScanner",
    "QueryTimeout",
    "open_scanner",
]
