class MixerError(Exception):
    """Base class for failures talking to a console"""


class MixerConnectionError(MixerError):
    pass


class QueryTimeout(MixerError):
    def __init__(self, address, timeout):
        super().__init__(f"No reply for {address} within {timeout}s")
        self.address = address
        self.timeout = timeout


class DiscoveryError(MixerError):
    pass


class HostRenameError(Exception):
    """Renaming ports on the host side failed"""
