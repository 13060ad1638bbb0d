"""Errors raised while loading discovery documents and rendering docs."""


class DiscoveryError(Exception):
    """Base class for all discodocs errors."""


class FetchError(DiscoveryError):
    # Network or filesystem failure while reading a discovery document.
    pass


class InvalidDiscoveryDocument(DiscoveryError):
    pass


class OriginNotAllowed(DiscoveryError):
    def __init__(self, url: str):
        super().__init__(f"Discovery URL {url!r} is not in the allowed origins.")
        self.url = url


class UnknownActivity(DiscoveryError):
    def __init__(self, method_id: str):
        super().__init__(f"Method {method_id!r} not found in discovery document.")
        self.method_id = method_id
