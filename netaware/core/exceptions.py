"""Exceptions raised by netaware."""


class NetawareError(Exception):
    """Base class for all netaware errors."""


class BackendUnavailable(NetawareError):
    """The platform connectivity query failed outright (permissions, OS error, ...)."""


class LoadFailure(NetawareError):
    """
    Raised by a consumer's ``load_state()``.

    The reload coordinator never raises or wraps this itself; it only lets it
    propagate to the host's error boundary.
    """
