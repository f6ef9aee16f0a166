"""Exception types raised throughout the package."""


class MofkaError(Exception):
    """Base class of every error raised by this package."""


class InvalidMetadata(MofkaError):
    """Raised when a piece of metadata fails validation."""