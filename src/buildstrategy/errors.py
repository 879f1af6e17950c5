"""Exceptions raised while deciding whether to build."""


class BuildStrategyError(Exception):
    """Base exception for build strategy errors."""

    pass


class ResolutionError(BuildStrategyError):
    """Latest revision of a head could not be retrieved."""

    pass


class OwnerUnavailable(BuildStrategyError):
    """Source has no owner to build a file system from."""

    pass


class FilesystemUnavailable(BuildStrategyError):
    """File system for the head could not be built."""

    pass


class DiffError(BuildStrategyError):
    """Changes between two revisions could not be listed."""

    pass
