class MeshInitError(Exception):
    """Base class for failures reported by the mesh-init tool."""


class InvalidTopology(MeshInitError, ValueError):
    """A mesh dimension is not a positive integer."""


class ParseError(MeshInitError, ValueError):
    """A dimension (argument, prompt answer or config entry) is not an integer."""


class DumpWriteError(MeshInitError, OSError):
    """The init file could not be created or written."""
