"""Exceptions raised by the geometry and mesh routines."""


class MeshGeomError(Exception):
    """Base class of all errors raised by this package."""


class InvalidInputException(MeshGeomError, ValueError):
    """Invalid input was passed to a function, e.g. a violated precondition."""


class SolverException(MeshGeomError, RuntimeError):
    """An equation system could not be solved."""


class AllocationException(MeshGeomError, RuntimeError):
    """An attempt was made to exceed an allocation limit."""


class TopologyException(MeshGeomError, RuntimeError):
    """A topological error was found in a mesh."""


class IOException(MeshGeomError, OSError):
    """Reading or writing a file failed."""