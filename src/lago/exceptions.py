"""Exceptions raised by the LAGO initialization pipeline."""


class LagoError(Exception):
    """Base class for all LAGO errors."""


class InvalidNoiseModelError(LagoError):
    """A measurement noise model cannot be reduced to an angular sigma."""


class MissingInitialValueError(LagoError, KeyError):
    """A solved key has no entry in the caller's initial guess."""

    def __str__(self) -> str:
        # KeyError quotes its argument; keep the plain message instead
        return str(self.args[0]) if self.args else ""


class DisconnectedGraphError(LagoError):
    """The orientation subgraph does not form a single connected component."""


class SingularSystemError(LagoError):
    """The linear orientation system could not be solved."""
