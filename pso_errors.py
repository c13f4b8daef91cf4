from __future__ import annotations


class PSOError(Exception):
    """Base class for every error raised by the swarm optimizer and its objectives."""


class InvalidArgumentError(PSOError, ValueError):
    """A constructor argument violates its contract (fix the input and rebuild)."""


class IterationLimitExceeded(PSOError, RuntimeError):
    """`advance()` was called on an optimizer that already ran `max_iterations` steps."""


class NotSupportedError(PSOError, NotImplementedError):
    """The objective function does not define the requested quantity (e.g. its optimum)."""


__all__ = ["PSOError", "InvalidArgumentError", "IterationLimitExceeded", "NotSupportedError"]
