class InvalidArgumentError(ValueError):
    """Raised for None or empty collections, bad element counts and odd population sizes."""


class OutOfRangeError(IndexError):
    """Raised for indices or counts outside their valid bounds."""


class InvariantViolation(RuntimeError):
    """A tour no longer holds the identity set it was seeded with."""
