"""Domain exceptions raised by the service layer.

The API layer maps each class to an HTTP status; database constraint
failures are not wrapped and surface as :class:`sqlalchemy.exc.IntegrityError`.
"""


class TinglingError(RuntimeError):
    """Base class for expected, caller-visible failures."""


class NotFoundError(TinglingError):
    """A referenced entity does not exist."""


class ConflictError(TinglingError):
    """The operation would break a relationship or uniqueness rule."""


class InvalidOperationError(TinglingError):
    """The operation is malformed for the given participants (e.g. targets oneself)."""
