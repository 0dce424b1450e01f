"""Domain errors raised by repository functions and translated to HTTP codes by routers."""


class RepositoryError(Exception):
    """Base class for repository-level failures."""


class NotFoundError(RepositoryError, LookupError):
    """A referenced row does not exist (or is not visible to the caller)."""


class DuplicateError(RepositoryError, ValueError):
    """A unique value (email, SKU, assignment) is already taken."""


class ConflictError(RepositoryError):
    """The row is still referenced elsewhere and cannot be changed as requested."""
