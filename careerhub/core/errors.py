"""Exception hierarchy shared by collaborators, services and forms."""


class CareerHubError(Exception):
    """Base class for every error raised by this package."""


class BackendError(CareerHubError):
    """The relational storage collaborator rejected or failed a request."""


class NotFoundError(BackendError):
    """A single-row lookup matched nothing."""


class AuthenticationError(CareerHubError):
    """The auth collaborator reported a failure."""


class ObjectStorageError(CareerHubError):
    """The object-storage collaborator reported a failure."""


class FormValidationError(CareerHubError, ValueError):
    """Local validation failed before any collaborator call."""


class DuplicateSectionTypeError(CareerHubError, ValueError):
    """More than one active content section shares a type."""

    def __init__(self, types: list[str], labels: list[str] | None = None) -> None:
        self.types = types
        names = ", ".join(labels or types)
        super().__init__(
            f"Each section type can only appear once. Please fix duplicates for: {names}."
        )
