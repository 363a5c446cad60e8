class FriendsError(Exception):
    """Base exception for board domain errors."""

    pass


class ValidationError(FriendsError):
    """Raised when a required field is missing or empty."""

    pass


class NotFoundError(FriendsError):
    """Raised when a referenced agent or group does not exist."""

    pass


class ConflictError(FriendsError):
    """Raised when creating an entity whose identifier is already taken."""

    pass


class BackendError(FriendsError):
    """Raised when the storage backend fails or cannot be reached."""

    pass


def require(**fields: object) -> None:
    """Raise ValidationError naming every missing or empty field."""
    missing = [name for name, value in fields.items() if not value]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")
