import uuid

from cafedocs.core.errors import NotFound, ValidationError


def parse_uuid(value, message: str = "Not found") -> uuid.UUID:
    """Parse a path identifier; a malformed id cannot exist, so it is not found"""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise NotFound(message)


def parse_user_id(value) -> uuid.UUID:
    """Parse a user reference supplied in a request body"""
    try:
        return uuid.UUID(str(value))
    except ValueError:
        raise ValidationError("Invalid userId")
