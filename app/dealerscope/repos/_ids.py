import uuid


def as_uuid(value) -> uuid.UUID | None:
    """Coerce a path/token identifier to a UUID; malformed values become None."""
    if value is None or isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None
