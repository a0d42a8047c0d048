"""Storage-layer exception types.

These are raised by the document store and travel untouched through services
and routes; only the error normalizer translates them into HTTP responses.
"""


class StorageError(Exception):
    """Base class for document store failures."""


class InvalidIdError(StorageError):
    """Raised when an identifier is not a well-formed document id."""

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Malformed document id: {value!r}")


class DuplicateKeyError(StorageError):
    """Raised when a write violates a unique index."""

    def __init__(self, collection: str, fields: tuple[str, ...]) -> None:
        self.collection = collection
        self.fields = fields
        super().__init__(f"Duplicate key on {collection}.{'+'.join(fields)}")


class DocumentValidationError(StorageError):
    """Raised when a document does not satisfy its collection schema."""

    def __init__(self, collection: str, messages: list[str]) -> None:
        self.collection = collection
        self.messages = messages
        super().__init__("; ".join(messages))


class InvalidFilterError(StorageError):
    """Raised when a filter cannot be interpreted against the collection schema."""


_TRANSPORT_LOCATIONS = frozenset({"body", "query", "path", "header", "cookie"})


def format_validation_errors(errors: list[dict]) -> list[str]:
    """Flatten pydantic error dicts into ``field: message`` strings."""
    messages: list[str] = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ())]
        if location and location[0] in _TRANSPORT_LOCATIONS:
            location = location[1:]
        if error.get("type") == "json_invalid":
            # The remaining part is a character offset into the body.
            location = [part for part in location if not part.isdigit()]
        message = str(error.get("msg", "Invalid value"))
        messages.append(f"{'.'.join(location)}: {message}" if location else message)
    return messages
