"""
Exceptions raised by the lair rules and systems.

Clamping (loyalty, condition, success likelihood) never raises; these are
only for inputs the rules refuse to work with.
"""


class LairError(Exception):
    """Base class for lair manager errors."""
    pass


class MissingEntityError(LairError, ValueError):
    """A required entity argument was None."""
    def __init__(self, what: str):
        self.what = what
        super().__init__(f"{what} is required")


class InvalidValueError(LairError, ValueError):
    """A field value is outside its configured set or range."""
    def __init__(self, field: str, value, allowed: str = ""):
        self.field = field
        self.value = value
        message = f"Invalid {field}: {value!r}"
        if allowed:
            message += f" (expected {allowed})"
        super().__init__(message)


class EntityNotFoundError(LairError, KeyError):
    """Repository has no record with the given id."""
    def __init__(self, kind: str, entity_id):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(f"{kind} {entity_id} not found")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]


class ConfigError(LairError):
    """Settings violate their own constraints."""
    pass


class StaleEntityError(LairError):
    """An update was made from a copy older than the stored record."""
    def __init__(self, kind: str, entity_id, version: int, current: int):
        self.kind = kind
        self.entity_id = entity_id
        self.version = version
        self.current = current
        super().__init__(
            f"{kind} {entity_id} is stale (copy at version {version}, store at {current})"
        )
