"""
Lair storage abstraction.

Separates persistence from domain logic for testability. The systems only
ever talk to the Protocols below; the in-memory implementations back the
tests and any embedding that brings no database of its own.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Generic, Protocol, TypeVar, runtime_checkable

from pydantic import BaseModel

from ..errors import EntityNotFoundError, StaleEntityError
from .schema import Equipment, Minion, Scheme, SchemeStatus, SecretBase

T = TypeVar("T", bound=BaseModel)


@runtime_checkable
class Repository(Protocol[T]):
    """
    CRUD interface shared by every entity store.

    Implementations:
    - Memory*Store: In-memory storage (tests, embedding)
    """

    def get_all(self) -> list[T]:
        """All records, ordered by id."""
        ...

    def get(self, entity_id: int) -> T | None:
        """Load a record by id. Returns None if not found."""
        ...

    def insert(self, entity: T) -> int:
        """Persist a new record, assign its id and return it."""
        ...

    def update(self, entity: T) -> None:
        """Overwrite an existing record. Raises EntityNotFoundError if absent."""
        ...

    def delete(self, entity_id: int) -> bool:
        """Delete a record. Returns True if deleted."""
        ...


@runtime_checkable
class MinionStore(Repository[Minion], Protocol):
    def by_scheme(self, scheme_id: int) -> list[Minion]:
        ...

    def by_base(self, base_id: int) -> list[Minion]:
        ...

    def by_specialty(self, specialty: str) -> list[Minion]:
        ...


@runtime_checkable
class EquipmentStore(Repository[Equipment], Protocol):
    def by_scheme(self, scheme_id: int) -> list[Equipment]:
        ...

    def by_base(self, base_id: int) -> list[Equipment]:
        ...

    def by_category(self, category: str) -> list[Equipment]:
        ...


@runtime_checkable
class SchemeStore(Repository[Scheme], Protocol):
    def by_status(self, status: SchemeStatus | str) -> list[Scheme]:
        ...


@runtime_checkable
class BaseStore(Repository[SecretBase], Protocol):
    def by_location(self, location: str) -> list[SecretBase]:
        ...


# -----------------------------------------------------------------------------
# In-memory implementations
# -----------------------------------------------------------------------------


class _MemoryStore(Generic[T]):
    """
    In-memory record store.

    Records are copied on the way in and on the way out, so the store holds
    the only authoritative version and callers must update() to persist a
    change. All access is serialized on one lock.

    Versioned stores refuse an update whose version differs from the stored
    record, so a write from an outdated copy cannot undo a newer one.
    """

    kind = "Record"
    versioned = False

    def __init__(self):
        self._records: dict[int, T] = {}
        self._next_id = 1
        self._lock = threading.RLock()

    def get_all(self) -> list[T]:
        with self._lock:
            return [self._records[k].model_copy(deep=True) for k in sorted(self._records)]

    def get(self, entity_id: int) -> T | None:
        with self._lock:
            record = self._records.get(entity_id)
            return record.model_copy(deep=True) if record is not None else None

    def insert(self, entity: T) -> int:
        with self._lock:
            entity.id = self._next_id
            self._next_id += 1
            self._records[entity.id] = entity.model_copy(deep=True)
            return entity.id

    def update(self, entity: T) -> None:
        with self._lock:
            current = self._records.get(entity.id)
            if current is None:
                raise EntityNotFoundError(self.kind, entity.id)
            if self.versioned:
                if entity.version != current.version:
                    raise StaleEntityError(self.kind, entity.id, entity.version, current.version)
                entity.version += 1
            self._records[entity.id] = entity.model_copy(deep=True)

    def delete(self, entity_id: int) -> bool:
        with self._lock:
            if entity_id in self._records:
                del self._records[entity_id]
                return True
            return False

    def clear(self) -> None:
        """Remove all records (test utility)."""
        with self._lock:
            self._records.clear()
            self._next_id = 1

    def _where(self, predicate: Callable[[T], bool]) -> list[T]:
        return [r for r in self.get_all() if predicate(r)]


def copy_fields(target: BaseModel, source: BaseModel) -> None:
    """Overwrite every field of target with source's value, in place."""
    for name in type(source).model_fields:
        setattr(target, name, getattr(source, name))


class MemoryMinionStore(_MemoryStore[Minion]):
    kind = "Minion"
    versioned = True

    def by_scheme(self, scheme_id: int) -> list[Minion]:
        return self._where(lambda m: m.scheme_id == scheme_id)

    def by_base(self, base_id: int) -> list[Minion]:
        return self._where(lambda m: m.base_id == base_id)

    def by_specialty(self, specialty: str) -> list[Minion]:
        return self._where(lambda m: m.specialty == specialty)


class MemoryEquipmentStore(_MemoryStore[Equipment]):
    kind = "Equipment"
    versioned = True

    def by_scheme(self, scheme_id: int) -> list[Equipment]:
        return self._where(lambda e: e.scheme_id == scheme_id)

    def by_base(self, base_id: int) -> list[Equipment]:
        return self._where(lambda e: e.base_id == base_id)

    def by_category(self, category: str) -> list[Equipment]:
        return self._where(lambda e: e.category == category)


class MemorySchemeStore(_MemoryStore[Scheme]):
    kind = "Scheme"

    def by_status(self, status: SchemeStatus | str) -> list[Scheme]:
        value = status.value if isinstance(status, SchemeStatus) else status
        return self._where(lambda s: s.status.value == value)


class MemoryBaseStore(_MemoryStore[SecretBase]):
    kind = "SecretBase"

    def by_location(self, location: str) -> list[SecretBase]:
        return self._where(lambda b: b.location == location)


@dataclass
class LairStores:
    """The four entity stores, handed to the systems as one bundle."""
    minions: MinionStore
    schemes: SchemeStore
    equipment: EquipmentStore
    bases: BaseStore

    @classmethod
    def in_memory(cls) -> "LairStores":
        return cls(
            minions=MemoryMinionStore(),
            schemes=MemorySchemeStore(),
            equipment=MemoryEquipmentStore(),
            bases=MemoryBaseStore(),
        )
