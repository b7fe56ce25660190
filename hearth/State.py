import logging
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Tuple, get_origin

from hearth.Access import parse_param
from hearth.Errors import MissingResourceError, BorrowConflictError, TypeMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TypeKey:
    """Identity of a resource type. Built from a type, never from a value."""

    type: Any

    @classmethod
    def of(cls, tp):
        if isinstance(tp, TypeKey):
            return tp
        if not isinstance(tp, type) and get_origin(tp) is None:
            raise TypeError(f"{tp!r} is not a type and cannot key a resource.")
        return cls(tp)

    @property
    def name(self):
        if get_origin(self.type) is None and isinstance(self.type, type):
            return self.type.__qualname__
        return repr(self.type)

    def __str__(self):
        return self.name


class BorrowState(Enum):
    FREE = "free"
    SHARED = "shared"
    EXCLUSIVE = "exclusive"


class ResourceCell:
    """Owns one type-erased value plus its runtime borrow flag."""

    def __init__(self, key: TypeKey, value):
        self.key = key
        self.value = value
        self._shared = 0
        self._exclusive = False

    @property
    def borrow_state(self) -> BorrowState:
        if self._exclusive:
            return BorrowState.EXCLUSIVE
        if self._shared:
            return BorrowState.SHARED
        return BorrowState.FREE

    @property
    def shared_count(self) -> int:
        return self._shared

    def describe_borrow(self):
        if self._exclusive:
            return "exclusive"
        if self._shared:
            return f"shared x{self._shared}"
        return "free"

    def acquire(self, exclusive: bool, operation: str):
        if self._exclusive or (exclusive and self._shared):
            raise BorrowConflictError(self.key, operation, self.describe_borrow())

        if exclusive:
            self._exclusive = True
        else:
            self._shared += 1

    def release(self, exclusive: bool):
        if exclusive:
            self._exclusive = False
        elif self._shared > 0:
            self._shared -= 1

    def downcast(self, tp=None):
        """
        Return the stored value, checking it against the keyed type (or `tp`).
        """
        tp = self.key.type if tp is None else tp
        check = get_origin(tp) or tp

        if isinstance(check, type) and not isinstance(self.value, check):
            raise TypeMismatchError(
                f"Resource keyed by {self.key} holds a {type(self.value).__qualname__}, "
                f"not a {TypeKey.of(tp)}."
            )
        return self.value

    def __repr__(self):
        return f"ResourceCell(key={self.key}, borrow={self.describe_borrow()})"


class State:
    """
    A container of singleton resources, one per type.

    Handlers never see the container itself: they declare `Res[T]` or
    `ResMut[T]` parameters and a Scheduler resolves those against a State at
    call time.
    """

    def __init__(self):
        self._resources: Dict[TypeKey, ResourceCell] = {}

    def __len__(self):
        return len(self._resources)

    def __contains__(self, tp):
        return self.has(tp)

    def __iter__(self):
        yield from self._resources

    def add(self, resource, as_type=None):
        key = TypeKey.of(type(resource) if as_type is None else as_type)

        if key in self._resources:
            logger.debug("Replacing resource %s", key)

        self._resources[key] = ResourceCell(key, resource)

    def has(self, tp) -> bool:
        return TypeKey.of(tp) in self._resources

    def fetch(self, param):
        """
        Borrow a resource. `param` is `Res[T]` for shared access or `ResMut[T]`
        for exclusive access; the returned guard must be released (or used as
        a context manager) before the resource can be borrowed incompatibly.
        """
        accessor, tp = parse_param(param)
        key = TypeKey.of(tp)
        operation = f"fetch {accessor.__name__}[{key}]"

        cell = self._resources.get(key)
        if cell is None:
            raise MissingResourceError(key, operation)

        cell.acquire(accessor.exclusive, operation)
        return accessor(cell)

    get = fetch

    def merge(self, other: "State"):
        """Move every resource of `other` into this state, replacing collisions."""
        for key, cell in other.drain():
            if key in self._resources:
                logger.debug("Merge replaces resource %s", key)
            self._resources[key] = cell

    def drain(self) -> List[Tuple[TypeKey, ResourceCell]]:
        entries = list(self._resources.items())
        self._resources.clear()
        return entries

    def all(self) -> Mapping[TypeKey, ResourceCell]:
        return MappingProxyType(self._resources)

    def __repr__(self):
        names = ", ".join(str(key) for key in self._resources)
        return f"State([{names}])"
