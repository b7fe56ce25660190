from typing import Generic, TypeVar, get_args, get_origin

from hearth.Errors import InvalidParamError, StaleGuardError

T = TypeVar("T")


class Guard(Generic[T]):
    """
    A borrow of one resource cell, valid until released.

    Parameterized (`Res[int]`) the class is a request a State can resolve;
    instantiated by the State it is the live borrow handed to a handler.

    Public attribute reads (and, on ResMut, writes) are forwarded to the
    resource. The guard's own names `value`, `key`, `live` and `release`
    shadow resource attributes of the same name; reach those through
    `guard.value`, e.g. `counter.value.value` for a resource with a `value`
    field.
    """

    exclusive = False

    def __init__(self, cell):
        self._cell = cell
        self._live = True

    @property
    def live(self):
        return self._live

    @property
    def key(self):
        return self._cell.key

    def _checked_cell(self):
        if not self._live:
            raise StaleGuardError(
                f"{type(self).__name__}[{self._cell.key}] used after release."
            )
        return self._cell

    @property
    def value(self) -> T:
        return self._checked_cell().downcast()

    def release(self):
        if self._live:
            self._live = False
            self._cell.release(self.exclusive)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.release()
        return False

    def __getattr__(self, name):
        if name.startswith("_"):
            raise AttributeError(name)
        return getattr(self.value, name)

    def __setattr__(self, name, value):
        if name.startswith("_") or isinstance(getattr(type(self), name, None), property):
            object.__setattr__(self, name, value)
        elif not self.exclusive:
            raise AttributeError(
                f"{type(self).__name__}[{self._cell.key}] is read-only, cannot set '{name}'."
            )
        else:
            setattr(self._checked_cell().downcast(), name, value)

    def __repr__(self):
        status = "live" if self._live else "released"
        return f"{type(self).__name__}[{self._cell.key}]({status})"


class Res(Guard[T]):
    """Shared, read-only access to a resource for the duration of a call."""


class ResMut(Guard[T]):
    """Exclusive read-write access to a resource for the duration of a call."""

    exclusive = True

    @Guard.value.setter
    def value(self, new_value: T):
        self._checked_cell().value = new_value


def is_param(annotation) -> bool:
    origin = get_origin(annotation)
    return isinstance(origin, type) and issubclass(origin, Guard)


def parse_param(param):
    """Split `Res[T]`/`ResMut[T]` into its accessor class and resource type."""
    if not is_param(param) or get_origin(param) is Guard:
        raise InvalidParamError(
            f"{param!r} is not a resource request, expected Res[T] or ResMut[T]."
        )

    args = get_args(param)
    if len(args) != 1:
        raise InvalidParamError(f"{param!r} must name exactly one resource type.")

    tp = args[0]
    if not isinstance(tp, type) and get_origin(tp) is None:
        raise InvalidParamError(f"{param!r} does not name a concrete resource type.")

    return get_origin(param), tp
