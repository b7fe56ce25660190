import inspect
import logging
from collections import Counter
from contextlib import ExitStack
from typing import Callable, Optional, Sequence

from hearth.Access import is_param, parse_param
from hearth.Errors import InvalidHandlerError, InvalidParamError

logger = logging.getLogger(__name__)

# Handlers take at most this many injected parameters.
MAX_HANDLER_PARAMS = 10

POSITIONAL = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
)


def handler_name(func) -> str:
    return getattr(func, "__qualname__", None) or repr(func)


def params_of(func: Callable):
    """
    Read the injectable parameters of `func` from its annotations.

    Every parameter must be positional and annotated as `Res[T]` or
    `ResMut[T]`; string annotations are evaluated.
    """
    name = handler_name(func)
    try:
        signature = inspect.signature(func, eval_str=True)
    except (TypeError, ValueError, NameError) as exc:
        raise InvalidHandlerError(f"Cannot inspect handler {name}: {exc}") from exc

    params = []
    for parameter in signature.parameters.values():
        if parameter.kind not in POSITIONAL:
            raise InvalidHandlerError(
                f"Handler {name}: parameter '{parameter.name}' must be positional."
            )
        if not is_param(parameter.annotation):
            raise InvalidHandlerError(
                f"Handler {name}: parameter '{parameter.name}' must be annotated "
                f"as Res[T] or ResMut[T], got {parameter.annotation!r}."
            )
        params.append(parameter.annotation)

    return params


class Handler:
    """
    A function bound to the resources it asks for.

    Binding resolves nothing. Each `run` borrows every parameter, in declared
    order, fresh from the given state, calls the function and releases the
    borrows again.
    """

    def __init__(self, func: Callable, params: Optional[Sequence] = None):
        if not callable(func):
            raise InvalidHandlerError(f"{func!r} is not callable.")

        self.func = func
        self.name = handler_name(func)
        self.params = tuple(params_of(func) if params is None else params)

        if len(self.params) > MAX_HANDLER_PARAMS:
            raise InvalidHandlerError(
                f"Handler {self.name} takes {len(self.params)} resources, "
                f"at most {MAX_HANDLER_PARAMS} are supported."
            )

        try:
            self.requests = [parse_param(param) for param in self.params]
        except InvalidParamError as exc:
            raise InvalidHandlerError(f"Handler {self.name}: {exc}") from exc

        if params is not None:
            self._check_accepts_params()

        self._warn_on_conflicts()

    def _check_accepts_params(self):
        try:
            signature = inspect.signature(self.func)
        except (TypeError, ValueError):
            # builtins without introspectable signatures
            return

        try:
            signature.bind(*self.params)
        except TypeError as exc:
            raise InvalidHandlerError(
                f"Handler {self.name} cannot be called with {len(self.params)} "
                f"resources: {exc}"
            ) from exc

    def _warn_on_conflicts(self):
        counts = Counter(tp for _, tp in self.requests)
        exclusive = {tp for accessor, tp in self.requests if accessor.exclusive}

        for tp in exclusive:
            if counts[tp] > 1:
                logger.warning(
                    "Handler %s borrows %r mutably alongside another borrow, "
                    "every run will fail.",
                    self.name,
                    tp,
                )

    @property
    def arity(self):
        return len(self.params)

    def run(self, state):
        with ExitStack() as stack:
            args = [stack.enter_context(state.fetch(param)) for param in self.params]
            self.func(*args)

    def __call__(self, state):
        self.run(state)

    def __repr__(self):
        return f"Handler({self.name}, arity={self.arity})"


def into_handler(handler, params: Optional[Sequence] = None) -> Handler:
    if isinstance(handler, Handler):
        if params is not None:
            raise InvalidHandlerError(
                f"{handler!r} is already bound, params cannot be given again."
            )
        return handler
    return Handler(handler, params)
