import pytest

from hearth.Access import Res, ResMut
from hearth.Errors import (
    BorrowConflictError,
    InvalidParamError,
    MissingResourceError,
    StaleGuardError,
    TypeMismatchError,
)
from hearth.State import BorrowState, State, TypeKey


class Position:
    def __init__(self, x=0, y=0):
        self.x = x
        self.y = y


def read(state, tp):
    with state.get(Res[tp]) as guard:
        return guard.value


def test_type_key_identity_comes_from_the_type():
    assert TypeKey.of(int) == TypeKey.of(int)
    assert hash(TypeKey.of(int)) == hash(TypeKey.of(int))
    assert TypeKey.of(int) != TypeKey.of(str)
    assert TypeKey.of(list[int]) == TypeKey.of(list[int])
    assert str(TypeKey.of(Position)) == "Position"


def test_type_key_rejects_values():
    with pytest.raises(TypeError):
        TypeKey.of(5)


def test_has_only_after_add():
    state = State()
    assert not state.has(int)
    assert int not in state

    state.add(3)
    assert state.has(int)
    assert int in state
    assert not state.has(str)


def test_add_replaces_previous_value():
    state = State()
    state.add("a")
    state.add("b")

    assert state.has(str)
    assert len(state) == 1
    assert read(state, str) == "b"


def test_add_with_explicit_type():
    state = State()
    state.add(True, as_type=int)

    assert state.has(int)
    assert not state.has(bool)
    assert read(state, int) is True


def test_fetch_missing_resource():
    state = State()

    with pytest.raises(MissingResourceError) as info:
        state.get(Res[str])

    assert info.value.type_key == TypeKey.of(str)
    assert "str" in str(info.value)
    assert "fetch Res[str]" in str(info.value)


def test_fetch_requires_a_resource_request():
    state = State()
    state.add(1)

    with pytest.raises(InvalidParamError):
        state.get(int)
    with pytest.raises(InvalidParamError):
        state.get(Res)


def test_shared_borrows_coexist():
    state = State()
    state.add(Position(1, 2))

    first = state.get(Res[Position])
    second = state.get(Res[Position])
    cell = state.all()[TypeKey.of(Position)]

    assert cell.borrow_state is BorrowState.SHARED
    assert cell.shared_count == 2
    assert first.value is second.value

    first.release()
    second.release()
    assert cell.borrow_state is BorrowState.FREE


def test_exclusive_borrow_excludes_others():
    state = State()
    state.add(Position())

    with state.get(ResMut[Position]):
        with pytest.raises(BorrowConflictError) as info:
            state.get(Res[Position])
        assert info.value.held == "exclusive"

        with pytest.raises(BorrowConflictError):
            state.get(ResMut[Position])

    with state.get(Res[Position]):
        with pytest.raises(BorrowConflictError) as info:
            state.get(ResMut[Position])
        assert info.value.held == "shared x1"


def test_res_mut_writes_through():
    state = State()
    state.add(0, as_type=int)
    state.add(Position())

    with state.get(ResMut[int]) as counter:
        counter.value += 5
    with state.get(ResMut[Position]) as position:
        position.value.x = 7

    assert read(state, int) == 5
    assert read(state, Position).x == 7


def test_res_is_read_only():
    state = State()
    state.add(1)

    with state.get(Res[int]) as guard:
        with pytest.raises(AttributeError):
            guard.value = 2


def test_guard_forwards_attributes():
    state = State()
    state.add(Position(4, 5))

    with state.get(Res[Position]) as position:
        assert position.x == 4
        assert position.y == 5


def test_released_guard_is_stale():
    state = State()
    state.add("text")

    guard = state.get(Res[str])
    guard.release()

    with pytest.raises(StaleGuardError):
        guard.value


def test_downcast_mismatch_fails_loudly():
    state = State()
    state.add("not an int", as_type=int)

    with state.get(Res[int]) as guard:
        with pytest.raises(TypeMismatchError):
            guard.value


def test_merge_moves_entries_and_overwrites():
    live = State()
    live.add(1)
    live.add("kept")

    deferred = State()
    deferred.add(2)
    deferred.add(1.5)

    live.merge(deferred)

    assert len(deferred) == 0
    assert len(live) == 3
    assert read(live, int) == 2
    assert read(live, str) == "kept"
    assert read(live, float) == 1.5


def test_drain_empties_the_state():
    state = State()
    state.add(1)
    state.add("a")

    entries = state.drain()

    assert len(state) == 0
    assert {key.type for key, _ in entries} == {int, str}
    assert {cell.value for _, cell in entries} == {1, "a"}


def test_res_mut_forwards_attribute_writes():
    state = State()
    state.add(Position(1, 2))

    with state.get(ResMut[Position]) as position:
        position.x += 5
        position.y = 9

    assert read(state, Position).x == 6
    assert read(state, Position).y == 9


def test_res_rejects_attribute_writes():
    state = State()
    state.add(Position(1, 2))

    with state.get(Res[Position]) as position:
        with pytest.raises(AttributeError):
            position.x = 5

    assert read(state, Position).x == 1


def test_released_guard_rejects_writes():
    state = State()
    state.add(Position())

    guard = state.get(ResMut[Position])
    guard.release()

    with pytest.raises(StaleGuardError):
        guard.x = 3
