import pytest

from hearth.Access import Res, ResMut
from hearth.Errors import InvalidLabelError, MissingResourceError
from hearth.Handler import Handler
from hearth.Scheduler import Schedule, ScheduleLabel, Scheduler
from hearth.State import State


class Init(ScheduleLabel):
    pass


class Update(ScheduleLabel):
    pass


class Order:
    def __init__(self):
        self.calls = []


def increment(i: ResMut[int]):
    if i.value < 10:
        i.value += 1


def value_of(state, tp):
    with state.get(Res[tp]) as guard:
        return guard.value


def test_counter_scenario():
    state = State()
    state.add(0)

    scheduler = Scheduler()
    scheduler.add_handler(Init, increment)
    scheduler.add_handler(Update, increment)

    scheduler.run(Init, state)
    assert value_of(state, int) == 1

    for _ in range(9):
        scheduler.run(Update, state)
    assert value_of(state, int) == 10

    for _ in range(5):
        scheduler.run(Update, state)
    assert value_of(state, int) == 10


def test_handlers_run_in_registration_order_every_time():
    state = State()
    state.add(Order())
    scheduler = Scheduler()

    for name in ("a", "b", "c"):
        scheduler.add_handler(
            Update, lambda order, name=name: order.value.calls.append(name), params=[ResMut[Order]]
        )

    scheduler.run(Update, state)
    scheduler.run(Update, state)

    assert value_of(state, Order).calls == ["a", "b", "c", "a", "b", "c"]


def test_unregistered_label_is_a_no_op():
    state = State()
    state.add(5)
    scheduler = Scheduler()
    scheduler.add_handler(Init, increment)

    scheduler.run(Update, state)

    assert len(state) == 1
    assert value_of(state, int) == 5
    assert not scheduler.has_schedule(Update)


def test_label_instances_and_classes_share_a_schedule():
    scheduler = Scheduler()
    scheduler.add_handler(Init(), lambda: None)
    scheduler.add_handler(Init, lambda: None)

    assert scheduler.has_schedule(Init())
    assert len(scheduler.get_schedule(Init)) == 2
    assert scheduler.labels() == [Init]


def test_labels_must_be_schedule_labels():
    scheduler = Scheduler()

    with pytest.raises(InvalidLabelError):
        scheduler.add_handler("Init", lambda: None)
    with pytest.raises(InvalidLabelError):
        scheduler.run(int, State())


def test_add_handler_returns_bound_handler():
    scheduler = Scheduler()

    handler = scheduler.add_handler(Update, increment)

    assert isinstance(handler, Handler)
    assert list(scheduler.get_schedule(Update)) == [handler]


def test_failure_stops_the_schedule():
    state = State()
    state.add(Order())
    schedule = Schedule()
    schedule.add_handler(lambda order: order.value.calls.append("first"), params=[ResMut[Order]])
    schedule.add_handler(increment)  # no int in the state
    schedule.add_handler(lambda order: order.value.calls.append("third"), params=[ResMut[Order]])

    with pytest.raises(MissingResourceError):
        schedule.run(state)

    assert value_of(state, Order).calls == ["first"]


def test_handlers_added_during_a_run_start_next_run():
    state = State()
    state.add(Order())
    schedule = Schedule()

    def late(order: ResMut[Order]):
        order.value.calls.append("late")

    def register(order: ResMut[Order]):
        order.value.calls.append("register")
        schedule.add_handler(late)

    schedule.add_handler(register)

    schedule.run(state)
    assert value_of(state, Order).calls == ["register"]

    schedule.run(state)
    assert value_of(state, Order).calls == ["register", "register", "late"]
