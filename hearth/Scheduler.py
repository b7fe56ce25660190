import logging
from typing import Dict, List

from hearth.Errors import InvalidLabelError
from hearth.Handler import Handler, into_handler
from hearth.State import State, TypeKey

logger = logging.getLogger(__name__)


class ScheduleLabel:
    """
    Base class for schedule labels. A label is a class used purely as a key;
    either the class itself or an instance of it can be passed around.
    """


def label_key(label) -> TypeKey:
    cls = label if isinstance(label, type) else type(label)

    if not issubclass(cls, ScheduleLabel):
        raise InvalidLabelError(f"{label!r} is not a ScheduleLabel.")

    return TypeKey.of(cls)


class Schedule:
    def __init__(self):
        self.handlers: List[Handler] = []

    def __iter__(self):
        yield from self.handlers

    def __len__(self):
        return len(self.handlers)

    def add_handler(self, handler, params=None) -> Handler:
        handler = into_handler(handler, params)
        self.handlers.append(handler)
        return handler

    def run(self, state: State):
        # late registrations take effect from the next run
        for handler in list(self.handlers):
            handler.run(state)


class Scheduler:
    """Keeps one Schedule per label and runs them against a State on demand."""

    def __init__(self):
        self.schedules: Dict[TypeKey, Schedule] = {}

    def add_handler(self, label, handler, params=None) -> Handler:
        key = label_key(label)

        schedule = self.schedules.get(key)
        if schedule is None:
            schedule = self.schedules[key] = Schedule()

        handler = schedule.add_handler(handler, params)
        logger.debug("Registered %r under %s", handler, key)
        return handler

    def has_schedule(self, label) -> bool:
        return label_key(label) in self.schedules

    def get_schedule(self, label):
        return self.schedules.get(label_key(label))

    def labels(self):
        return [key.type for key in self.schedules]

    def run(self, label, state: State):
        key = label_key(label)

        schedule = self.schedules.get(key)
        if schedule is None:
            logger.debug("No handlers registered under %s", key)
            return

        schedule.run(state)
