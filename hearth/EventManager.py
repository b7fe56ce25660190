import logging
from typing import Dict, List, Type, TypeVar

logger = logging.getLogger(__name__)

E = TypeVar("E", bound="Event")


class EventCategory:
    Application = 0x01
    Input = 0x02
    Keyboard = 0x04
    Mouse = 0x08
    Window = 0x10


class Event:
    """Base event; subclasses fix `type` and `category_flags` at class level."""

    type = "EVENT"
    category_flags = 0

    def __init__(self):
        self.handled = False

    def is_in_category(self, category):
        return (self.category_flags & category) != 0

    def __str__(self):
        return f"{type(self).__name__}(type={self.type}, handled={self.handled})"


class KeyEvent(Event):
    category_flags = EventCategory.Keyboard | EventCategory.Input

    def __init__(self, key: int, mod: int = 0):
        super().__init__()
        self.key = key
        self.mod = mod  # pygame KMOD_* flags


class KeyPressEvent(KeyEvent):
    type = "KEY_PRESS"


class KeyReleaseEvent(KeyEvent):
    type = "KEY_RELEASE"


class MouseEvent(Event):
    category_flags = EventCategory.Mouse | EventCategory.Input

    def __init__(self, pos: tuple):
        super().__init__()
        self.pos = pos  # (x, y) in window pixels


class MouseButtonEvent(MouseEvent):
    def __init__(self, button: int, pos: tuple):
        # 1 left, 2 middle, 3 right
        super().__init__(pos)
        self.button = button


class MouseClickEvent(MouseButtonEvent):
    type = "MOUSE_CLICK"


class MouseReleaseEvent(MouseButtonEvent):
    type = "MOUSE_RELEASE"


class MouseMoveEvent(MouseEvent):
    type = "MOUSE_MOVE"


class WindowEvent(Event):
    category_flags = EventCategory.Application | EventCategory.Window


class WindowCloseEvent(WindowEvent):
    type = "WINDOW_CLOSE"


class WindowResizeEvent(WindowEvent):
    type = "WINDOW_RESIZE"

    def __init__(self, new_size: tuple):
        super().__init__()
        self.new_size = new_size  # (width, height)


class EventBus:
    """
    Per-frame event queues, one per event class.

    Writers append; a reader drains every queued event of the class it asks
    for. Whatever is left unread is dropped when the frame ends.
    """

    def __init__(self):
        self.events: Dict[type, List[Event]] = {}

    def __len__(self):
        return sum(len(events) for events in self.events.values())

    def write(self, event: Event):
        self.events.setdefault(type(event), []).append(event)

    def read(self, event_type: Type[E]) -> List[E]:
        return self.events.pop(event_type, [])

    def peek(self, event_type: Type[E]) -> List[E]:
        return list(self.events.get(event_type, []))

    def clear(self):
        if self.events:
            logger.debug("Dropping %d unread events", len(self))
        self.events.clear()
