from typing import Dict, Iterable, List, Tuple

import pygame


class KeyboardState:
    """
    Keyboard state keyed by pygame key codes, plus named action bindings.

    Bind one or more keys to an action name, then ask whether the action is
    pressed instead of checking individual keys.
    """

    def __init__(self):
        self.bindings: Dict[str, List[int]] = {}
        self.keys: Dict[int, bool] = {}
        self.modifiers = 0

    def update_key(self, key: int, pressed: bool):
        self.keys[key] = pressed

    def update_modifiers(self, modifiers: int):
        self.modifiers = modifiers

    def bind(self, action: str, key: int):
        keys = self.bindings.setdefault(action, [])
        if key not in keys:
            keys.append(key)

    def map(self, action: str, keys: Iterable[int]):
        for key in keys:
            self.bind(action, key)

    def clear(self):
        self.bindings.clear()
        self.keys.clear()
        self.modifiers = 0

    def shift(self):
        return bool(self.modifiers & pygame.KMOD_SHIFT)

    def control(self):
        return bool(self.modifiers & pygame.KMOD_CTRL)

    def alt(self):
        return bool(self.modifiers & pygame.KMOD_ALT)

    def system(self):
        return bool(self.modifiers & pygame.KMOD_META)

    def key_pressed(self, key: int) -> bool:
        return self.keys.get(key, False)

    def pressed(self, action: str) -> bool:
        return any(self.key_pressed(key) for key in self.bindings.get(action, []))

    def shift_pressed(self, action: str) -> bool:
        return self.pressed(action) and self.shift()

    def control_pressed(self, action: str) -> bool:
        return self.pressed(action) and self.control()

    def alt_pressed(self, action: str) -> bool:
        return self.pressed(action) and self.alt()

    def system_pressed(self, action: str) -> bool:
        return self.pressed(action) and self.system()


class MouseState:
    def __init__(self, window_size: Tuple[int, int] = (1, 1)):
        self.window_size = window_size
        self.position = (0.0, 0.0)
        self.uv = (0.0, 0.0)
        self.buttons: Dict[int, bool] = {}

    def update_window_size(self, width: int, height: int):
        self.window_size = (max(width, 1), max(height, 1))
        # keep uv in sync with the new size
        self.update_position(self.position)

    def update_position(self, position):
        x, y = position
        width, height = self.window_size

        self.position = (float(x), float(y))
        # uv origin is the bottom-left corner
        self.uv = (x / width, 1.0 - y / height)

    def update_button(self, button: int, pressed: bool):
        self.buttons[button] = pressed

    def button(self, button: int) -> bool:
        return self.buttons.get(button, False)
