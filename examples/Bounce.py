import pygame

import hearth
from hearth import App, Commands, Init, Module, Render, Res, ResMut, Time, Update
from hearth.Input import KeyboardState
from hearth.Renderer import Renderer
from hearth.Window import WindowModule

app_config = {
    "size": (640, 480),
    "title": "Bounce",
    "fps": 60,
}

SQUARE_COLOR = (247, 201, 72)


class Square:
    def __init__(self, size=40, speed=(180.0, 140.0)):
        self.size = size
        self.pos = [100.0, 100.0]
        self.velocity = list(speed)
        self.paused = False


def bind_keys(keyboard: ResMut[KeyboardState]):
    keyboard.value.bind("pause", pygame.K_SPACE)
    keyboard.value.map("quit", [pygame.K_q, pygame.K_x])


def move(square: ResMut[Square], time: Res[Time], keyboard: Res[KeyboardState], commands: ResMut[Commands]):
    if keyboard.pressed("quit"):
        commands.value.exit()
        return

    square.value.paused = keyboard.pressed("pause")
    if square.value.paused:
        return

    bounds = app_config["size"]
    for axis in (0, 1):
        square.value.pos[axis] += square.value.velocity[axis] * time.delta
        limit = bounds[axis] - square.value.size
        if not 0 <= square.value.pos[axis] <= limit:
            square.value.velocity[axis] *= -1
            square.value.pos[axis] = min(max(square.value.pos[axis], 0), limit)


def draw(square: Res[Square], renderer: ResMut[Renderer]):
    surface = renderer.value.create_surface(square.size, square.size)
    surface.fill(SQUARE_COLOR)
    renderer.value.submit_surface(surface, *map(int, square.pos))


class BounceModule(Module):
    def configure(self, app):
        app.add_resource(Square())
        app.add_handler(Init, bind_keys)
        app.add_handler(Update, move)
        app.add_handler(Render, draw)


if __name__ == "__main__":
    app = App()
    app.add_module(WindowModule(app_config)).add_module(BounceModule())
    hearth.main(app)
