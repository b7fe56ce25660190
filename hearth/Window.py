import logging
from typing import Optional

import pygame

import hearth.EventManager as em
from hearth.Access import ResMut
from hearth.Application import (
    App,
    Init,
    Module,
    PostRender,
    PreInit,
    PreRender,
    Render,
    Update,
)
from hearth.EventManager import Event, EventBus
from hearth.Input import KeyboardState, MouseState
from hearth.Renderer import Renderer
from hearth.State import State
from hearth.Time import Time

logger = logging.getLogger(__name__)


class Window:
    def __init__(self, screen: pygame.Surface, title: str):
        self.screen = screen
        self.title = title

    @property
    def size(self):
        return self.screen.get_size()

    def set_title(self, title: str):
        self.title = title
        pygame.display.set_caption(title)


def map_event(event: pygame.event.Event) -> Optional[Event]:
    if event.type == pygame.QUIT:
        return em.WindowCloseEvent()
    elif event.type == pygame.KEYDOWN:
        if event.key == pygame.K_ESCAPE:
            return em.WindowCloseEvent()
        else:
            return em.KeyPressEvent(event.key, getattr(event, "mod", 0))
    elif event.type == pygame.KEYUP:
        return em.KeyReleaseEvent(event.key, getattr(event, "mod", 0))
    elif event.type == pygame.MOUSEBUTTONDOWN:
        return em.MouseClickEvent(event.button, event.pos)
    elif event.type == pygame.MOUSEBUTTONUP:
        return em.MouseReleaseEvent(event.button, event.pos)
    elif event.type == pygame.MOUSEMOTION:
        return em.MouseMoveEvent(event.pos)
    elif event.type == pygame.VIDEORESIZE:
        return em.WindowResizeEvent((event.w, event.h))

    return None


def update_input(state: State, event: Event):
    """Fold an input event into the keyboard and mouse resources, if present."""
    if isinstance(event, em.KeyEvent) and state.has(KeyboardState):
        with state.get(ResMut[KeyboardState]) as keyboard:
            keyboard.value.update_key(event.key, isinstance(event, em.KeyPressEvent))
            keyboard.value.update_modifiers(event.mod)

    if not state.has(MouseState):
        return

    with state.get(ResMut[MouseState]) as mouse:
        if isinstance(event, em.MouseMoveEvent):
            mouse.value.update_position(event.pos)
        elif isinstance(event, em.MouseButtonEvent):
            mouse.value.update_position(event.pos)
            mouse.value.update_button(event.button, isinstance(event, em.MouseClickEvent))
        elif isinstance(event, em.WindowResizeEvent):
            mouse.value.update_window_size(*event.new_size)


def begin_frame(renderer: ResMut[Renderer]):
    renderer.value.clear()


def end_frame(renderer: ResMut[Renderer]):
    renderer.value.show()


class WindowModule(Module):
    """
    Drives an App from a pygame window.

    Config keys: "size", "title", "fps" (0 runs uncapped) and "resizable".
    """

    def __init__(self, config: Optional[dict] = None):
        config = config or {}
        self.size = config.get("size", (800, 600))
        self.title = config.get("title", "Application")
        self.fps = config.get("fps", 60)
        self.resizable = config.get("resizable", False)

    def configure(self, app: App):
        app.add_resource(EventBus())
        app.add_resource(KeyboardState())
        app.add_resource(MouseState(self.size))
        app.add_resource(Time())

        app.add_handler(PreRender, begin_frame)
        app.add_handler(PostRender, end_frame)

        app.set_runner(self.run)

    def open(self, app: App):
        pygame.init()

        flags = pygame.RESIZABLE if self.resizable else 0
        screen = pygame.display.set_mode(self.size, flags)
        pygame.display.set_caption(self.title)

        app.add_resource(Window(screen, self.title))
        app.add_resource(Renderer(screen))
        logger.info("Opened window %r (%dx%d)", self.title, *self.size)

    def on_event(self, app: App, state: State, event: Event):
        if isinstance(event, em.WindowCloseEvent):
            app.exit()

        if state.has(EventBus):
            with state.get(ResMut[EventBus]) as bus:
                bus.value.write(event)

        update_input(state, event)

    def process_events(self, app: App):
        with app.locked() as state:
            for event in pygame.event.get():
                mapped_event = map_event(event)
                if mapped_event:
                    self.on_event(app, state, mapped_event)

    def run(self, app: App):
        self.open(app)
        clock = pygame.time.Clock()

        try:
            app.run_schedule(PreInit)
            app.run_schedule(Init)
            app.execute_commands()

            while app.running:
                dt = clock.tick(self.fps) / 1000.0
                app.tick_time(dt)

                self.process_events(app)
                if not app.running:
                    break

                app.run_schedule(Update)
                app.run_schedule(PreRender)
                app.run_schedule(Render)
                app.run_schedule(PostRender)
                app.run_post_loop()
        finally:
            pygame.quit()
