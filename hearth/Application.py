import logging
import threading
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Callable, Optional

from hearth.Access import ResMut
from hearth.Errors import HearthError
from hearth.EventManager import EventBus
from hearth.Scheduler import Scheduler, ScheduleLabel
from hearth.State import State
from hearth.Time import Time

logger = logging.getLogger(__name__)


class PreInit(ScheduleLabel):
    """Runs once, before Init."""


class Init(ScheduleLabel):
    """Runs once when the app starts."""


class Update(ScheduleLabel):
    """Runs once per frame."""


class PreRender(ScheduleLabel):
    pass


class Render(ScheduleLabel):
    pass


class PostRender(ScheduleLabel):
    pass


class Commands:
    """
    Deferred changes to the app state.

    A handler cannot add resources to the state it is borrowing from, so it
    records them here instead; the app merges them in once the current
    schedule has finished, which makes them visible from the next schedule on.
    """

    def __init__(self):
        self.state = State()
        self.exit_requested = False

    def __len__(self):
        return len(self.state)

    def add_resource(self, resource, as_type=None):
        self.state.add(resource, as_type)
        return self

    def exit(self):
        self.exit_requested = True

    def take(self):
        pending, self.state = self.state, State()
        exit_requested, self.exit_requested = self.exit_requested, False
        return pending, exit_requested


class Module(ABC):
    @abstractmethod
    def configure(self, app: "App"):
        """Register the module's resources and handlers with `app`."""
        pass


def default_runner(app: "App"):
    """Headless loop: PreInit and Init once, then Update every frame."""
    app.run_schedule(PreInit)
    app.run_schedule(Init)
    app.execute_commands()

    last = time.perf_counter()
    while app.running:
        now = time.perf_counter()
        app.tick_time(now - last)
        last = now

        app.run_schedule(Update)
        app.run_post_loop()


class App:
    def __init__(self, config: Optional[dict] = None):
        self.config = config or {}
        self.max_frames = self.config.get("max_frames")

        self.state = State()
        self.scheduler = Scheduler()
        self.runner: Callable[["App"], None] = default_runner

        self.frames = 0
        self.running = False
        self._lock = threading.RLock()

    @contextmanager
    def locked(self):
        """Hold the app lock and yield its state, for use from other threads."""
        with self._lock:
            yield self.state

    def set_runner(self, runner: Callable[["App"], None]):
        self.runner = runner

    def add_resource(self, resource, as_type=None):
        with self._lock:
            self.state.add(resource, as_type)
        return self

    def add_handler(self, label, handler, params=None):
        with self._lock:
            self.scheduler.add_handler(label, handler, params)
        return self

    def add_module(self, module: Module):
        logger.debug("Configuring module %s", type(module).__name__)
        module.configure(self)
        return self

    def run_schedule(self, label):
        with self._lock:
            try:
                self.scheduler.run(label, self.state)
            except HearthError as exc:
                logger.critical("Schedule %s aborted: %s", getattr(label, "__name__", label), exc)
                raise

    def tick_time(self, dt: float):
        with self._lock:
            if self.state.has(Time):
                with self.state.get(ResMut[Time]) as clock:
                    clock.value.tick(dt)

    def execute_commands(self):
        with self._lock:
            if not self.state.has(Commands):
                return

            with self.state.get(ResMut[Commands]) as commands:
                pending, exit_requested = commands.value.take()

            if len(pending):
                logger.debug("Applying %d deferred resources", len(pending))
            self.state.merge(pending)

        if exit_requested:
            self.exit()

    def run_post_loop(self):
        self.execute_commands()

        with self._lock:
            if self.state.has(EventBus):
                with self.state.get(ResMut[EventBus]) as bus:
                    bus.value.clear()

        self.frames += 1
        if self.max_frames is not None and self.frames >= self.max_frames:
            logger.info("Frame limit reached (%d)", self.max_frames)
            self.exit()

    def exit(self):
        if self.running:
            logger.info("Exit requested at frame %d", self.frames)
        self.running = False

    def run(self):
        with self._lock:
            for default in (Commands, EventBus, Time):
                if not self.state.has(default):
                    self.state.add(default())

        self.frames = 0
        self.running = True
        logger.info(
            "App starting with %d resources and %d schedules",
            len(self.state),
            len(self.scheduler.schedules),
        )

        try:
            self.runner(self)
        finally:
            self.running = False

        logger.info("App stopped after %d frames", self.frames)
