import logging

import hearth
from hearth import App, Init, Module, Res, ResMut, Update

logger = logging.getLogger(__name__)

app_config = {
    "max_frames": 12,
}


class Greeting:
    def __init__(self, text):
        self.text = text


class CounterModule(Module):
    def configure(self, app):
        (
            app.add_resource(0, as_type=int)
            .add_resource(Greeting("Hello from CounterModule!"))
            .add_handler(Init, self.init)
            .add_handler(Update, self.update)
        )

    @staticmethod
    def init(greeting: Res[Greeting]):
        logger.info(greeting.text)

    @staticmethod
    def update(i: ResMut[int]):
        if i.value < 10:
            logger.info("CounterModule update! %d", i.value)
            i.value += 1


if __name__ == "__main__":
    app = App(app_config)
    app.add_module(CounterModule())
    hearth.main(app)
