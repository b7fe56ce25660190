from hearth.Application import App
from hearth.Logging import configure_logging


def main(application: App):
    """
    Main entry point for the application.
    """
    configure_logging()

    # Run the main loop
    application.run()
