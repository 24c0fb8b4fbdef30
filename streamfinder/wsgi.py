"""WSGI entry point for the application."""
import logging

from streamfinder import app

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

application = app

if __name__ == "__main__":
    application.run()
