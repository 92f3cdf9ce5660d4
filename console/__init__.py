"""
Package: console
Create and configure the Flask app, logging, and the in-memory console state
"""

from flask import Flask
from console import config
from console.common import log_handlers

# -----------------------------------------------------------------------------
# Create ONE global Flask app so `from console import app` gets the instance
# with all routes registered; create_app() returns the same app for tests
# -----------------------------------------------------------------------------
app = Flask(__name__)
app.config.from_object(config)

# Load the users and payments the console starts with
from console.coordinator import coordinator  # pylint: disable=wrong-import-position
coordinator.init_app(app)

with app.app_context():
    # Import after the app exists so @app.route binds to it
    from console import routes  # noqa: F401  pylint: disable=unused-import, wrong-import-position
    from console.common import error_handlers, cli_commands  # noqa: F401  pylint: disable=unused-import, wrong-import-position

    log_handlers.init_logging(app, "gunicorn.error")

    app.logger.info(70 * "*")
    app.logger.info("  A D M I N   C O N S O L E   S E R V I C E   I N I T  ".center(70, "*"))
    app.logger.info(70 * "*")


def create_app():
    """Factory-style accessor to the (already created) global app."""
    return app
