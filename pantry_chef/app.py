import logging

from flask import Flask
from flask_cors import CORS

from .config import Config
from .extensions import limiter
from .routes import blueprints
from .spoonacular_client import EXTENSION_KEY, create_client


def create_app(config=None):
    """Application factory; ``config`` is a Config subclass (defaults to Config)."""
    config = config or Config
    if not config.TESTING:
        config.validate()

    logging.basicConfig(
        level=getattr(logging, config.LOG_LEVEL, logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    app = Flask(__name__)
    app.config.from_object(config)

    # Configure CORS with specific origins
    CORS(app, resources={r"/*": {"origins": app.config["ALLOWED_ORIGINS"]}})
    limiter.init_app(app)

    app.extensions[EXTENSION_KEY] = create_client(app.config)

    for blueprint in blueprints:
        app.register_blueprint(blueprint)

    return app
