# app.py - mock chat session backend
from flask import Flask
from flask_cors import CORS

import config
from config import logger
from routes import api
from storage import SessionStore


def create_app(**overrides):
    """Build the Flask app; keyword overrides win over the environment."""
    responder = overrides.pop("responder", None)

    app = Flask(__name__)
    app.config["DATA_DIR"] = config.DATA_DIR
    app.config["ALLOWED_ORIGIN"] = config.ALLOWED_ORIGIN
    app.config.update(overrides)

    CORS(app, resources={r"/*": {"origins": app.config["ALLOWED_ORIGIN"]}})

    store = SessionStore(app.config["DATA_DIR"], responder=responder)
    try:
        store.ensure_data_files()
    except OSError:
        logger.exception("❌ Failed to ensure data files in %s", app.config["DATA_DIR"])
        raise
    app.extensions["session_store"] = store

    app.register_blueprint(api)
    return app


# ---------- Run ----------
if __name__ == "__main__":
    # For local testing only; in production use gunicorn: `gunicorn 'app:create_app()' --bind 0.0.0.0:$PORT`
    app = create_app()
    logger.info("Mock API server running on port %s", config.PORT)
    app.run(host=config.HOST, port=config.PORT)
