"""Flask application factory."""

import json
import os
from flask import Flask
from flask_cors import CORS

DEFAULT_REPORT_CONFIG = {
    "outputDir": "reports",
    "trackUnfinished": False,
    "pageSize": 100
}


def _env_flag(name, default):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def load_report_config(app, config_path=None):
    """Load report settings from config file, then environment overrides."""
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(__file__), "..", "config", "report-config.json"
        )

    config = dict(DEFAULT_REPORT_CONFIG)

    if os.path.exists(config_path):
        try:
            with open(config_path, "r") as f:
                loaded = json.load(f)
                config.update(
                    {k: v for k, v in loaded.items() if k in DEFAULT_REPORT_CONFIG}
                )
                app.logger.info(f"Loaded report config from {config_path}")
        except (json.JSONDecodeError, IOError) as e:
            app.logger.warning(f"Failed to load report config: {e}")
    else:
        app.logger.info("No report-config.json found, using default report settings")

    config["outputDir"] = os.getenv("REPORT_OUTPUT_DIR", config["outputDir"])
    config["trackUnfinished"] = _env_flag("TRACK_UNFINISHED", config["trackUnfinished"])

    app.config["REPORT_CONFIG"] = config
    return config


def create_app(config_path=None):
    """Create and configure the Flask application."""
    app = Flask(__name__)

    # Enable CORS for frontend
    CORS(app, resources={
        r"/api/*": {
            "origins": ["http://localhost:5173", "http://127.0.0.1:5173"],
            "methods": ["GET", "POST", "OPTIONS"],
            "allow_headers": [
                "Content-Type",
                "X-Jira-Token", "X-Jira-Email", "X-Jira-Server"
            ]
        }
    })

    # Register blueprints
    from app.api import reports
    app.register_blueprint(reports.bp)

    load_report_config(app, config_path)

    # Health check endpoint
    @app.route("/health")
    def health():
        return {"status": "ok"}

    return app
