"""Application factory and app-wide configuration."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from backend.app.api.routes import api_bp
from backend.config import load_config
from backend.domain.asset_store import AssetStore


def create_app(config: Optional[Mapping[str, Any]] = None, store: Optional[AssetStore] = None) -> Flask:
    """Build the Flask app instance."""
    app = Flask(__name__)
    app.config.update(load_config(config))

    level = app.config["LOG_LEVEL"]
    app.logger.setLevel(level)
    logging.getLogger("backend").setLevel(level)

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    if store is None:
        store = AssetStore(categories=app.config["ASSET_CATEGORIES"])
    app.extensions["asset_store"] = store
    app.register_blueprint(api_bp, url_prefix="/api")
    return app
