from __future__ import annotations

import os
import sys

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config
from .game.chat import ChatLog
from .game.registry import RoomRegistry
from .realtime.channels import SocketIOChannels
from .realtime.coordinator import SessionCoordinator
from .realtime.handlers import register_socketio_handlers
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp


def create_app(config_overrides: dict | None = None) -> tuple[Flask, SocketIO]:
    app = Flask(__name__)
    app.config.from_object(Config)
    if config_overrides:
        app.config.update(config_overrides)

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    async_mode = app.config.get("SOCKETIO_ASYNC_MODE") or os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()
    if not async_mode:
        # Default choice:
        # - Windows: threading (eventlet has known compatibility issues on newer Python)
        # - Python >= 3.13: threading (safer default)
        # - Otherwise: eventlet
        if sys.platform.startswith("win") or sys.version_info >= (3, 13):
            async_mode = "threading"
        else:
            async_mode = "eventlet"

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=async_mode,
    )

    coordinator = SessionCoordinator(
        SocketIOChannels(socketio),
        registry=RoomRegistry(code_length=app.config["ROOM_CODE_LENGTH"]),
        chat_log=ChatLog(
            message_max_length=app.config["CHAT_MAX_LENGTH"],
            name_max_length=app.config["NAME_MAX_LENGTH"],
        ),
        name_max_length=app.config["NAME_MAX_LENGTH"],
    )
    app.extensions["rajamantri"] = coordinator

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")

    register_socketio_handlers(socketio, coordinator)

    return app, socketio
