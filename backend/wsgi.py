try:
    from backend.rajamantri.server import create_app
except ImportError:  # pragma: no cover
    from rajamantri.server import create_app

app, socketio = create_app()
