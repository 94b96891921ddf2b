import os


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "*")

    # Reverse proxy headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

    # Game
    ROOM_CODE_LENGTH = int(os.environ.get("ROOM_CODE_LENGTH", "5"))
    NAME_MAX_LENGTH = int(os.environ.get("NAME_MAX_LENGTH", "20"))
    CHAT_MAX_LENGTH = int(os.environ.get("CHAT_MAX_LENGTH", "200"))
