import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file) or dict()
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./finly.db")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    AUTO_CREATE_TABLES = bool(data.get("AUTO_CREATE_TABLES", True))

    # Session tokens (RS256): inline PEM wins over the key file path
    JWT_PRIVATE_KEY = data.get("JWT_PRIVATE_KEY", "")
    JWT_PUBLIC_KEY = data.get("JWT_PUBLIC_KEY", "")
    JWT_PRIVATE_KEY_PATH = data.get("JWT_PRIVATE_KEY_PATH", os.path.join(ROOT_PATH, "keys", "private.pem"))
    JWT_PUBLIC_KEY_PATH = data.get("JWT_PUBLIC_KEY_PATH", os.path.join(ROOT_PATH, "keys", "public.pem"))
    ACCESS_TOKEN_TTL_MINUTES = int(data.get("ACCESS_TOKEN_TTL_MINUTES", 15))
    REFRESH_TOKEN_TTL_DAYS = int(data.get("REFRESH_TOKEN_TTL_DAYS", 1))

    # Password reset tokens (HS256)
    RESET_TOKEN_SECRET = data.get("RESET_TOKEN_SECRET", "")
    RESET_TOKEN_TTL_MINUTES = int(data.get("RESET_TOKEN_TTL_MINUTES", 30))
    RESET_PASSWORD_LINK_BASE = data.get(
        "RESET_PASSWORD_LINK_BASE", "http://localhost:8000/password/reset"
    )

    GOOGLE_OAUTH_CLIENT_ID = data.get("GOOGLE_OAUTH_CLIENT_ID", "")
