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
    ENVIRONMENT = data.get("ENVIRONMENT", "development")
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./hrms_auth.db")
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", ["http://localhost:3000"])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")

    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    ACCESS_TOKEN_EXPIRE_MINUTES = int(data.get("ACCESS_TOKEN_EXPIRE_MINUTES", 30))
    REFRESH_TOKEN_EXPIRE_DAYS = int(data.get("REFRESH_TOKEN_EXPIRE_DAYS", 7))
    BCRYPT_ROUNDS = int(data.get("BCRYPT_ROUNDS", 12))

    REFRESH_COOKIE_NAME = data.get("REFRESH_COOKIE_NAME", "refreshToken")
    COOKIE_PATH = data.get("COOKIE_PATH", "/api/auth")

    SESSION_CLEANUP_ENABLED = bool(data.get("SESSION_CLEANUP_ENABLED", True))
    SESSION_CLEANUP_INTERVAL_SECONDS = int(data.get("SESSION_CLEANUP_INTERVAL_SECONDS", 1800))
    DELETE_OLD_REVOKED_SESSIONS = bool(data.get("DELETE_OLD_REVOKED_SESSIONS", True))
    REVOKED_SESSION_RETENTION_DAYS = int(data.get("REVOKED_SESSION_RETENTION_DAYS", 90))

    @classmethod
    def is_production(cls) -> bool:
        return cls.ENVIRONMENT == "production"
