from dotenv import load_dotenv
import os

load_dotenv()


def _flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


class Settings:
    # MongoDB
    MONGODB_URI: str = os.getenv("MONGODB_URI", "mongodb://localhost:27017/wordtrail")
    MONGODB_DB: str = os.getenv("MONGODB_DB", "wordtrail")
    MONGODB_COLLECTION: str = os.getenv("MONGODB_COLLECTION", "versions")
    MONGODB_TIMEOUT_MS: int = int(os.getenv("MONGODB_TIMEOUT_MS", "5000"))

    # App
    FRONTEND_URL: str = os.getenv("FRONTEND_URL", "http://localhost:3000")
    APP_ENV: str = os.getenv("APP_ENV", "development")
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "5000"))
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Versions
    SERIALIZE_SAVES: bool = _flag("SERIALIZE_SAVES")   # opt-in lock around read-latest/insert
    PREVIEW_CHARS: int = int(os.getenv("PREVIEW_CHARS", "140"))

settings = Settings()
