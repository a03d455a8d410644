import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()  # Load from .env file

PACKAGE_ROOT = Path(__file__).resolve().parent.parent


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./database/diary.db")

# Session & Auth
SESSION_SECRET = os.getenv("SESSION_SECRET", "your-super-secret-key-change-in-production")
SESSION_COOKIE = os.getenv("SESSION_COOKIE", "diary_session")
SESSION_MAX_AGE = int(os.getenv("SESSION_MAX_AGE", str(7 * 24 * 60 * 60)))
BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))

# OpenAI
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_CHAT_MODEL = os.getenv("OPENAI_CHAT_MODEL", "gpt-3.5-turbo")

# Files
UPLOAD_DIR = Path(os.getenv("UPLOAD_DIR", "./uploads"))
PUBLIC_DIR = Path(os.getenv("PUBLIC_DIR", str(PACKAGE_ROOT / "public")))
MAX_IMAGE_BYTES = int(os.getenv("MAX_IMAGE_BYTES", str(5 * 1024 * 1024)))
MAX_IMAGES_PER_UPLOAD = 5

# Notifications
NOTIFICATIONS_ENABLED = _env_bool("NOTIFICATIONS_ENABLED", "true")
APP_NAME = "Personal Growth Diary"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
