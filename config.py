import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    SECRET_KEY = os.getenv("SECRET_KEY", "livequiz-dev")
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///livequiz.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Pool sizing only applies to server databases; SQLite uses its own pools
    DB_POOL_SIZE = int(os.getenv("DB_POOL_SIZE", 5))
    DB_MAX_OVERFLOW = int(os.getenv("DB_MAX_OVERFLOW", 10))
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}
    if not SQLALCHEMY_DATABASE_URI.startswith("sqlite"):
        SQLALCHEMY_ENGINE_OPTIONS.update({
            "pool_size": DB_POOL_SIZE,
            "max_overflow": DB_MAX_OVERFLOW,
        })

    BASE_DIR = os.path.abspath(os.path.dirname(__file__))
    QUESTIONS_PATH = os.getenv("QUESTIONS_PATH", os.path.join(BASE_DIR, "data", "questions.json"))

    # Nominal round length, used for client timers and missing enter times
    ROUND_DURATION_SECONDS = int(os.getenv("ROUND_DURATION_SECONDS", 120))
    DISQUALIFICATION_IS_TERMINAL = _env_flag("DISQUALIFICATION_IS_TERMINAL", False)
    REJECT_LATE_SUBMISSIONS = _env_flag("REJECT_LATE_SUBMISSIONS", False)

    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_HISTORY_LIMIT = int(os.getenv("LOG_HISTORY_LIMIT", 1000))

    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", 5000))


class TestConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"
    SQLALCHEMY_ENGINE_OPTIONS = {}
    DISQUALIFICATION_IS_TERMINAL = False
    REJECT_LATE_SUBMISSIONS = False
    LOG_LEVEL = "DEBUG"
