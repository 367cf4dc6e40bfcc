import os
from dotenv import load_dotenv

# Load .env from the backend directory
load_dotenv(os.path.join(os.path.dirname(__file__), "..", "..", ".env"))


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


# Database: stored in backend/data/
BASE_DIR = os.path.dirname(os.path.abspath(__file__))
BACKEND_DIR = os.path.abspath(os.path.join(BASE_DIR, "..", ".."))

DATABASE_PATH: str = os.getenv(
    "DATABASE_PATH",
    os.path.join(BACKEND_DIR, "data", "app.db"),
)

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").strip().upper()

# Advisory (generative text) backend: OpenRouter speaks the OpenAI protocol
AI_ENABLED: bool = _env_flag("AI_ENABLED")
OPENROUTER_API_KEY: str = os.getenv("OPENROUTER_API_KEY", "").strip().replace(" ", "")
OPENROUTER_API_URL: str = os.getenv("OPENROUTER_API_URL", "https://openrouter.ai/api/v1").strip()
OPENROUTER_MODEL: str = os.getenv("OPENROUTER_MODEL", "google/gemini-2.0-flash-lite-001").strip()
AI_TIMEOUT_SECONDS: float = float(os.getenv("AI_TIMEOUT_SECONDS", "12"))

# Recommendation tuning
RECOMMENDATION_STRATEGY: str = os.getenv("RECOMMENDATION_STRATEGY", "database").strip().lower()
GENERATED_QUESTION_COUNT: int = int(os.getenv("GENERATED_QUESTION_COUNT", "6"))
RANKED_QUESTION_LIMIT: int = int(os.getenv("RANKED_QUESTION_LIMIT", "8"))
RECOMMENDATION_WORKERS: int = int(os.getenv("RECOMMENDATION_WORKERS", "4"))
