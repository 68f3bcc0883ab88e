import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Always load .env from the repository root (stable, regardless of CWD)
BASE_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=BASE_DIR / ".env", override=False)


def _env(name: str, default: str | None = None) -> str | None:
    v = os.getenv(name)
    return v if v and v.strip() else default


@dataclass(frozen=True)
class Settings:
    env: str = os.getenv("ENV", "local")

    # openai | ollama | heuristic
    provider: str = (os.getenv("STUDY_MATERIALS_PROVIDER", "openai") or "openai").strip().lower()

    openai_api_key: str | None = _env("OPENAI_API_KEY")
    openai_model: str = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
    openai_timeout_sec: float = float(os.getenv("OPENAI_TIMEOUT_SEC", "60"))

    ollama_base_url: str = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434")
    ollama_model: str = os.getenv("OLLAMA_MODEL", "qwen2.5:7b-instruct")
    ollama_timeout_sec: float = float(os.getenv("OLLAMA_TIMEOUT_SEC", "120"))

    # Transcript fetch
    youtube_timeout_sec: float = float(os.getenv("YOUTUBE_TIMEOUT_SEC", "30"))
    youtube_proxy_url: str | None = _env("YOUTUBE_PROXY_URL")
    youtube_default_language: str = os.getenv("YOUTUBE_DEFAULT_LANGUAGE", "en")

    # Uploads
    document_timeout_sec: float = float(os.getenv("DOCUMENT_TIMEOUT_SEC", "60"))
    max_upload_bytes: int = int(os.getenv("MAX_UPLOAD_BYTES", str(100 * 1024 * 1024)))

    log_level: str = os.getenv("STUDY_COPILOT_LOG_LEVEL", "INFO")
    log_dir: str | None = _env("STUDY_COPILOT_LOG_DIR")


settings = Settings()
