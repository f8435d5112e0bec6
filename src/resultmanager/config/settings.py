from dataclasses import dataclass
import os
from dotenv import load_dotenv


load_dotenv()


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    api_url: str = os.getenv("RESULTMANAGER_API_URL", "http://localhost:3001")

    students_path: str = os.getenv("RESULTMANAGER_STUDENTS_PATH", "students")
    sections_path: str = os.getenv("RESULTMANAGER_SECTIONS_PATH", "sections")
    results_path: str = os.getenv("RESULTMANAGER_RESULTS_PATH", "results")

    request_timeout: float = _float_env("RESULTMANAGER_REQUEST_TIMEOUT", 15.0)

    web_mode: bool = os.getenv("RESULTMANAGER_WEB", "0") == "1"
    port: int = int(os.getenv("PORT", "8550"))

    log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()


settings = Settings()
