# result_sheet/core/config.py

from pathlib import Path

from dotenv import load_dotenv
from pydantic_settings import BaseSettings

load_dotenv()


class Settings(BaseSettings):
    # MongoDB
    MONGO_URI: str = "mongodb://localhost:27017"
    MONGO_DB: str = "result_sheets"
    RESULTS_COLLECTION: str = "results"

    # only "development" exposes error details in 500 responses
    ENVIRONMENT: str = "production"

    # Tesseract
    TESSERACT_CMD: str | None = None
    OCR_LANG: str = "eng"
    OCR_PAGE_SEG_MODE: int = 6

    # Normalizer cut-off (pixels >= threshold become white)
    BINARY_THRESHOLD: int = 128

    # Where debug images / dumps are written
    SAVE_DEBUG: bool = False
    DEBUG_ROOT: str = "debug_out"

    MAX_UPLOAD_BYTES: int = 10 * 1024 * 1024

    class Config:
        env_prefix = "RESULT_SHEET_"
        case_sensitive = False


CONFIG = Settings()


def debug_root() -> str:
    p = Path(CONFIG.DEBUG_ROOT)
    p.mkdir(parents=True, exist_ok=True)
    return str(p)


def is_development() -> bool:
    return CONFIG.ENVIRONMENT.lower() == "development"
