import tempfile

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    ipfs_gateway_url: str = "https://gateway.pinata.cloud"
    fetch_timeout_seconds: int = 30
    temp_dir: str = tempfile.gettempdir()

    pdf_engine: str = "pdfplumber"
    pdf_text_min_chars: int = 100
    pdf_render_scale: float = 2.0

    ocr_language: str = "eng"
    ocr_config: str = "--oem 1 --psm 1 -c preserve_interword_spaces=1"

    min_text_chars: int = 20
    low_text_warning_chars: int = 50

    vision_provider: str = "gemini"
    vision_api_key: str = ""
    vision_model_name: str = "gemini-2.0-flash"
    vision_base_url: str = ""
    vision_timeout_seconds: int = 60
    vision_temperature: float = 0.4

    @field_validator("pdf_render_scale")
    @classmethod
    def _render_scale_at_least_two(cls, value: float) -> float:
        if value < 2.0:
            raise ValueError("pdf_render_scale must be >= 2.0")
        return value
