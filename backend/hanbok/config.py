from pydantic_settings import BaseSettings
from functools import lru_cache
from pathlib import Path


class Settings(BaseSettings):
    openai_api_key: str = ""  # Set via OPENAI_API_KEY env var
    lesson_model: str = "gpt-4o"
    cheat_sheet_model: str = "o4-mini"
    analysis_model: str = "gpt-4o"
    llm_temperature: float = 0.7
    llm_timeout_seconds: float = 120.0

    # Fixed lesson copy
    hook_prefix: str = "💡 1-Minute {language}:"
    cta_text: str = "Need more? Use HanbokStudy for vocab and grammar breakdowns!"

    # Output + assets
    output_dir: str = "output"
    assets_dir: str = "assets"
    fonts_subdir: str = "fonts"
    hook_slides_subdir: str = "hook-slides"
    content_slides_subdir: str = "content-slides"
    cta_slides_subdir: str = "cta-slides"
    cheat_sheet_hook_subdir: str = "cheat-sheet-hook"
    cheat_sheet_backgrounds_subdir: str = "cheat-sheet-backgrounds"

    # Rasterizer pool
    render_concurrency: int = 2
    render_timeout_seconds: float = 60.0

    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"

    host: str = "0.0.0.0"
    port: int = 3001

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def output_path(self) -> Path:
        return Path(self.output_dir)

    @property
    def assets_path(self) -> Path:
        return Path(self.assets_dir)


@lru_cache()
def get_settings() -> Settings:
    return Settings()
