"""
Configuration models and loaders.
"""
from typing import Optional
from pathlib import Path
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict
import tomli
from loguru import logger


class AppConfig(BaseModel):
    """Application configuration"""
    name: str = "DANFE HTML"
    version: str = "1.0.0"


class RenderConfig(BaseModel):
    """DANFE rendering configuration"""
    # IANA zone for the protocol time; empty means the machine's local zone
    timezone: str = ""
    template_path: Optional[Path] = None


class ProcessingConfig(BaseModel):
    """Batch processing configuration"""
    max_concurrent_files: int = Field(3, ge=1, le=10)


class ExportConfig(BaseModel):
    """Excel summary configuration"""
    excel_report: bool = False
    auto_fit_columns: bool = True
    freeze_header_row: bool = True


class Settings(BaseModel):
    """Complete application settings"""
    app: AppConfig = Field(default_factory=AppConfig)
    render: RenderConfig = Field(default_factory=RenderConfig)
    processing: ProcessingConfig = Field(default_factory=ProcessingConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)

    @classmethod
    def load_from_toml(cls, config_path: Path) -> "Settings":
        """Load settings from TOML file"""
        try:
            with open(config_path, "rb") as f:
                data = tomli.load(f)
            return cls(**data)
        except Exception as e:
            logger.warning(f"Failed to load config from {config_path}: {e}. Using defaults.")
            return cls()


class EnvironmentSettings(BaseSettings):
    """Environment variables"""
    log_level: str = "INFO"
    output_dir: str = "./output"
    danfe_timezone: Optional[str] = None

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    def resolve_timezone(self, settings: Settings) -> str:
        """Environment wins over the TOML value"""
        return self.danfe_timezone or settings.render.timezone
