"""
Core configuration management
"""
from pathlib import Path
from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """collectd_wire settings"""

    # Paths
    project_root: Path = Path(__file__).parent.parent
    log_dir: Path = project_root / "logs"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"  # "json" or "console"
    log_to_file: bool = True

    # Decoding
    max_datagram_bytes: int = 65535  # collectd's own receive buffer ceiling
    decode_legacy_numbers: bool = False  # also decode TIME/INTERVAL/SEVERITY

    @field_validator("max_datagram_bytes")
    @classmethod
    def _positive_limit(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("max_datagram_bytes must be positive")
        return value

    @field_validator("log_format")
    @classmethod
    def _known_format(cls, value: str) -> str:
        value = value.lower()
        if value not in ("json", "console"):
            raise ValueError(f"Unknown log format: {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        value = value.upper()
        if value not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {value}")
        return value

    class Config:
        env_prefix = "COLLECTD_WIRE_"
        env_file = ".env"


settings = Settings()
