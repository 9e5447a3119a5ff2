"""
Configuration Management System for the GetGrip admin dashboard

Centralized configuration with a 4-tier precedence hierarchy:
environment → project → user → system defaults.
"""

import logging
import os
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_DIR = Path(__file__).resolve().parent.parent / "config" / "settings"


class ValidationLevel(Enum):
    """Configuration validation strictness levels"""
    STRICT = "strict"      # Fail fast on validation errors
    LENIENT = "lenient"    # Log warnings, use defaults


class ApiConfig(BaseModel):
    """Backend REST API connection"""
    model_config = ConfigDict(extra='forbid')

    base_url: str = Field(default="http://localhost:5001/api", description="REST API base URL")
    uploads_base_url: str = Field(default="http://localhost:5001/uploads", description="Public URL prefix for stored files")
    timeout: float = Field(default=30.0, ge=1.0, le=300.0, description="Request timeout (seconds)")


class UploadConfig(BaseModel):
    """File upload widget settings"""
    model_config = ConfigDict(extra='forbid')

    max_size_mb: int = Field(default=10, ge=1, le=100, description="Per-file size limit in MiB")
    accept: list[str] = Field(
        default_factory=lambda: ["png", "jpg", "jpeg", "webp", "gif", "svg", "pdf", "mp4"],
        description="Accepted file extensions",
    )

    @property
    def max_size_bytes(self) -> int:
        return self.max_size_mb * 1024 * 1024


class PaginationConfig(BaseModel):
    """Page sizes for paginated views"""
    model_config = ConfigDict(extra='forbid')

    visitor_page_size: int = Field(default=10, ge=1, le=100, description="Unique visitors per page")
    detail_page_size: int = Field(default=10, ge=1, le=100, description="Visits per page in the detail view")
    product_list_limit: int = Field(default=100, ge=1, le=1000, description="Products fetched for list views")


class StorageConfig(BaseModel):
    """Durable client-side session storage"""
    model_config = ConfigDict(extra='forbid')

    session_file: str = Field(default="data/session.json", description="Token/user key-value file")


class UIConfig(BaseModel):
    """UI Configuration"""
    model_config = ConfigDict(extra='forbid')

    page_title: str = Field(default="GetGrip Admin", description="Browser tab title")
    layout: str = Field(default="wide", description="Streamlit page layout")
    recent_products: int = Field(default=5, ge=1, le=20, description="Products shown on the dashboard")


class SystemConfig(BaseModel):
    """Complete system configuration"""
    model_config = ConfigDict(extra='forbid')

    api: ApiConfig = Field(default_factory=ApiConfig)
    upload: UploadConfig = Field(default_factory=UploadConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    ui: UIConfig = Field(default_factory=UIConfig)

    # Metadata
    schema_version: int = Field(default=1, description="Configuration schema version")


# env var -> (section, key, type)
ENV_MAP: Dict[str, tuple[str, str, type]] = {
    'GRIP_API_BASE_URL': ('api', 'base_url', str),
    'GRIP_UPLOADS_BASE_URL': ('api', 'uploads_base_url', str),
    'GRIP_API_TIMEOUT': ('api', 'timeout', float),
    'GRIP_UPLOAD_MAX_SIZE_MB': ('upload', 'max_size_mb', int),
    'GRIP_SESSION_FILE': ('storage', 'session_file', str),
    'GRIP_VISITOR_PAGE_SIZE': ('pagination', 'visitor_page_size', int),
    'GRIP_DETAIL_PAGE_SIZE': ('pagination', 'detail_page_size', int),
}


class ConfigManager:
    """Centralized configuration manager with 4-tier precedence hierarchy"""

    def __init__(self, config_dir: Optional[Path] = None, env_file: Optional[Path] = None):
        self.config_dir = Path(config_dir) if config_dir else DEFAULT_CONFIG_DIR
        self._system_config: Optional[SystemConfig] = None
        self._user_config: Optional[Dict[str, Any]] = None
        self._project_config: Optional[Dict[str, Any]] = None

        if env_file is not None:
            load_dotenv(dotenv_path=env_file)

    def _load_yaml_file(self, file_path: Path) -> Dict[str, Any]:
        """Load YAML configuration file"""
        if not file_path.exists():
            return {}

        try:
            with open(file_path, 'r', encoding='utf-8') as f:
                return yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Failed to load {file_path}: {e}")
            return {}

    def _load_system_defaults(self) -> SystemConfig:
        """Load system default configuration"""
        if self._system_config is None:
            defaults_dict = self._load_yaml_file(self.config_dir / "defaults.yaml")

            try:
                self._system_config = SystemConfig(**defaults_dict)
            except ValidationError as e:
                logger.warning(f"System defaults validation failed: {e}")
                self._system_config = SystemConfig()

        return self._system_config

    def _load_user_config(self) -> Dict[str, Any]:
        """Load user-level configuration"""
        if self._user_config is None:
            self._user_config = self._load_yaml_file(self.config_dir / "user.yaml")
        return self._user_config

    def _load_project_config(self) -> Dict[str, Any]:
        """Load project-specific configuration"""
        if self._project_config is None:
            self._project_config = self._load_yaml_file(self.config_dir / "project.yaml")
        return self._project_config

    def _merge_configs(self) -> Dict[str, Any]:
        """Merge configurations with precedence: env → project → user → system"""
        merged = self._load_system_defaults().model_dump()
        self._deep_merge(merged, self._load_user_config())
        self._deep_merge(merged, self._load_project_config())
        self._deep_merge(merged, self._get_env_overrides())
        return merged

    def _deep_merge(self, base: Dict[str, Any], updates: Dict[str, Any]) -> None:
        """Deep merge configuration dictionaries"""
        for key, value in updates.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _get_env_overrides(self) -> Dict[str, Any]:
        """Extract configuration overrides from environment variables"""
        overrides: Dict[str, Any] = {}
        for env_key, (section, config_key, cast) in ENV_MAP.items():
            value = os.getenv(env_key)
            if value is None:
                continue
            try:
                converted = cast(value)
            except ValueError:
                logger.warning(f"Ignoring {env_key}={value!r}: not a valid {cast.__name__}")
                continue
            overrides.setdefault(section, {})[config_key] = converted

        return overrides

    def get_config(self, validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
        """Get merged configuration with validation"""
        merged_config = self._merge_configs()

        try:
            return SystemConfig(**merged_config)
        except ValidationError as e:
            if validation_level == ValidationLevel.STRICT:
                raise ValueError(f"Configuration validation failed: {e}") from e
            logger.warning(f"Configuration validation failed, using defaults: {e}")
            return SystemConfig()


# Global instance
_config_manager: Optional[ConfigManager] = None


def get_config_manager(config_dir: Optional[Path] = None) -> ConfigManager:
    """Get global configuration manager instance"""
    global _config_manager
    if _config_manager is None or config_dir is not None:
        _config_manager = ConfigManager(config_dir)
    return _config_manager


def get_config(validation_level: ValidationLevel = ValidationLevel.STRICT) -> SystemConfig:
    """Get current system configuration"""
    return get_config_manager().get_config(validation_level)
