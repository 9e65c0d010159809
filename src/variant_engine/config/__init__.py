# ⚙️ variant_engine/config/__init__.py
"""⚙️ Конфігурація рушія: `ConfigService` (YAML + .env) та типізовані `EngineSettings`."""

from .config_service import ConfigService
from .settings import EngineSettings, bootstrap_logging, load_settings

__all__ = ["ConfigService", "EngineSettings", "bootstrap_logging", "load_settings"]
