# 🧰 variant_engine/shared/utils/__init__.py
"""
🧰 Пакет спільних утиліт: логування та незмінні структури.
"""

from __future__ import annotations

# 🔠 Логування
from .logger import (
    LOG_NAME,
    get_logger,
    init_logging,
    init_logging_from_config,
)

# 🧊 Незмінні структури
from .immutables import FrozenMapping, empty_mapping, freeze, is_frozen_mapping, thaw

# ================================
# 📦 ЕКСПОРТ ПАКЕТУ
# ================================
__all__ = [
    # logging
    "LOG_NAME",
    "get_logger",
    "init_logging",
    "init_logging_from_config",
    # immutables
    "FrozenMapping",
    "empty_mapping",
    "freeze",
    "is_frozen_mapping",
    "thaw",
]
