# 🧾 variant_engine/config/settings.py
"""
🧾 Типізовані налаштування рушія, зібрані з `ConfigService`.

🔹 `EngineSettings` — мітки, позиційна політика, поріг low_stock, політика одного варіанта.
🔹 `load_settings()` — читає розділ `variants` і падає на некоректних значеннях одразу.
🔹 `bootstrap_logging()` — запускає логування за розділом `logging`.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування
from dataclasses import dataclass, field                            # 🧱 DTO налаштувань
from typing import Optional                                         # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.domain.variants.labels import AttributeLabels, PositionalPolicy
from variant_engine.domain.variants.normalizer import VariantNormalizer
from variant_engine.domain.variants.stock import DEFAULT_LOW_STOCK_THRESHOLD
from variant_engine.shared.utils.logger import LOG_NAME, init_logging_from_config
from .config_service import ConfigService

logger = logging.getLogger(f"{LOG_NAME}.config.settings")


@dataclass(frozen=True, slots=True)
class EngineSettings:
    """Незмінний набір налаштувань однієї інсталяції (або тенанта)."""

    labels: AttributeLabels = field(default_factory=AttributeLabels)
    policy: PositionalPolicy = field(default_factory=PositionalPolicy)
    low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD
    skip_single_variant: bool = True

    def __post_init__(self) -> None:
        if self.low_stock_threshold < 0:
            raise ValueError(f"low_stock_threshold не може бути відʼємним: {self.low_stock_threshold}")

    def make_normalizer(self) -> VariantNormalizer:
        return VariantNormalizer(labels=self.labels, policy=self.policy)


def load_settings(config: Optional[ConfigService] = None) -> EngineSettings:
    """
    Будує `EngineSettings` з розділу `variants` конфігурації.

    Args:
        config: Сервіс конфігурації (за замовчуванням — Singleton).

    Returns:
        EngineSettings: Провалідовані налаштування.
    """
    config = config or ConfigService()
    labels = AttributeLabels.from_mapping(config.get("variants.labels"))
    policy = PositionalPolicy.from_sequence(config.get("variants.positional_order"), labels)

    raw_threshold = config.get("variants.low_stock_threshold", DEFAULT_LOW_STOCK_THRESHOLD)
    try:
        threshold = int(raw_threshold)
    except (TypeError, ValueError):
        logger.error("❌ variants.low_stock_threshold не int: %r", raw_threshold)
        raise ValueError(f"Некоректний low_stock_threshold: {raw_threshold!r}")

    settings = EngineSettings(
        labels=labels,
        policy=policy,
        low_stock_threshold=threshold,
        skip_single_variant=bool(config.get("variants.skip_single_variant", True)),
    )
    logger.debug("🧾 EngineSettings: %s", settings)
    return settings


def bootstrap_logging(config: Optional[ConfigService] = None) -> logging.Logger:
    """
    Зчитує розділ `logging` конфігурації і запускає кореневий логер рушія.
    Викликається застосунком один раз на старті.
    """
    config = config or ConfigService()
    node = config.get("logging", {}) or {}
    return init_logging_from_config(node)


__all__ = ["EngineSettings", "load_settings", "bootstrap_logging"]
