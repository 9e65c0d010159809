# 📦 variant_engine/domain/variants/stock.py
"""
📦 stock.py — статус запасу варіанта для UI та перевірки перед підтвердженням.

Навіщо Enum, а не Optional[int]?
- `None` (запас не відстежується) не схлопується в 0 (немає в наявності).
- Один поріг «залишилось N» для всіх поверхонь UI.
- Рушій зіставлення запас не враховує; це політика викликача після `resolve`.
"""

from __future__ import annotations

# 🔠 Стандартні імпорти
import logging                                                        # 🧾 Логування
from enum import Enum, unique                                         # 🧱 Enum з гарантією унікальності
from typing import Optional                                           # 🧰 Типи

# 🧩 Внутрішні модулі
from variant_engine.shared.utils.logger import LOG_NAME
from .entities import RawVariant

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.stock")

DEFAULT_LOW_STOCK_THRESHOLD = 5                                       # 🔢 «Залишилось N» при N < 5


@unique
class StockStatus(str, Enum):
    """Чотиристановий статус запасу."""

    IN_STOCK = "in_stock"            # ✅ Достатньо на складі
    LOW_STOCK = "low_stock"          # ⚠️ Залишилось мало (менше порогу)
    OUT_OF_STOCK = "out_of_stock"    # 🚫 Купити не можна
    UNTRACKED = "untracked"          # ❔ Запас не відстежується (купувати можна)

    def __str__(self) -> str:
        return self.value

    @property
    def is_purchasable(self) -> bool:
        """False лише для OUT_OF_STOCK."""
        return self is not StockStatus.OUT_OF_STOCK

    def emoji(self) -> str:
        """Піктограма статусу для UI."""
        return {
            StockStatus.IN_STOCK: "✅",
            StockStatus.LOW_STOCK: "⚠️",
            StockStatus.OUT_OF_STOCK: "🚫",
        }.get(self, "❔")

    @classmethod
    def from_stock(cls, stock: Optional[int], *, low_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD) -> "StockStatus":
        """
        None → UNTRACKED, <= 0 → OUT_OF_STOCK, < low_threshold → LOW_STOCK, інакше IN_STOCK.
        """
        if stock is None:
            return cls.UNTRACKED
        if stock <= 0:
            return cls.OUT_OF_STOCK
        if stock < low_threshold:
            return cls.LOW_STOCK
        return cls.IN_STOCK

    @classmethod
    def priority(cls, status: "StockStatus") -> int:
        """
        Пріоритет для сортувань (менше — «краще»):
          IN_STOCK(0) < LOW_STOCK(1) < UNTRACKED(2) < OUT_OF_STOCK(3)
        """
        order = (cls.IN_STOCK, cls.LOW_STOCK, cls.UNTRACKED, cls.OUT_OF_STOCK)
        return order.index(status)


def stock_status(
    variant: RawVariant,
    *,
    current_stock: Optional[int] = None,
    low_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD,
) -> StockStatus:
    """
    Статус запасу варіанта; `current_stock` (свіже значення від складу)
    має пріоритет над знімком у `variant.stock`.
    """
    stock = current_stock if current_stock is not None else variant.stock
    status = StockStatus.from_stock(stock, low_threshold=low_threshold)
    logger.debug("📦 stock_status | %s stock=%s → %s", variant.id, stock, status.value)
    return status


__all__ = ["DEFAULT_LOW_STOCK_THRESHOLD", "StockStatus", "stock_status"]
