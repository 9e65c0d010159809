# 🧩 variant_engine/domain/variants/interfaces.py
"""
🧩 Контракти зовнішніх співпрацівників рушія варіантів.

🔹 Рушій не ходить у БД і не пише замовлення сам — лише через ці Protocol.
🔹 Реалізації живуть у зовнішній системі (запити з урахуванням тенанта, склад, кошик).
"""

from __future__ import annotations                                   # ⏳ Посилання на типи нижче

# 🔠 Системні імпорти
from typing import Any, Optional, Protocol, Sequence, runtime_checkable  # 🧰 Типи та Protocol

# 🧩 Внутрішні модулі
from .entities import RawVariant


@runtime_checkable
class IVariantSource(Protocol):
    """📥 Отримує актуальний список варіантів товару."""

    def fetch_variants(self, product_id: str) -> Sequence[RawVariant]:
        ...


@runtime_checkable
class IOrderLineWriter(Protocol):
    """🛒 Додає рядок замовлення (товар, варіант, кількість)."""

    def add_line(self, product_id: str, variant_id: Optional[str], quantity: int) -> Any:
        ...


@runtime_checkable
class IStockChecker(Protocol):
    """📦 Повертає свіжий залишок варіанта (або товару без варіантів); None — запас не відстежується."""

    def current_stock(self, variant_id: str) -> Optional[int]:
        ...


__all__ = ["IVariantSource", "IOrderLineWriter", "IStockChecker"]
