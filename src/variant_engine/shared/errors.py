# 🚨 variant_engine/shared/errors.py
"""
🚨 Ієрархія помилок рушія варіантів.

🔹 Сам рушій (normalizer/catalog/facets/resolver) не кидає винятків на «брудних» даних —
   він деградує до порожніх мап, порожнього каталогу чи `NoMatch`.
🔹 `InvalidSelectionError` сигналізує про помилку програміста у вибраних атрибутах.
🔹 `UserVisibleError`-нащадки використовує лише прикладний шар (`SelectionSession.commit`).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування створення помилок
from typing import Dict, Optional, Sequence                         # 📐 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.utils.logger import LOG_NAME             # 🏷️ Глобальний префікс логера


# ================================
# 🧾 ЛОГЕР
# ================================
logger = logging.getLogger(f"{LOG_NAME}.shared.errors")


# ================================
# ⚠️ КОДИ ПОМИЛОК
# ================================
class ErrorCode:
    """⚠️ Стабільні коди для логів та відповідей UI."""

    INVALID_SELECTION = "invalid_selection"                         # 🧑‍💻 Помилка виклику
    SELECTION_INCOMPLETE = "selection_incomplete"                   # 🧩 Не всі атрибути вибрані
    VARIANT_UNAVAILABLE = "variant_unavailable"                     # 🚫 Комбінації не існує
    VARIANT_AMBIGUOUS = "variant_ambiguous"                         # 👯 Дублікати атрибутів
    OUT_OF_STOCK = "out_of_stock"                                   # 📦 Немає на складі
    STALE_CATALOG = "stale_catalog"                                 # ⌛ Каталог застарів
    UNKNOWN = "unknown_error"                                       # ❓ Резервний код


# ================================
# 🧠 БАЗОВІ ВИНЯТКИ
# ================================
class AppError(Exception):
    """🧠 Базова помилка рушія з опційними деталями."""

    code: str = ErrorCode.UNKNOWN

    def __init__(self, message: str, *, details: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    def to_log_extra(self) -> Dict[str, object]:
        """📦 Формує словник для `logger.*(..., extra=...)`."""
        extra: Dict[str, object] = {"error_code": self.code}
        if self.details:
            extra["details"] = self.details
        return extra


class UserVisibleError(AppError):
    """👀 Помилка, текст якої можна показати користувачу."""


# ================================
# 🧑‍💻 ПОМИЛКИ ВИКЛИКУ
# ================================
class InvalidSelectionError(AppError, ValueError):
    """🧑‍💻 Вибір містить атрибут або значення, яких немає в каталозі."""

    code = ErrorCode.INVALID_SELECTION

    def __init__(self, message: str, *, attribute: str, value: Optional[str] = None) -> None:
        super().__init__(message, details=f"{attribute}={value!r}")
        self.attribute = attribute
        self.value = value
        logger.debug("🧑‍💻 InvalidSelectionError", extra={"attribute": attribute, "value": value})


# ================================
# 👀 ПОМИЛКИ ПРИКЛАДНОГО ШАРУ
# ================================
class SelectionIncompleteError(UserVisibleError):
    """🧩 Спроба підтвердити вибір, коли не всі атрибути задані."""

    code = ErrorCode.SELECTION_INCOMPLETE

    def __init__(self, message: str, *, missing: Sequence[str] = ()) -> None:
        super().__init__(message, details=", ".join(missing) or None)
        self.missing = tuple(missing)


class VariantUnavailableError(UserVisibleError):
    """🚫 Обраної комбінації атрибутів не існує серед варіантів."""

    code = ErrorCode.VARIANT_UNAVAILABLE


class AmbiguousVariantError(UserVisibleError):
    """👯 Кілька варіантів мають однаковий набір атрибутів."""

    code = ErrorCode.VARIANT_AMBIGUOUS

    def __init__(self, message: str, *, variant_ids: Sequence[str] = ()) -> None:
        super().__init__(message, details=", ".join(variant_ids) or None)
        self.variant_ids = tuple(variant_ids)

    def to_log_extra(self) -> Dict[str, object]:
        extra = super().to_log_extra()
        extra["variant_ids"] = list(self.variant_ids)
        return extra


class VariantOutOfStockError(UserVisibleError):
    """📦 Варіант (або товар без варіантів) існує, але зараз недоступний для купівлі."""

    code = ErrorCode.OUT_OF_STOCK

    def __init__(
        self,
        message: str,
        *,
        variant_id: Optional[str],
        stock: Optional[int] = None,
        product_id: Optional[str] = None,
    ) -> None:
        target = f"variant={variant_id}" if variant_id is not None else f"product={product_id}"
        super().__init__(message, details=f"{target} stock={stock}")
        self.variant_id = variant_id
        self.product_id = product_id
        self.stock = stock


class StaleCatalogError(UserVisibleError):
    """⌛ Список варіантів змінився під час сесії вибору."""

    code = ErrorCode.STALE_CATALOG

    def __init__(self, message: str, *, expected: str, actual: str) -> None:
        super().__init__(message, details=f"expected={expected} actual={actual}")
        self.expected = expected
        self.actual = actual


# ================================
# 📤 ПУБЛІЧНИЙ API
# ================================
__all__ = [
    "ErrorCode",
    "AppError",
    "UserVisibleError",
    "InvalidSelectionError",
    "SelectionIncompleteError",
    "VariantUnavailableError",
    "AmbiguousVariantError",
    "VariantOutOfStockError",
    "StaleCatalogError",
]
