# 🏷️ variant_engine/domain/variants/labels.py
"""
🏷️ Словник канонічних назв атрибутів та позиційна політика для назв варіантів.

🔹 `AttributeLabels` — закритий набір міток (Color/Size/Material/Style) + загальна мітка.
🔹 `PositionalPolicy` — порядок атрибутів у назвах виду "Red - 42" (інʼєктується, не константа).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування
from dataclasses import dataclass                                   # 🧱 Value-objects
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple    # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.labels")


# ================================
# 🏷️ СЛОВНИК МІТОК
# ================================
@dataclass(frozen=True, slots=True)
class AttributeLabels:
    """Відображувані назви атрибутів; тенант може підмінити їх локалізованими."""

    color: str = "Color"
    size: str = "Size"
    material: str = "Material"
    style: str = "Style"
    generic: str = "Attribute"                                      # 🧩 Якщо запис без власної назви

    def __post_init__(self) -> None:
        for field_name in ("color", "size", "material", "style", "generic"):
            value = str(getattr(self, field_name) or "").strip()
            if not value:
                raise ValueError(f"Мітка атрибута {field_name!r} не може бути порожньою.")
            object.__setattr__(self, field_name, value)

    @classmethod
    def from_mapping(cls, data: Optional[Mapping[str, Any]]) -> "AttributeLabels":
        """Будує мітки з розділу конфігурації; відсутні ключі → дефолт."""
        if not data:
            return cls()
        known = {key: str(value) for key, value in data.items() if key in cls.__slots__ and value}
        return cls(**known)

    def for_metadata_type(self, attr_type: str) -> Optional[str]:
        """Мапить `type` з метаданих (color/size/material/style) у мітку; інакше None."""
        return {
            "color": self.color,
            "size": self.size,
            "material": self.material,
            "style": self.style,
        }.get(attr_type)

    def for_type_hint(self, type_hint: str) -> Optional[str]:
        """Мапить грубу підказку `variant.type` у мітку (лише color/size); інакше None."""
        if type_hint == "color":
            return self.color
        if type_hint == "size":
            return self.size
        return None

    @property
    def known(self) -> Tuple[str, ...]:
        return (self.color, self.size, self.material, self.style)


DEFAULT_LABELS = AttributeLabels()


# ================================
# 🧭 ПОЗИЦІЙНА ПОЛІТИКА
# ================================
@dataclass(frozen=True, slots=True)
class PositionalPolicy:
    """
    Порядок атрибутів для назв, розділених дефісом.

    За замовчуванням перший сегмент — колір, другий — розмір. Тенант з іншою
    конвенцією (наприклад, "Size - Color") задає власний порядок.
    """

    order: Tuple[str, ...] = (DEFAULT_LABELS.color, DEFAULT_LABELS.size)

    def __post_init__(self) -> None:
        cleaned = tuple(str(label).strip() for label in self.order if str(label or "").strip())
        if len(cleaned) < 2:
            raise ValueError("Позиційна політика потребує щонайменше двох міток.")
        if len(set(cleaned)) != len(cleaned):
            raise ValueError(f"Мітки позиційної політики повторюються: {cleaned!r}")
        object.__setattr__(self, "order", cleaned)

    @classmethod
    def from_labels(cls, labels: AttributeLabels) -> "PositionalPolicy":
        """Дефолтний порядок Color → Size у термінах переданих міток."""
        return cls(order=(labels.color, labels.size))

    @classmethod
    def from_sequence(cls, order: Optional[Sequence[str]], labels: AttributeLabels) -> "PositionalPolicy":
        if not order:
            return cls.from_labels(labels)
        return cls(order=tuple(order))

    def assign(self, parts: Sequence[str]) -> Optional[Dict[str, str]]:
        """Повертає {мітка: сегмент}, якщо кількість сегментів збігається з політикою."""
        if len(parts) != len(self.order):
            logger.debug("🧭 assign: %d сегментів ≠ %d міток", len(parts), len(self.order))
            return None
        return dict(zip(self.order, parts))


DEFAULT_POLICY = PositionalPolicy()


__all__ = [
    "AttributeLabels",
    "PositionalPolicy",
    "DEFAULT_LABELS",
    "DEFAULT_POLICY",
]
