# 📦 variant_engine/domain/variants/entities.py
"""
📦 Доменні сутності рушія варіантів.

🔹 `RawVariant` — варіант товару «як є» від зовнішнього каталогу (read-only).
🔹 `AttributeDescriptor` / `AttributeCatalog` — канонічний набір атрибутів товару.
🔹 `ResolutionOutcome` — тегований результат зіставлення повного вибору з варіантами.
🔹 Усі сутності іммʼютабельні (frozen dataclass + mapping proxy).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування валідації
from dataclasses import dataclass, field                            # 🧱 Опис сутностей
from decimal import Decimal, InvalidOperation                       # 💰 Ціна як Decimal
from enum import Enum                                               # 🔖 Тег результату
from types import MappingProxyType                                  # 🧊 Незмінні мапи
from typing import Any, Dict, Mapping, Optional, Tuple, Union       # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.utils.immutables import empty_mapping, freeze, thaw
from variant_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.entities")


# ================================
# 🧾 ПУБЛІЧНІ ТИПИ (АЛІАСИ)
# ================================
AttributeName = str                                                 # 🏷️ "Color", "Size", ...
AttributeValue = str                                                # 🎨 "Red", "42", ...
CanonicalAttributeMap = Dict[AttributeName, AttributeValue]         # 🗺️ Нормалізований вигляд варіанта
SelectionState = Mapping[AttributeName, AttributeValue]             # 🎯 Частковий вибір користувача
RawMetadata = Union[str, Mapping[str, Any], None]                   # 📄 Непрозорий рядок або вже розібраний обʼєкт


# ================================
# 🧽 НОРМАЛІЗАЦІЙНІ ХЕЛПЕРИ
# ================================
def _opt_str(value: Any) -> Optional[str]:
    """Trim; порожній рядок або None → None."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _coerce_price(value: Any) -> Optional[Decimal]:
    """Число або числовий рядок → Decimal; решта → None (ціни тут не рахуються)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        logger.debug("⚠️ _coerce_price: %r не розпізнано", value)
        return None
    if not price.is_finite():
        return None
    return price


def _coerce_stock(value: Any) -> Optional[int]:
    """int / числовий рядок → int; відсутнє або некоректне → None (запас не відстежується)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        stock = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        logger.debug("⚠️ _coerce_stock: %r не розпізнано", value)
        return None
    if not stock.is_finite():
        logger.debug("⚠️ _coerce_stock: %r не скінченне", value)
        return None
    return int(stock)


def _coerce_metadata(value: Any) -> RawMetadata:
    if value is None:
        return None
    if isinstance(value, Mapping):
        return freeze(value)                                        # 🧊 Вже розібраний обʼєкт
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    return str(value)


# ================================
# 🛍️ СИРИЙ ВАРІАНТ
# ================================
@dataclass(frozen=True, slots=True)
class RawVariant:
    """
    Варіант товару так, як його віддав каталог.

    Рушій лише читає цей обʼєкт. `metadata` може бути JSON-рядком, вже
    розібраною мапою або будь-яким сміттям — нормалізатор з цим впорається.
    """

    id: str                                                         # 🆔 Обовʼязковий ідентифікатор
    name: str = ""                                                  # 🏷️ Вільний текст
    sku: Optional[str] = None
    price: Optional[Decimal] = None
    stock: Optional[int] = None                                     # 📦 None → запас не відстежується
    type: Optional[str] = None                                      # 🧭 Груба підказка: "color" | "size" | ...
    color: Optional[str] = None
    size: Optional[str] = None
    metadata: RawMetadata = None
    attribute_values: Mapping[str, Any] = field(default_factory=empty_mapping)

    def __post_init__(self) -> None:
        variant_id = _opt_str(self.id)
        if not variant_id:
            logger.error("❌ RawVariant: id порожній")
            raise ValueError("Ідентифікатор варіанта (id) не може бути порожнім.")
        object.__setattr__(self, "id", variant_id)
        object.__setattr__(self, "name", str(self.name or "").strip())
        object.__setattr__(self, "sku", _opt_str(self.sku))
        object.__setattr__(self, "price", _coerce_price(self.price))
        object.__setattr__(self, "stock", _coerce_stock(self.stock))
        object.__setattr__(self, "type", _opt_str(self.type))
        object.__setattr__(self, "color", _opt_str(self.color))
        object.__setattr__(self, "size", _opt_str(self.size))
        object.__setattr__(self, "metadata", _coerce_metadata(self.metadata))
        attrs = self.attribute_values
        object.__setattr__(
            self,
            "attribute_values",
            freeze(attrs) if isinstance(attrs, Mapping) and attrs else empty_mapping(),
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "RawVariant":
        """
        Будує варіант зі словника у форматі каталогу.

        Args:
            data: Запис варіанта; приймає як `attributeValues`, так і `attribute_values`.

        Returns:
            RawVariant: Незмінний варіант.
        """
        attrs = data.get("attributeValues")
        if attrs is None:
            attrs = data.get("attribute_values")
        return cls(
            id=data.get("id"),  # type: ignore[arg-type]
            name=data.get("name") or "",
            sku=data.get("sku"),
            price=data.get("price"),
            stock=data.get("stock"),
            type=data.get("type"),
            color=data.get("color"),
            size=data.get("size"),
            metadata=data.get("metadata"),
            attribute_values=attrs if isinstance(attrs, Mapping) else empty_mapping(),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Серіалізує варіант у форму каталогу (camelCase для `attributeValues`)."""
        payload: Dict[str, Any] = {"id": self.id, "name": self.name}
        optional = {
            "sku": self.sku,
            "price": str(self.price) if self.price is not None else None,
            "stock": self.stock,
            "type": self.type,
            "color": self.color,
            "size": self.size,
            "metadata": thaw(self.metadata),
        }
        payload.update({key: value for key, value in optional.items() if value is not None})
        if self.attribute_values:
            payload["attributeValues"] = thaw(self.attribute_values)
        return payload


# ================================
# 🗂️ КАТАЛОГ АТРИБУТІВ
# ================================
@dataclass(frozen=True, slots=True)
class AttributeDescriptor:
    """Один атрибут товару та всі його можливі значення (унікальні, відсортовані)."""

    name: AttributeName
    values: Tuple[AttributeValue, ...] = ()

    def __contains__(self, value: object) -> bool:
        return value in self.values

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "values": list(self.values)}


AttributeCatalog = Tuple[AttributeDescriptor, ...]                  # 📚 Атрибути в порядку першої появи


# ================================
# 🎯 РЕЗУЛЬТАТ ЗІСТАВЛЕННЯ
# ================================
class ResolutionKind(str, Enum):
    """Тег результату `resolve()`."""

    UNIQUE = "unique"                                               # ✅ Рівно один варіант
    NONE = "none"                                                   # 🚫 Комбінації не існує
    AMBIGUOUS = "ambiguous"                                         # 👯 Кілька однакових варіантів

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class ResolutionOutcome:
    """
    Результат зіставлення повного вибору з варіантами.

    Не кешується між змінами вибору: перераховується на кожен клік.
    """

    kind: ResolutionKind
    variants: Tuple[RawVariant, ...] = ()

    def __post_init__(self) -> None:
        expected = {ResolutionKind.UNIQUE: 1, ResolutionKind.NONE: 0}.get(self.kind)
        count = len(self.variants)
        if expected is not None and count != expected:
            raise ValueError(f"{self.kind.value}: очікувалось {expected} варіантів, отримано {count}")
        if self.kind is ResolutionKind.AMBIGUOUS and count < 2:
            raise ValueError(f"ambiguous: потрібно щонайменше 2 варіанти, отримано {count}")

    @classmethod
    def unique(cls, variant: RawVariant) -> "ResolutionOutcome":
        return cls(ResolutionKind.UNIQUE, (variant,))

    @classmethod
    def no_match(cls) -> "ResolutionOutcome":
        return cls(ResolutionKind.NONE)

    @classmethod
    def ambiguous(cls, variants: Tuple[RawVariant, ...]) -> "ResolutionOutcome":
        return cls(ResolutionKind.AMBIGUOUS, tuple(variants))

    @property
    def is_unique(self) -> bool:
        return self.kind is ResolutionKind.UNIQUE

    @property
    def variant(self) -> Optional[RawVariant]:
        """Знайдений варіант лише для `UNIQUE`; інакше None."""
        return self.variants[0] if self.kind is ResolutionKind.UNIQUE else None

    def to_dict(self) -> Dict[str, Any]:
        """`{"kind": "unique", "variant"}` | `{"kind": "none"}` | `{"kind": "ambiguous", "variants"}`."""
        if self.kind is ResolutionKind.UNIQUE:
            return {"kind": self.kind.value, "variant": self.variants[0].to_dict()}
        if self.kind is ResolutionKind.AMBIGUOUS:
            return {"kind": self.kind.value, "variants": [v.to_dict() for v in self.variants]}
        return {"kind": self.kind.value}


def frozen_selection(selection: Optional[SelectionState]) -> Mapping[AttributeName, AttributeValue]:
    """Незмінна копія вибору (для передачі назовні без ризику мутацій)."""
    return MappingProxyType(dict(selection or {}))


__all__ = [
    "AttributeName",
    "AttributeValue",
    "CanonicalAttributeMap",
    "SelectionState",
    "RawMetadata",
    "RawVariant",
    "AttributeDescriptor",
    "AttributeCatalog",
    "ResolutionKind",
    "ResolutionOutcome",
    "frozen_selection",
]
