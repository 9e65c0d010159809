# 🧭 variant_engine/domain/variants/normalizer.py
"""
🧭 normalizer.py — перетворює один сирий варіант у канонічну мапу атрибутів.

🔹 Ланцюжок стратегій із фіксованим пріоритетом, перший непорожній результат перемагає:
   1) явна мапа `attributeValues`;
   2) метадані: типізовані `attributes` → потім канонічна `attributeValues`;
   3) скалярні поля `color` / `size`;
   4) назва у формі `Label: Value | Label: Value`;
   5) назва з дефісом (позиційна політика) або один сегмент + підказка `type`.
🔹 Ніколи не кидає винятків: якщо жодна стратегія не спрацювала — порожня мапа.
🔹 Порожні значення відкидаються ще на етапі витягування, `""` у мапі не буває.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Трасування стратегій
import re                                                           # ✂️ Розбиття назви за дефісом
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple, Union  # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.utils.logger import LOG_NAME
from .entities import CanonicalAttributeMap, RawVariant
from .labels import DEFAULT_LABELS, AttributeLabels, PositionalPolicy
from .metadata import CanonicalMapForm, TypedAttributesForm, parse_metadata

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.normalizer")


# ================================
# ⚙️ КОНСТАНТИ МОДУЛЯ
# ================================
_DASH_SPLIT = re.compile(r"\s*[-–]\s*")                        # ➖ Дефіс або en-dash з пробілами
_PIPE = "|"                                                         # 🧵 Розділювач пар у назві
_KEY_VALUE = ":"                                                    # 🔑 Розділювач мітки та значення

VariantLike = Union[RawVariant, Mapping[str, Any]]
Strategy = Callable[[RawVariant], CanonicalAttributeMap]


# ================================
# 🧽 ХЕЛПЕРИ
# ================================
def as_variant(variant: VariantLike) -> RawVariant:
    """Приймає `RawVariant` або словник каталогу; словник конвертується без мутацій."""
    if isinstance(variant, RawVariant):
        return variant
    return RawVariant.from_mapping(variant)


def as_variants(variants: Iterable[VariantLike]) -> Tuple[RawVariant, ...]:
    return tuple(as_variant(variant) for variant in variants or ())


def _clean_pairs(pairs: Iterable[Tuple[Any, Any]]) -> CanonicalAttributeMap:
    """
    Trim ключів/значень; дублікати — останній перемагає (навіть порожній),
    і лише потім порожні значення відкидаються.
    """
    merged: CanonicalAttributeMap = {}
    for raw_key, raw_value in pairs:
        key = str(raw_key if raw_key is not None else "").strip()
        if not key:
            continue
        if raw_value is None or isinstance(raw_value, (Mapping, list, tuple)):
            merged[key] = ""                                        # 🕳️ Не скаляр → порожнє значення
        else:
            merged[key] = str(raw_value).strip()
    return {key: value for key, value in merged.items() if value}


# ================================
# 🧭 НОРМАЛІЗАТОР
# ================================
class VariantNormalizer:
    """
    Нормалізатор варіантів з інʼєктованими мітками та позиційною політикою.

    Екземпляр не має змінного стану, тож один обʼєкт безпечно ділити між
    сесіями та потоками.
    """

    def __init__(
        self,
        labels: AttributeLabels = DEFAULT_LABELS,
        policy: Optional[PositionalPolicy] = None,
    ) -> None:
        self._labels = labels
        self._policy = policy or PositionalPolicy.from_labels(labels)
        self._strategies: Tuple[Tuple[str, Strategy], ...] = (
            ("explicit-map", self._from_explicit_map),
            ("metadata", self._from_metadata),
            ("scalar-fields", self._from_scalar_fields),
            ("labeled-name", self._from_labeled_name),
            ("positional-name", self._from_positional_name),
        )

    @property
    def labels(self) -> AttributeLabels:
        return self._labels

    @property
    def policy(self) -> PositionalPolicy:
        return self._policy

    def normalize(self, variant: VariantLike) -> CanonicalAttributeMap:
        """
        Повертає канонічну мапу атрибутів для одного варіанта.

        Args:
            variant: `RawVariant` або словник у форматі каталогу.

        Returns:
            CanonicalAttributeMap: Нова мапа (можна мутувати); `{}` якщо нічого не знайдено.
        """
        raw = as_variant(variant)
        for strategy_name, strategy in self._strategies:
            attrs = strategy(raw)
            if attrs:
                logger.debug("🧭 %s → %s: %s", raw.id, strategy_name, attrs)
                return attrs
        logger.debug("🕳️ %s: жодна стратегія не спрацювала", raw.id)
        return {}

    # ---------- 1. Явна мапа ----------
    def _from_explicit_map(self, variant: RawVariant) -> CanonicalAttributeMap:
        if not variant.attribute_values:
            return {}
        return _clean_pairs(variant.attribute_values.items())

    # ---------- 2–3. Метадані ----------
    def _from_metadata(self, variant: RawVariant) -> CanonicalAttributeMap:
        if variant.metadata is None:
            return {}
        for form in parse_metadata(variant.metadata):
            if isinstance(form, TypedAttributesForm):
                attrs = self._from_typed_attributes(form)
            elif isinstance(form, CanonicalMapForm):
                attrs = _clean_pairs(form.attribute_values)
            else:
                continue
            if attrs:
                return attrs
        return {}

    def _from_typed_attributes(self, form: TypedAttributesForm) -> CanonicalAttributeMap:
        pairs: List[Tuple[str, str]] = []
        for entry in form.attributes:
            label = self._labels.for_metadata_type(entry.type)
            if label is None:
                label = entry.name or self._labels.generic          # 🧩 Невідомий тип → власна назва
            pairs.append((label, entry.option))
        return _clean_pairs(pairs)

    # ---------- 4. Скалярні поля ----------
    def _from_scalar_fields(self, variant: RawVariant) -> CanonicalAttributeMap:
        return _clean_pairs(
            (
                (self._labels.color, variant.color),
                (self._labels.size, variant.size),
            )
        )

    # ---------- 5. Назва: "Label: Value | Label: Value" ----------
    def _from_labeled_name(self, variant: RawVariant) -> CanonicalAttributeMap:
        if _KEY_VALUE not in variant.name:
            return {}
        pairs = []
        for segment in variant.name.split(_PIPE):
            key, sep, value = segment.partition(_KEY_VALUE)
            if sep:
                pairs.append((key, value))
        return _clean_pairs(pairs)

    # ---------- 6. Назва: "Red - 42" ----------
    def _from_positional_name(self, variant: RawVariant) -> CanonicalAttributeMap:
        if not variant.name:
            return {}
        # ✂️ Кількість сегментів рахуємо до відкидання порожніх: "Red -" → ["Red", ""]
        parts = [part.strip() for part in _DASH_SPLIT.split(variant.name)]
        if len(parts) >= 2:
            if not all(parts):
                return {}
            assigned = self._policy.assign(parts)
            return _clean_pairs(assigned.items()) if assigned else {}
        if parts[0] and variant.type:
            label = self._labels.for_type_hint(variant.type) or variant.type    # 🏷️ Невідома підказка → як є
            return _clean_pairs(((label, parts[0]),))
        return {}


# ================================
# 🎯 ПУБЛІЧНИЙ API
# ================================
DEFAULT_NORMALIZER = VariantNormalizer()


def normalize(variant: VariantLike, normalizer: Optional[VariantNormalizer] = None) -> CanonicalAttributeMap:
    """Нормалізує варіант дефолтним (або переданим) нормалізатором."""
    return (normalizer or DEFAULT_NORMALIZER).normalize(variant)


__all__ = [
    "VariantLike",
    "VariantNormalizer",
    "DEFAULT_NORMALIZER",
    "as_variant",
    "as_variants",
    "normalize",
]
