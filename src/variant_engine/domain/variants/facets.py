# 🎛️ variant_engine/domain/variants/facets.py
"""
🎛️ facets.py — які значення атрибута ще можна обрати при поточному виборі.

🔹 Доступність атрибута рахується проти всіх *інших* виборів, без його власного:
   користувач може передумати щодо раніше обраного значення і не застрягти.
🔹 Варіант без ключа, що присутній у виборі, відкидається (часткові мапи не збігаються частково).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple  # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.utils.logger import LOG_NAME
from .catalog import check_selection, find_descriptor
from .entities import AttributeCatalog, CanonicalAttributeMap, RawVariant, SelectionState
from .normalizer import VariantLike, VariantNormalizer, as_variants, normalize

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.facets")


def agrees_with(attrs: Mapping[str, str], selection: SelectionState) -> bool:
    """True, якщо мапа варіанта збігається з вибором на кожному ключі вибору."""
    return all(attrs.get(name) == value for name, value in selection.items())


def _normalized(
    variants: Iterable[VariantLike],
    normalizer: Optional[VariantNormalizer],
) -> List[Tuple[RawVariant, CanonicalAttributeMap]]:
    return [(variant, normalize(variant, normalizer)) for variant in as_variants(variants)]


def matching_variants(
    variants: Iterable[VariantLike],
    selection: SelectionState,
    normalizer: Optional[VariantNormalizer] = None,
) -> Tuple[RawVariant, ...]:
    """Варіанти, сумісні з (можливо частковим) вибором, у вихідному порядку."""
    selection = selection or {}
    return tuple(variant for variant, attrs in _normalized(variants, normalizer) if agrees_with(attrs, selection))


def available_values(
    attribute_name: str,
    catalog: AttributeCatalog,
    variants: Sequence[VariantLike],
    selection: SelectionState,
    normalizer: Optional[VariantNormalizer] = None,
) -> Tuple[str, ...]:
    """
    Значення `attribute_name`, які ще можна обрати без суперечності з рештою вибору.

    Args:
        attribute_name: Атрибут, для якого рахуємо доступність.
        catalog: Каталог, побудований з цих самих `variants`.
        variants: Усі варіанти товару.
        selection: Поточний частковий вибір.
        normalizer: Той самий нормалізатор, що будував каталог.

    Returns:
        Tuple[str, ...]: Унікальні значення в порядку каталогу.
    """
    selection = selection or {}
    if __debug__:
        check_selection(catalog, selection)

    others = {name: value for name, value in selection.items() if name != attribute_name}
    found = {
        attrs[attribute_name]
        for _, attrs in _normalized(variants, normalizer)
        if attrs.get(attribute_name) and agrees_with(attrs, others)
    }

    descriptor = find_descriptor(catalog, attribute_name)
    ordered = tuple(value for value in descriptor.values if value in found) if descriptor else tuple(sorted(found))
    logger.debug("🎛️ available_values | %s others=%s → %s", attribute_name, others, ordered)
    return ordered


def available_facets(
    catalog: AttributeCatalog,
    variants: Sequence[VariantLike],
    selection: SelectionState,
    normalizer: Optional[VariantNormalizer] = None,
) -> Dict[str, Tuple[str, ...]]:
    """Доступність для кожного атрибута каталогу за один прохід нормалізації."""
    selection = selection or {}
    if __debug__:
        check_selection(catalog, selection)

    normalized = _normalized(variants, normalizer)
    facets: Dict[str, Tuple[str, ...]] = {}
    for descriptor in catalog:
        others = {name: value for name, value in selection.items() if name != descriptor.name}
        found = {
            attrs[descriptor.name]
            for _, attrs in normalized
            if attrs.get(descriptor.name) and agrees_with(attrs, others)
        }
        facets[descriptor.name] = tuple(value for value in descriptor.values if value in found)
    return facets


__all__ = [
    "agrees_with",
    "matching_variants",
    "available_values",
    "available_facets",
]
