# 📚 variant_engine/domain/variants/catalog.py
"""
📚 catalog.py — будує каталог атрибутів товару з усіх його варіантів.

🔹 `build_catalog` — дедуплікує пари (атрибут, значення), атрибути в порядку першої появи,
   значення відсортовані простим порівнянням рядків.
🔹 `all_selected` — чи заданий кожен атрибут каталогу (ворота перед `resolve`).
🔹 `check_selection` — перевірка вибору проти каталогу (лише в не-оптимізованому запуску).
🔹 `catalog_fingerprint` — відбиток списку варіантів без урахування запасу (для сесій).
"""

from __future__ import annotations

# 🔠 Системні імпорти
import hashlib                                                      # 🔏 Відбиток каталогу
import json                                                         # 📦 Канонічна серіалізація для хешу
import logging                                                      # 🧾 Логування
from typing import Dict, Iterable, List, Mapping, Optional, Sequence  # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.errors import InvalidSelectionError
from variant_engine.shared.utils.immutables import thaw
from variant_engine.shared.utils.logger import LOG_NAME
from .entities import AttributeCatalog, AttributeDescriptor, SelectionState
from .normalizer import VariantLike, VariantNormalizer, as_variants, normalize

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.catalog")


# ================================
# 📚 ПОБУДОВА КАТАЛОГУ
# ================================
def build_catalog(
    variants: Iterable[VariantLike],
    normalizer: Optional[VariantNormalizer] = None,
) -> AttributeCatalog:
    """
    Агрегує канонічні мапи всіх варіантів у каталог атрибутів.

    Порожній каталог — валідний результат: викликач має перейти до плаского
    вибору варіанта за ідентифікатором.

    Args:
        variants: Варіанти одного товару.
        normalizer: Нормалізатор (за замовчуванням — дефолтні мітки та політика).

    Returns:
        AttributeCatalog: Кортеж `AttributeDescriptor`.
    """
    accumulated: Dict[str, Dict[str, None]] = {}                    # 🧺 dict як впорядкована множина
    count = 0
    for variant in as_variants(variants):
        count += 1
        for name, value in normalize(variant, normalizer).items():
            bucket = accumulated.setdefault(name, {})
            if value:
                bucket[value] = None

    catalog = tuple(
        AttributeDescriptor(name=name, values=tuple(sorted(values)))
        for name, values in accumulated.items()
        if values
    )
    logger.debug(
        "📚 build_catalog | variants=%d attributes=%s",
        count,
        [(descriptor.name, len(descriptor.values)) for descriptor in catalog],
    )
    return catalog


def build_catalogs(
    products: Mapping[str, Iterable[VariantLike]],
    normalizer: Optional[VariantNormalizer] = None,
) -> Dict[str, AttributeCatalog]:
    """Будує каталоги для багатьох товарів (product_id → варіанти) — каталоги незалежні."""
    catalogs = {product_id: build_catalog(variants, normalizer) for product_id, variants in products.items()}
    logger.info(
        "📚 build_catalogs | products=%d empty=%d",
        len(catalogs),
        sum(1 for catalog in catalogs.values() if not catalog),
    )
    return catalogs


# ================================
# 🎯 ВОРОТА ТА ПЕРЕВІРКИ ВИБОРУ
# ================================
def attribute_names(catalog: AttributeCatalog) -> List[str]:
    return [descriptor.name for descriptor in catalog]


def find_descriptor(catalog: AttributeCatalog, name: str) -> Optional[AttributeDescriptor]:
    for descriptor in catalog:
        if descriptor.name == name:
            return descriptor
    return None


def all_selected(catalog: AttributeCatalog, selection: SelectionState) -> bool:
    """
    True, якщо кожен атрибут каталогу має непорожнє значення у виборі.

    Для порожнього каталогу повертає False: фасетний вибір неможливий.
    """
    if not catalog:
        return False
    selection = selection or {}
    return all(selection.get(descriptor.name) for descriptor in catalog)


def missing_attributes(catalog: AttributeCatalog, selection: SelectionState) -> List[str]:
    """Атрибути каталогу, для яких ще немає значення (у порядку каталогу)."""
    selection = selection or {}
    return [descriptor.name for descriptor in catalog if not selection.get(descriptor.name)]


def check_selection(catalog: AttributeCatalog, selection: SelectionState) -> None:
    """
    Кидає `InvalidSelectionError`, якщо вибір посилається на невідомий атрибут
    або значення поза каталогом. Це помилка викликача, а не стан даних.
    """
    for name, value in (selection or {}).items():
        descriptor = find_descriptor(catalog, name)
        if descriptor is None:
            raise InvalidSelectionError(f"Атрибута {name!r} немає в каталозі.", attribute=name, value=value)
        if value not in descriptor.values:
            raise InvalidSelectionError(
                f"Значення {value!r} не належить атрибуту {name!r}.",
                attribute=name,
                value=value,
            )


# ================================
# 🔏 ВІДБИТОК СПИСКУ ВАРІАНТІВ
# ================================
def catalog_fingerprint(variants: Sequence[VariantLike]) -> str:
    """
    SHA-256 від полів, що впливають на атрибути (id, name, type, color, size,
    metadata, attributeValues). Запас і ціна не входять: їх зміна не робить
    каталог недійсним.
    """
    rows = [
        [
            variant.id,
            variant.name,
            variant.type,
            variant.color,
            variant.size,
            thaw(variant.metadata),
            thaw(variant.attribute_values),
        ]
        for variant in as_variants(variants)
    ]
    payload = json.dumps(rows, ensure_ascii=False, sort_keys=True, default=str)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


__all__ = [
    "build_catalog",
    "build_catalogs",
    "attribute_names",
    "find_descriptor",
    "all_selected",
    "missing_attributes",
    "check_selection",
    "catalog_fingerprint",
]
