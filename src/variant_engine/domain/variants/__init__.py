# 🧩 variant_engine/domain/variants/__init__.py
"""
🧩 Пакет `domain.variants` — нормалізація атрибутів варіантів та фасетний вибір.

🔹 `normalizer.py` — сирий варіант → канонічна мапа атрибутів.
🔹 `catalog.py` — каталог атрибутів товару, ворота `all_selected`, відбиток.
🔹 `facets.py` — доступні значення атрибута при частковому виборі.
🔹 `resolver.py` — повний вибір → `unique` / `none` / `ambiguous`.
🔹 `stock.py`, `audit.py`, `interfaces.py` — запас, масова перевірка, контракти співпрацівників.
"""

# 🧩 Внутрішні модулі проєкту
from .entities import (
    AttributeCatalog,
    AttributeDescriptor,
    CanonicalAttributeMap,
    RawVariant,
    ResolutionKind,
    ResolutionOutcome,
    SelectionState,
)
from .labels import AttributeLabels, PositionalPolicy
from .metadata import CanonicalMapForm, TypedAttributesForm, UnrecognizedForm, parse_metadata
from .normalizer import VariantNormalizer, as_variant, as_variants, normalize
from .catalog import (
    all_selected,
    build_catalog,
    build_catalogs,
    catalog_fingerprint,
    check_selection,
    missing_attributes,
)
from .facets import available_facets, available_values, matching_variants
from .resolver import resolve
from .stock import StockStatus, stock_status
from .audit import VariantAuditReport, audit_products, audit_variants
from .interfaces import IOrderLineWriter, IStockChecker, IVariantSource


# ================================
# 📤 ПУБЛІЧНИЙ API ПАКЕТА
# ================================
__all__ = [
    # Сутності
    "AttributeCatalog",
    "AttributeDescriptor",
    "CanonicalAttributeMap",
    "RawVariant",
    "ResolutionKind",
    "ResolutionOutcome",
    "SelectionState",
    # Мітки та метадані
    "AttributeLabels",
    "PositionalPolicy",
    "CanonicalMapForm",
    "TypedAttributesForm",
    "UnrecognizedForm",
    "parse_metadata",
    # Нормалізація
    "VariantNormalizer",
    "as_variant",
    "as_variants",
    "normalize",
    # Каталог
    "all_selected",
    "build_catalog",
    "build_catalogs",
    "catalog_fingerprint",
    "check_selection",
    "missing_attributes",
    # Фасети та зіставлення
    "available_facets",
    "available_values",
    "matching_variants",
    "resolve",
    # Запас та аудит
    "StockStatus",
    "stock_status",
    "VariantAuditReport",
    "audit_products",
    "audit_variants",
    # Контракти
    "IOrderLineWriter",
    "IStockChecker",
    "IVariantSource",
]
