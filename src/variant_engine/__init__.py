# 🧩 variant_engine/__init__.py
"""
🧩 variant_engine — нормалізація атрибутів варіантів товару та фасетний вибір.

🔹 `build_catalog(variants)` → кортеж `AttributeDescriptor`.
🔹 `available_values(name, catalog, variants, selection)` → доступні значення атрибута.
🔹 `resolve(variants, selection)` → `unique` / `none` / `ambiguous`.
🔹 `SelectionSession` — сесія вибору з перевіркою запасу та свіжості каталогу.
🔹 `bootstrap_logging()` — викликати на старті застосунку: логування за розділом `logging` з config.yaml.
"""

from variant_engine.domain.variants import (
    AttributeCatalog,
    AttributeDescriptor,
    AttributeLabels,
    PositionalPolicy,
    RawVariant,
    ResolutionKind,
    ResolutionOutcome,
    StockStatus,
    VariantNormalizer,
    all_selected,
    audit_variants,
    available_facets,
    available_values,
    build_catalog,
    build_catalogs,
    normalize,
    resolve,
)
from variant_engine.application import CommitResult, SelectionMode, SelectionSession
from variant_engine.config import bootstrap_logging

__version__ = "0.1.0"

__all__ = [
    "AttributeCatalog",
    "AttributeDescriptor",
    "AttributeLabels",
    "PositionalPolicy",
    "RawVariant",
    "ResolutionKind",
    "ResolutionOutcome",
    "StockStatus",
    "VariantNormalizer",
    "all_selected",
    "audit_variants",
    "available_facets",
    "available_values",
    "build_catalog",
    "build_catalogs",
    "normalize",
    "resolve",
    "CommitResult",
    "SelectionMode",
    "SelectionSession",
    "bootstrap_logging",
]
