# 🩺 variant_engine/domain/variants/audit.py
"""
🩺 audit.py — масова перевірка якості варіантів товару (для фонових задач валідації).

🔹 Знаходить варіанти, з яких не вдалося витягнути жодного атрибута.
🔹 Знаходить варіанти без частини атрибутів каталогу (їх неможливо обрати фасетно).
🔹 Групує варіанти з однаковими атрибутами (дадуть `Ambiguous` при виборі).
🔹 Рахує комбінації каталогу, для яких немає жодного варіанта.
"""

from __future__ import annotations

# 🔠 Стандартні імпорти
import logging                                                        # 🧾 Логування
from dataclasses import dataclass                                     # 🧱 DTO звіту
from math import prod                                                 # ✖️ Розмір декартового добутку
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple  # 🧰 Типізація

# 🧩 Внутрішні модулі
from variant_engine.shared.utils.logger import LOG_NAME
from .catalog import build_catalog
from .entities import AttributeCatalog
from .normalizer import VariantLike, VariantNormalizer, as_variants, normalize

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.audit")


@dataclass(frozen=True, slots=True)
class VariantAuditReport:
    """
    DTO з підсумком перевірки одного товару.
    """

    product_id: str
    catalog: AttributeCatalog
    variant_count: int
    unnormalized_ids: Tuple[str, ...] = ()                              # 🕳️ normalize() → {}
    partial_ids: Tuple[str, ...] = ()                                   # 🧩 Без частини атрибутів
    duplicate_groups: Tuple[Tuple[str, ...], ...] = ()                  # 👯 Однакові мапи
    missing_combinations: int = 0                                       # 🚫 Комбінації без варіанта

    @property
    def is_clean(self) -> bool:
        """Жодних дублікатів і часткових варіантів."""
        return not self.duplicate_groups and not self.partial_ids

    def to_dict(self) -> Dict[str, Any]:
        return {
            "product_id": self.product_id,
            "variant_count": self.variant_count,
            "catalog": [descriptor.to_dict() for descriptor in self.catalog],
            "unnormalized_ids": list(self.unnormalized_ids),
            "partial_ids": list(self.partial_ids),
            "duplicate_groups": [list(group) for group in self.duplicate_groups],
            "missing_combinations": self.missing_combinations,
            "is_clean": self.is_clean,
        }


def audit_variants(
    product_id: str,
    variants: Iterable[VariantLike],
    normalizer: Optional[VariantNormalizer] = None,
) -> VariantAuditReport:
    """
    Перевіряє варіанти одного товару.

    Порожній каталог не вважається дефектом: товар просто обирається пласким
    списком, тому `partial_ids` і `duplicate_groups` тоді порожні.
    """
    items = as_variants(variants)
    catalog = build_catalog(items, normalizer)
    names = [descriptor.name for descriptor in catalog]

    unnormalized: List[str] = []
    partial: List[str] = []
    groups: Dict[Tuple[str, ...], List[str]] = {}
    for variant in items:
        attrs = normalize(variant, normalizer)
        if not attrs:
            unnormalized.append(variant.id)
        if not catalog:
            continue
        if any(not attrs.get(name) for name in names):
            partial.append(variant.id)
            continue
        key = tuple(attrs[name] for name in names)
        groups.setdefault(key, []).append(variant.id)

    duplicates = tuple(tuple(ids) for ids in groups.values() if len(ids) > 1)
    combinations = prod(len(descriptor.values) for descriptor in catalog) if catalog else 0
    report = VariantAuditReport(
        product_id=product_id,
        catalog=catalog,
        variant_count=len(items),
        unnormalized_ids=tuple(unnormalized),
        partial_ids=tuple(partial),
        duplicate_groups=duplicates,
        missing_combinations=combinations - len(groups),
    )
    if not report.is_clean:
        logger.warning(
            "🩺 audit %s: partial=%d duplicates=%d",
            product_id,
            len(report.partial_ids),
            len(report.duplicate_groups),
        )
    return report


def audit_products(
    products: Mapping[str, Iterable[VariantLike]],
    normalizer: Optional[VariantNormalizer] = None,
) -> List[VariantAuditReport]:
    """Перевіряє багато товарів; повертає звіти в порядку вхідної мапи."""
    reports = [audit_variants(product_id, variants, normalizer) for product_id, variants in products.items()]
    logger.info(
        "🩺 audit_products | products=%d dirty=%d",
        len(reports),
        sum(1 for report in reports if not report.is_clean),
    )
    return reports


__all__ = ["VariantAuditReport", "audit_variants", "audit_products"]
