# 🎯 variant_engine/domain/variants/resolver.py
"""
🎯 resolver.py — зіставляє повний вибір атрибутів з конкретним варіантом.

🔹 0 збігів → `NoMatch` (комбінації не створено — легітимний стан).
🔹 1 збіг → `Unique`.
🔹 >1 збігів → `Ambiguous`: аномалія даних віддається викликачу, а не маскується.
❗ Запас не враховується: «бачу, але не можу купити» ≠ «не існує».
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                      # 🧾 Логування
from typing import Optional, Sequence                               # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.utils.logger import LOG_NAME
from .catalog import check_selection
from .entities import AttributeCatalog, ResolutionOutcome, SelectionState
from .facets import matching_variants
from .normalizer import VariantLike, VariantNormalizer

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.resolver")


def resolve(
    variants: Sequence[VariantLike],
    selection: SelectionState,
    normalizer: Optional[VariantNormalizer] = None,
    *,
    catalog: Optional[AttributeCatalog] = None,
) -> ResolutionOutcome:
    """
    Класифікує варіанти, що точно відповідають повному вибору.

    Args:
        variants: Усі варіанти товару.
        selection: Повний вибір (`all_selected` має бути True).
        normalizer: Той самий нормалізатор, що будував каталог.
        catalog: Якщо передано — вибір перевіряється на належність каталогу.

    Returns:
        ResolutionOutcome: `unique` / `none` / `ambiguous`.
    """
    selection = selection or {}
    if __debug__ and catalog is not None:
        check_selection(catalog, selection)

    survivors = matching_variants(variants, selection, normalizer)
    if not survivors:
        logger.debug("🚫 resolve | %s → none", dict(selection))
        return ResolutionOutcome.no_match()
    if len(survivors) == 1:
        logger.debug("✅ resolve | %s → %s", dict(selection), survivors[0].id)
        return ResolutionOutcome.unique(survivors[0])

    logger.warning(
        "👯 resolve: кілька варіантів з однаковими атрибутами | selection=%s ids=%s",
        dict(selection),
        [variant.id for variant in survivors],
    )
    return ResolutionOutcome.ambiguous(survivors)


__all__ = ["resolve"]
