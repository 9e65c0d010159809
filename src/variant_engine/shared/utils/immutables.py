# 🧊 variant_engine/shared/utils/immutables.py
"""
🧊 Утиліти для «заморожування» вхідних даних варіантів.

🔹 Конвертує словники, списки та набори у їхні незмінні аналоги.
🔹 Гарантує, що `metadata`/`attributeValues` не мутуються після створення `RawVariant`.
🔹 Дозволяє розморозити мапу назад у звичайний `dict` для серіалізації.
"""

from __future__ import annotations

# 🔠 Системні імпорти
from collections.abc import Iterable, Mapping            # 🧰 Перевірки типів колекцій
from decimal import Decimal                              # 💵 Грошові значення
from enum import Enum                                    # 🏷️ Перерахування
from types import MappingProxyType                       # 🔒 Незмінна обгортка над dict
from typing import Any                                   # 🧰 Загальний тип

# ================================
# 🧾 АЛІАСИ
# ================================
FrozenMapping = MappingProxyType                         # 🔄 Псевдонім для читаємості

_EMPTY: MappingProxyType = MappingProxyType({})          # 📭 Спільна порожня мапа


# ================================
# ❄️ ЗАМОРОЖУВАЧ СТРУКТУР
# ================================
def freeze(obj: Any) -> Any:
    """Рекурсивно перетворює колекції на незмінні аналоги."""
    if obj is None or isinstance(obj, (str, bytes, int, float, bool, Decimal, Enum)):
        return obj
    if isinstance(obj, Mapping):   # 🧭 Словники → MappingProxyType
        return MappingProxyType({key: freeze(value) for key, value in obj.items()})
    if isinstance(obj, (set, frozenset)):
        return frozenset(freeze(value) for value in obj)
    if isinstance(obj, (list, tuple)) or _is_iterable_but_not_str(obj):
        try:
            return tuple(freeze(value) for value in obj)
        except TypeError:
            return obj
    return obj


def empty_mapping() -> MappingProxyType:
    """Повертає спільну незмінну порожню мапу."""
    return _EMPTY


def thaw(obj: Any) -> Any:
    """Зворотна операція до `freeze` для мап і кортежів (для `to_dict`)."""
    if isinstance(obj, Mapping):
        return {key: thaw(value) for key, value in obj.items()}
    if isinstance(obj, tuple):
        return [thaw(value) for value in obj]
    if isinstance(obj, frozenset):
        return sorted((thaw(value) for value in obj), key=str)
    return obj


# ================================
# 🔍 ПЕРЕВІРКИ
# ================================
def is_frozen_mapping(obj: Any) -> bool:
    """Перевіряє, чи є обʼєкт замороженою мапою (`freeze(dict)`)."""
    return isinstance(obj, MappingProxyType)


def _is_iterable_but_not_str(obj: Any) -> bool:
    return isinstance(obj, Iterable) and not isinstance(obj, (str, bytes))
