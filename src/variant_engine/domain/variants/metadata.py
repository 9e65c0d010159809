# 📄 variant_engine/domain/variants/metadata.py
"""
📄 metadata.py — явний розбір непрозорого поля `metadata` варіанта.

🔹 Декодує рядок/мапу в одну з форм:
   • `TypedAttributesForm`  — `{"attributes": [{type, name, option}, ...]}` (імпорт з WooCommerce тощо);
   • `CanonicalMapForm`     — `{"attributeValues": {label: value}}`;
   • `UnrecognizedForm`     — все інше, включно з невалідним JSON.
🔹 Помилка декодування ніколи не виходить назовні: це те саме, що відсутні метадані.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import json                                                         # 📦 Декодування JSON-рядка
import logging                                                      # 🧾 Логування рішень
from dataclasses import dataclass                                   # 🧱 DTO форм
from typing import Any, List, Mapping, Optional, Tuple, Union       # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.utils.logger import LOG_NAME
from .entities import RawMetadata

logger = logging.getLogger(f"{LOG_NAME}.domain.variants.metadata")


# ================================
# 🧱 ФОРМИ МЕТАДАНИХ
# ================================
@dataclass(frozen=True, slots=True)
class TypedAttribute:
    """
    Один запис `{type, name, option}`; рядки вже обрізані, відсутні поля → "".

    `type` порівнюється з регістром: "Color" не є відомим типом і бере власну назву запису.
    """

    type: str = ""
    name: str = ""
    option: str = ""


@dataclass(frozen=True, slots=True)
class TypedAttributesForm:
    attributes: Tuple[TypedAttribute, ...]


@dataclass(frozen=True, slots=True)
class CanonicalMapForm:
    attribute_values: Tuple[Tuple[str, str], ...]                   # 🗺️ Впорядковані пари label → value


@dataclass(frozen=True, slots=True)
class UnrecognizedForm:
    reason: str = "absent"


MetadataForm = Union[TypedAttributesForm, CanonicalMapForm, UnrecognizedForm]

ABSENT = UnrecognizedForm("absent")


# ================================
# 🧽 ХЕЛПЕРИ
# ================================
def _text(value: Any) -> str:
    if value is None or isinstance(value, (Mapping, list, tuple)):
        return ""
    return str(value).strip()


def _decode(raw: RawMetadata) -> Optional[Mapping[str, Any]]:
    """Рядок → JSON-обʼєкт; мапа → як є; решта → None."""
    if raw is None:
        return None
    if isinstance(raw, Mapping):
        return raw
    text = str(raw).strip()
    if not text:
        return None
    try:
        decoded = json.loads(text)
    except json.JSONDecodeError as exc:
        logger.debug("🤷 metadata не є JSON (%s) — вважаємо відсутніми", exc)
        return None
    if not isinstance(decoded, Mapping):
        logger.debug("🤷 metadata JSON не є обʼєктом (%s)", type(decoded).__name__)
        return None
    return decoded


def _typed_attributes(payload: Mapping[str, Any]) -> Optional[TypedAttributesForm]:
    raw_list = payload.get("attributes")
    if not isinstance(raw_list, (list, tuple)):
        return None
    entries = tuple(
        TypedAttribute(
            type=_text(item.get("type")),
            name=_text(item.get("name")),
            option=_text(item.get("option")),
        )
        for item in raw_list
        if isinstance(item, Mapping)
    )
    return TypedAttributesForm(attributes=entries)


def _canonical_map(payload: Mapping[str, Any]) -> Optional[CanonicalMapForm]:
    raw_map = payload.get("attributeValues")
    if not isinstance(raw_map, Mapping):
        return None
    pairs = tuple((str(key).strip(), _text(value)) for key, value in raw_map.items())
    return CanonicalMapForm(attribute_values=pairs)


# ================================
# 🎯 ПУБЛІЧНИЙ API
# ================================
def parse_metadata(raw: RawMetadata) -> Tuple[MetadataForm, ...]:
    """
    Розбирає `metadata` у впорядкований перелік розпізнаних форм.

    Один обʼєкт може нести обидві форми одночасно (`attributes` і
    `attributeValues`), тому повертаємо всі у порядку пріоритету:
    спершу типізовані атрибути, потім канонічна мапа.

    Args:
        raw: JSON-рядок, вже розібрана мапа або None.

    Returns:
        Tuple[MetadataForm, ...]: Розпізнані форми або `(UnrecognizedForm,)`.
    """
    payload = _decode(raw)
    if payload is None:
        return (ABSENT if raw is None else UnrecognizedForm("undecodable"),)

    forms: List[MetadataForm] = []
    typed = _typed_attributes(payload)
    if typed is not None:
        forms.append(typed)
    canonical = _canonical_map(payload)
    if canonical is not None:
        forms.append(canonical)

    if not forms:
        logger.debug("🤷 metadata без відомих полів: %s", list(payload.keys()))
        return (UnrecognizedForm("unknown-shape"),)
    return tuple(forms)


__all__ = [
    "TypedAttribute",
    "TypedAttributesForm",
    "CanonicalMapForm",
    "UnrecognizedForm",
    "MetadataForm",
    "parse_metadata",
]
