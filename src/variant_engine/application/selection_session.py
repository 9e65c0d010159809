# 🛍️ variant_engine/application/selection_session.py
"""
🛍️ `SelectionSession` — одна сесія вибору варіанта (один користувач, один товар).

🔹 Будує каталог один раз і фіксує відбиток списку варіантів (без запасу).
🔹 Веде частковий вибір атрибутів, рахує доступні значення та результат зіставлення.
🔹 Обирає режим: фасетний / пласкний (порожній каталог) / прямий (один варіант) / товар без варіантів.
🔹 `commit()` — перевіряє повноту, однозначність, запас і свіжість каталогу, потім пише рядок замовлення.
"""

from __future__ import annotations

# 🔠 Системні імпорти
import logging                                                        # 🧾 Логування сесії
from dataclasses import dataclass                                     # 🧱 DTO результату
from enum import Enum                                                 # 🔖 Режим сесії
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple  # 🧰 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.config.settings import EngineSettings, load_settings
from variant_engine.domain.variants.catalog import (
    all_selected,
    build_catalog,
    catalog_fingerprint,
    check_selection,
    missing_attributes,
)
from variant_engine.domain.variants.entities import (
    AttributeCatalog,
    RawVariant,
    ResolutionKind,
    ResolutionOutcome,
    frozen_selection,
)
from variant_engine.domain.variants.facets import available_facets, available_values, matching_variants
from variant_engine.domain.variants.interfaces import IOrderLineWriter, IStockChecker, IVariantSource
from variant_engine.domain.variants.normalizer import VariantLike, VariantNormalizer, as_variants
from variant_engine.domain.variants.resolver import resolve
from variant_engine.domain.variants.stock import StockStatus, stock_status
from variant_engine.shared.errors import (
    AmbiguousVariantError,
    InvalidSelectionError,
    SelectionIncompleteError,
    StaleCatalogError,
    UserVisibleError,
    VariantOutOfStockError,
    VariantUnavailableError,
)
from variant_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.application.selection_session")


# ================================
# 🔖 РЕЖИМИ ТА DTO
# ================================
class SelectionMode(str, Enum):
    """Як користувач обирає варіант цього товару."""

    FACETED = "faceted"        # 🎛️ Атрибут за атрибутом
    FLAT = "flat"              # 📋 Каталог порожній → вибір зі списку варіантів
    DIRECT = "direct"          # 🎯 Один варіант → додається одразу
    PRODUCT = "product"        # 📦 Варіантів немає → додається сам товар

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class CommitResult:
    """📦 Що саме записано в замовлення."""

    product_id: str
    variant: Optional[RawVariant]
    quantity: int
    stock: StockStatus
    line: Any = None                                                  # 🧾 Те, що повернув writer

    @property
    def variant_id(self) -> Optional[str]:
        return self.variant.id if self.variant else None


# ================================
# 🛍️ СЕСІЯ ВИБОРУ
# ================================
class SelectionSession:
    """
    Тримає вибір одного користувача для одного товару.

    Каталог — знімок на момент відкриття сесії. Якщо варіанти змінились
    (атрибути, назви, метадані — не запас), `commit(source=...)` це помітить
    за відбитком і відмовить з `StaleCatalogError`; сесію треба відкрити заново.
    """

    def __init__(
        self,
        product_id: str,
        variants: Iterable[VariantLike],
        *,
        settings: Optional[EngineSettings] = None,
        normalizer: Optional[VariantNormalizer] = None,
        product_stock: Optional[int] = None,
    ) -> None:
        self._product_id = str(product_id)
        self._product_stock = product_stock                           # 📦 Запас самого товару (режим PRODUCT)
        self._settings = settings or load_settings()
        self._normalizer = normalizer or self._settings.make_normalizer()
        self._variants: Tuple[RawVariant, ...] = as_variants(variants)
        self._catalog: AttributeCatalog = build_catalog(self._variants, self._normalizer)
        self._fingerprint = catalog_fingerprint(self._variants)
        self._selection: Dict[str, str] = {}
        self._picked_id: Optional[str] = None
        self._mode = self._detect_mode()
        logger.info(
            "🛍️ Сесія відкрита | product=%s variants=%d mode=%s attributes=%s",
            self._product_id,
            len(self._variants),
            self._mode.value,
            [descriptor.name for descriptor in self._catalog],
        )

    def _detect_mode(self) -> SelectionMode:
        if not self._variants:
            return SelectionMode.PRODUCT
        if len(self._variants) == 1 and self._settings.skip_single_variant:
            return SelectionMode.DIRECT
        if not self._catalog:
            return SelectionMode.FLAT
        return SelectionMode.FACETED

    # ---------- Властивості ----------
    @property
    def product_id(self) -> str:
        return self._product_id

    @property
    def mode(self) -> SelectionMode:
        return self._mode

    @property
    def catalog(self) -> AttributeCatalog:
        return self._catalog

    @property
    def variants(self) -> Tuple[RawVariant, ...]:
        return self._variants

    @property
    def fingerprint(self) -> str:
        return self._fingerprint

    @property
    def selection(self) -> Mapping[str, str]:
        """Незмінний вигляд поточного вибору."""
        return frozen_selection(self._selection)

    @property
    def is_complete(self) -> bool:
        if self._mode is SelectionMode.FACETED:
            return all_selected(self._catalog, self._selection)
        if self._mode is SelectionMode.FLAT:
            return self._picked_id is not None
        return True

    # ---------- Зміна вибору ----------
    def select(self, attribute_name: str, value: str) -> None:
        """Задає значення атрибута (лише у фасетному режимі, значення з каталогу)."""
        if self._mode is not SelectionMode.FACETED:
            raise InvalidSelectionError(
                f"Фасетний вибір недоступний у режимі {self._mode.value}.",
                attribute=attribute_name,
                value=value,
            )
        check_selection(self._catalog, {attribute_name: value})
        self._selection[attribute_name] = value
        logger.debug("🎯 select | %s=%s → %s", attribute_name, value, self._selection)

    def clear(self, attribute_name: str) -> None:
        """Знімає вибір атрибута (невідомий атрибут ігнорується)."""
        self._selection.pop(attribute_name, None)

    def reset(self) -> None:
        """Скидає весь вибір."""
        self._selection.clear()
        self._picked_id = None

    def select_variant(self, variant_id: str) -> RawVariant:
        """Пласкний режим: обирає варіант за ідентифікатором."""
        if self._mode is not SelectionMode.FLAT:
            raise InvalidSelectionError(
                f"Вибір за id доступний лише в пласкому режимі (зараз {self._mode.value}).",
                attribute="id",
                value=variant_id,
            )
        for variant in self._variants:
            if variant.id == variant_id:
                self._picked_id = variant.id
                return variant
        raise InvalidSelectionError(f"Варіанта {variant_id!r} немає у товарі.", attribute="id", value=variant_id)

    # ---------- Обчислення для UI ----------
    def available(self, attribute_name: str) -> Tuple[str, ...]:
        return available_values(attribute_name, self._catalog, self._variants, self._selection, self._normalizer)

    def facets(self) -> Dict[str, Tuple[str, ...]]:
        """Доступні значення для кожного атрибута з урахуванням решти вибору."""
        if self._mode is not SelectionMode.FACETED:
            return {}
        return available_facets(self._catalog, self._variants, self._selection, self._normalizer)

    def missing(self) -> List[str]:
        if self._mode is not SelectionMode.FACETED:
            return []
        return missing_attributes(self._catalog, self._selection)

    def candidates(self) -> Tuple[RawVariant, ...]:
        """Варіанти, сумісні з поточним (можливо частковим) вибором."""
        return matching_variants(self._variants, self._selection, self._normalizer)

    def resolution(self) -> Optional[ResolutionOutcome]:
        """Результат зіставлення, або None, поки вибір неповний (чи товар без варіантів)."""
        if self._mode is SelectionMode.PRODUCT or not self.is_complete:
            return None
        if self._mode is SelectionMode.DIRECT:
            return ResolutionOutcome.unique(self._variants[0])
        if self._mode is SelectionMode.FLAT:
            picked = next(variant for variant in self._variants if variant.id == self._picked_id)
            return ResolutionOutcome.unique(picked)
        return resolve(self._variants, self._selection, self._normalizer, catalog=self._catalog)

    def snapshot(self) -> Dict[str, Any]:
        """Серіалізований стан сесії для UI."""
        outcome = self.resolution()
        return {
            "product_id": self._product_id,
            "mode": self._mode.value,
            "catalog": [descriptor.to_dict() for descriptor in self._catalog],
            "selection": dict(self._selection),
            "facets": {name: list(values) for name, values in self.facets().items()},
            "complete": self.is_complete,
            "resolution": outcome.to_dict() if outcome else None,
        }

    # ---------- Підтвердження ----------
    def commit(
        self,
        writer: IOrderLineWriter,
        quantity: int = 1,
        *,
        source: Optional[IVariantSource] = None,
        stock_checker: Optional[IStockChecker] = None,
    ) -> CommitResult:
        """
        Перевіряє вибір і додає рядок замовлення.

        Args:
            writer: Співпрацівник, що записує рядок (product_id, variant_id, quantity).
            quantity: Кількість, щонайменше 1.
            source: Якщо задано — список варіантів перечитується, а зміна відбитка
                дає `StaleCatalogError`; свіжий запас береться звідти.
            stock_checker: Свіжий залишок від складу (пріоритетніший за знімок);
                для товару без варіантів запит іде за `product_id`.

        Returns:
            CommitResult: Записаний рядок; вибір сесії після цього скидається.

        Raises:
            SelectionIncompleteError, VariantUnavailableError, AmbiguousVariantError,
            VariantOutOfStockError, StaleCatalogError.
        """
        if quantity < 1:
            raise ValueError(f"Кількість має бути щонайменше 1: {quantity!r}")

        try:
            fresh_stock = self._revalidate(source)
            if self._mode is SelectionMode.PRODUCT:
                return self._write(writer, None, quantity, self._product_status(stock_checker))

            variant = self._resolved_variant()
            current = stock_checker.current_stock(variant.id) if stock_checker else None
            if current is None:
                current = fresh_stock.get(variant.id)
            status = stock_status(
                variant,
                current_stock=current,
                low_threshold=self._settings.low_stock_threshold,
            )
            if not status.is_purchasable:
                raise VariantOutOfStockError(
                    "Цього варіанта немає в наявності.",
                    variant_id=variant.id,
                    product_id=self._product_id,
                    stock=current if current is not None else variant.stock,
                )
            return self._write(writer, variant, quantity, status)
        except UserVisibleError as exc:
            logger.info("🚫 commit відхилено | product=%s: %s", self._product_id, exc, extra=exc.to_log_extra())
            raise

    def _revalidate(self, source: Optional[IVariantSource]) -> Dict[str, Optional[int]]:
        """Перечитує варіанти; повертає свіжі залишки за id."""
        if source is None:
            return {}
        fresh = as_variants(source.fetch_variants(self._product_id))
        actual = catalog_fingerprint(fresh)
        if actual != self._fingerprint:
            raise StaleCatalogError(
                "Варіанти товару змінились — відкрийте вибір заново.",
                expected=self._fingerprint,
                actual=actual,
            )
        return {variant.id: variant.stock for variant in fresh}

    def _product_status(self, stock_checker: Optional[IStockChecker]) -> StockStatus:
        """Товар без варіантів: свіжий залишок від складу (за product_id) або знімок `product_stock`."""
        current = stock_checker.current_stock(self._product_id) if stock_checker else None
        if current is None:
            current = self._product_stock
        status = StockStatus.from_stock(current, low_threshold=self._settings.low_stock_threshold)
        if not status.is_purchasable:
            raise VariantOutOfStockError(
                "Цього товару немає в наявності.",
                variant_id=None,
                product_id=self._product_id,
                stock=current,
            )
        return status

    def _resolved_variant(self) -> RawVariant:
        outcome = self.resolution()
        if outcome is None:
            raise SelectionIncompleteError("Оберіть усі атрибути товару.", missing=self.missing())
        if outcome.kind is ResolutionKind.NONE:
            raise VariantUnavailableError("Ця комбінація недоступна.", details=str(dict(self._selection)))
        if outcome.kind is ResolutionKind.AMBIGUOUS:
            raise AmbiguousVariantError(
                "Кілька варіантів мають однакові атрибути.",
                variant_ids=[variant.id for variant in outcome.variants],
            )
        return outcome.variants[0]

    def _write(
        self,
        writer: IOrderLineWriter,
        variant: Optional[RawVariant],
        quantity: int,
        status: StockStatus,
    ) -> CommitResult:
        variant_id = variant.id if variant else None
        line = writer.add_line(self._product_id, variant_id, quantity)
        logger.info(
            "🛒 commit | product=%s variant=%s qty=%d stock=%s",
            self._product_id,
            variant_id,
            quantity,
            status.value,
        )
        self.reset()
        return CommitResult(product_id=self._product_id, variant=variant, quantity=quantity, stock=status, line=line)


__all__ = ["SelectionMode", "CommitResult", "SelectionSession"]
