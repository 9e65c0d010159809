"""
🧪 test_selection_session.py — сесія вибору варіанта від відкриття до рядка замовлення.

Перевіряє:
- Визначення режиму (фасетний / пласкний / прямий / товар без варіантів)
- Зміну вибору, доступні значення та серіалізований стан
- `commit()`: повнота, відсутня комбінація, дублікати, запас, застарілий каталог
"""

import pytest

from variant_engine.application.selection_session import SelectionMode, SelectionSession
from variant_engine.config.settings import EngineSettings
from variant_engine.domain.variants.entities import RawVariant, ResolutionKind
from variant_engine.domain.variants.interfaces import IOrderLineWriter, IStockChecker, IVariantSource
from variant_engine.domain.variants.stock import StockStatus
from variant_engine.shared.errors import (
    AmbiguousVariantError,
    InvalidSelectionError,
    SelectionIncompleteError,
    StaleCatalogError,
    VariantOutOfStockError,
    VariantUnavailableError,
)


# ================================
# 🧪 ФЕЙКОВІ СПІВПРАЦІВНИКИ
# ================================
class FakeWriter:
    def __init__(self):
        self.lines = []

    def add_line(self, product_id, variant_id, quantity):
        self.lines.append((product_id, variant_id, quantity))
        return f"line-{len(self.lines)}"


class FakeSource:
    def __init__(self, variants):
        self.variants = variants
        self.calls = 0

    def fetch_variants(self, product_id):
        self.calls += 1
        return self.variants


class FakeStock:
    def __init__(self, stocks):
        self.stocks = stocks

    def current_stock(self, variant_id):
        return self.stocks.get(variant_id)


@pytest.fixture
def settings():
    return EngineSettings()


@pytest.fixture
def writer():
    return FakeWriter()


def test_fakes_satisfy_protocols(writer):
    assert isinstance(writer, IOrderLineWriter)
    assert isinstance(FakeSource([]), IVariantSource)
    assert isinstance(FakeStock({}), IStockChecker)


# ================================
# 🔖 РЕЖИМИ
# ================================
def test_mode_detection(settings, grid_variants):
    assert SelectionSession("p", grid_variants, settings=settings).mode is SelectionMode.FACETED
    assert SelectionSession("p", [], settings=settings).mode is SelectionMode.PRODUCT
    assert SelectionSession("p", grid_variants[:1], settings=settings).mode is SelectionMode.DIRECT
    flat = [RawVariant(id="k1", name="Standard"), RawVariant(id="k2", name="Deluxe")]
    assert SelectionSession("p", flat, settings=settings).mode is SelectionMode.FLAT


def test_single_variant_can_require_faceted_choice(grid_variants):
    settings = EngineSettings(skip_single_variant=False)

    session = SelectionSession("p", grid_variants[:1], settings=settings)

    assert session.mode is SelectionMode.FACETED
    assert not session.is_complete


def test_session_accepts_catalog_dicts(settings):
    session = SelectionSession("p", [{"id": "1", "name": "Red - 40"}, {"id": "2", "name": "Blue - 42"}], settings=settings)

    assert [descriptor.name for descriptor in session.catalog] == ["Color", "Size"]
    assert all(isinstance(variant, RawVariant) for variant in session.variants)


def test_default_settings_come_from_config(grid_variants):
    session = SelectionSession("p", grid_variants)

    assert session.mode is SelectionMode.FACETED


# ================================
# 🎛️ ФАСЕТНИЙ ВИБІР
# ================================
def test_select_narrows_and_clear_widens(settings, shoe_variants):
    session = SelectionSession("shoe", shoe_variants, settings=settings)

    session.select("Color", "Red")
    assert session.available("Size") == ("40",)
    assert session.missing() == ["Size"]
    assert [variant.id for variant in session.candidates()] == ["v1"]

    session.clear("Color")
    session.clear("Unknown")
    assert session.available("Size") == ("40", "42")
    assert dict(session.selection) == {}


def test_selection_view_is_read_only(settings, shoe_variants):
    session = SelectionSession("shoe", shoe_variants, settings=settings)
    session.select("Color", "Red")

    with pytest.raises(TypeError):
        session.selection["Color"] = "Blue"  # type: ignore[index]


def test_select_rejects_values_outside_catalog(settings, shoe_variants):
    session = SelectionSession("shoe", shoe_variants, settings=settings)

    with pytest.raises(InvalidSelectionError):
        session.select("Color", "Purple")
    with pytest.raises(InvalidSelectionError):
        session.select("Width", "Wide")


def test_resolution_is_none_until_complete(settings, shoe_variants):
    session = SelectionSession("shoe", shoe_variants, settings=settings)
    session.select("Color", "Red")
    assert session.resolution() is None

    session.select("Size", "42")
    assert session.resolution().kind is ResolutionKind.NONE

    session.select("Size", "40")
    assert session.resolution().variant.id == "v1"


def test_snapshot(settings, grid_variants):
    session = SelectionSession("shoe", grid_variants, settings=settings)
    session.select("Color", "Red")

    snapshot = session.snapshot()

    assert snapshot == {
        "product_id": "shoe",
        "mode": "faceted",
        "catalog": [
            {"name": "Color", "values": ["Blue", "Red"]},
            {"name": "Size", "values": ["40", "42"]},
        ],
        "selection": {"Color": "Red"},
        "facets": {"Color": ["Blue", "Red"], "Size": ["40", "42"]},
        "complete": False,
        "resolution": None,
    }


# ================================
# 🛒 COMMIT
# ================================
def test_commit_writes_line_and_resets(settings, grid_variants, writer):
    session = SelectionSession("shoe", grid_variants, settings=settings)
    session.select("Color", "Red")
    session.select("Size", "40")

    result = session.commit(writer, quantity=2)

    assert writer.lines == [("shoe", "r40", 2)]
    assert result.variant_id == "r40"
    assert result.stock is StockStatus.IN_STOCK
    assert result.line == "line-1"
    assert dict(session.selection) == {}


def test_commit_low_and_untracked_stock_are_purchasable(settings, grid_variants, writer):
    session = SelectionSession("shoe", grid_variants, settings=settings)

    session.select("Color", "Blue")
    session.select("Size", "40")
    assert session.commit(writer).stock is StockStatus.LOW_STOCK

    session.select("Color", "Blue")
    session.select("Size", "42")
    assert session.commit(writer).stock is StockStatus.UNTRACKED
    assert [line[1] for line in writer.lines] == ["b40", "b42"]


def test_commit_incomplete(settings, grid_variants, writer):
    session = SelectionSession("shoe", grid_variants, settings=settings)
    session.select("Color", "Red")

    with pytest.raises(SelectionIncompleteError) as err:
        session.commit(writer)

    assert err.value.missing == ("Size",)
    assert writer.lines == []


def test_commit_unavailable_combination(settings, shoe_variants, writer):
    session = SelectionSession("shoe", shoe_variants, settings=settings)
    session.select("Color", "Red")
    session.select("Size", "42")

    with pytest.raises(VariantUnavailableError):
        session.commit(writer)
    assert dict(session.selection) == {"Color": "Red", "Size": "42"}


def test_commit_ambiguous(settings, writer):
    variants = [
        RawVariant(id="a", name="Red - 40"),
        RawVariant(id="b", attribute_values={"Color": "Red", "Size": "40"}),
        RawVariant(id="c", name="Blue - 40"),
    ]
    session = SelectionSession("shoe", variants, settings=settings)
    session.select("Color", "Red")
    session.select("Size", "40")

    with pytest.raises(AmbiguousVariantError) as err:
        session.commit(writer)

    assert err.value.variant_ids == ("a", "b")
    assert writer.lines == []


def test_commit_out_of_stock(settings, grid_variants, writer):
    session = SelectionSession("shoe", grid_variants, settings=settings)
    session.select("Color", "Red")
    session.select("Size", "42")

    with pytest.raises(VariantOutOfStockError) as err:
        session.commit(writer)

    assert err.value.variant_id == "r42"
    assert err.value.stock == 0


def test_stock_checker_overrides_snapshot(settings, grid_variants, writer):
    session = SelectionSession("shoe", grid_variants, settings=settings)
    session.select("Color", "Red")
    session.select("Size", "40")

    with pytest.raises(VariantOutOfStockError):
        session.commit(writer, stock_checker=FakeStock({"r40": 0}))

    session.select("Color", "Red")
    session.select("Size", "42")
    result = session.commit(writer, stock_checker=FakeStock({"r42": 7}))
    assert result.stock is StockStatus.IN_STOCK


def test_custom_low_stock_threshold(grid_variants, writer):
    session = SelectionSession("shoe", grid_variants, settings=EngineSettings(low_stock_threshold=10))
    session.select("Color", "Red")
    session.select("Size", "40")

    assert session.commit(writer).stock is StockStatus.LOW_STOCK


def test_commit_rejects_bad_quantity(settings, grid_variants, writer):
    session = SelectionSession("shoe", grid_variants, settings=settings)

    with pytest.raises(ValueError):
        session.commit(writer, quantity=0)


def test_commit_detects_stale_catalog(settings, shoe_variants, writer):
    session = SelectionSession("shoe", shoe_variants, settings=settings)
    session.select("Color", "Red")
    session.select("Size", "40")
    changed = [RawVariant(id="v1", name="Red - 41", stock=3), shoe_variants[1]]

    with pytest.raises(StaleCatalogError) as err:
        session.commit(writer, source=FakeSource(changed))

    assert err.value.expected == session.fingerprint
    assert writer.lines == []


def test_commit_revalidation_uses_fresh_stock(settings, shoe_variants, writer):
    session = SelectionSession("shoe", shoe_variants, settings=settings)
    session.select("Color", "Red")
    session.select("Size", "40")
    restocked = [RawVariant(id="v1", name="Red - 40", stock=0), shoe_variants[1]]
    source = FakeSource(restocked)

    with pytest.raises(VariantOutOfStockError):
        session.commit(writer, source=source)

    source.variants = shoe_variants
    result = session.commit(writer, source=source)
    assert result.stock is StockStatus.LOW_STOCK
    assert source.calls == 2


# ================================
# 📋 ПЛАСКИЙ / ПРЯМИЙ / БЕЗ ВАРІАНТІВ
# ================================
def test_flat_mode_picks_by_id(settings, writer):
    flat = [RawVariant(id="k1", name="Standard"), RawVariant(id="k2", name="Deluxe", stock=0)]
    session = SelectionSession("kit", flat, settings=settings)

    with pytest.raises(InvalidSelectionError):
        session.select("Color", "Red")
    with pytest.raises(InvalidSelectionError):
        session.select_variant("k9")
    with pytest.raises(SelectionIncompleteError):
        session.commit(writer)

    session.select_variant("k1")
    assert session.facets() == {}
    assert session.commit(writer).variant_id == "k1"

    session.select_variant("k2")
    with pytest.raises(VariantOutOfStockError):
        session.commit(writer)


def test_select_variant_only_in_flat_mode(settings, grid_variants):
    session = SelectionSession("shoe", grid_variants, settings=settings)

    with pytest.raises(InvalidSelectionError):
        session.select_variant("r40")


def test_direct_mode_commits_single_variant(settings, writer):
    session = SelectionSession("tee", [RawVariant(id="one", name="Red - M", stock=20)], settings=settings)

    assert session.is_complete
    assert session.resolution().variant.id == "one"
    assert session.commit(writer).variant_id == "one"


def test_product_without_variants(settings, writer):
    session = SelectionSession("gift-card", [], settings=settings)

    result = session.commit(writer, quantity=3)

    assert session.resolution() is None
    assert result.variant is None
    assert result.stock is StockStatus.UNTRACKED
    assert writer.lines == [("gift-card", None, 3)]


def test_product_without_variants_respects_product_stock(settings, writer):
    session = SelectionSession("gift-card", [], settings=settings, product_stock=0)

    with pytest.raises(VariantOutOfStockError) as err:
        session.commit(writer)

    assert err.value.variant_id is None
    assert err.value.product_id == "gift-card"
    assert err.value.stock == 0
    assert writer.lines == []

    assert SelectionSession("mug", [], settings=settings, product_stock=2).commit(writer).stock is StockStatus.LOW_STOCK


def test_product_without_variants_asks_stock_checker_by_product_id(settings, writer):
    session = SelectionSession("gift-card", [], settings=settings, product_stock=50)

    with pytest.raises(VariantOutOfStockError):
        session.commit(writer, stock_checker=FakeStock({"gift-card": 0}))

    result = session.commit(writer, stock_checker=FakeStock({}))
    assert result.stock is StockStatus.IN_STOCK
    assert writer.lines == [("gift-card", None, 1)]
