# tests/conftest.py
import os
import sys
from pathlib import Path

import pytest

# 1) Гасимо автопідхоплення сторонніх плагінів
os.environ.setdefault("PYTEST_DISABLE_PLUGIN_AUTOLOAD", "1")

# 2) Додаємо src в sys.path, щоб працював імпорт "variant_engine.…"
ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

from variant_engine.config.config_service import ConfigService  # noqa: E402
from variant_engine.domain.variants.entities import RawVariant  # noqa: E402


@pytest.fixture(autouse=True)
def _fresh_config():
    """Кожен тест бачить свіжо прочитану конфігурацію."""
    ConfigService.reset()
    yield
    ConfigService.reset()


@pytest.fixture
def shoe_variants():
    """Взуття: два кольори × два розміри, але існують лише (Red, 40) і (Blue, 42)."""
    return [
        RawVariant(id="v1", name="Red - 40", stock=3),
        RawVariant(id="v2", name="Blue - 42", stock=10),
    ]


@pytest.fixture
def grid_variants():
    """Повна сітка 2 × 2 з явними мапами атрибутів."""
    return [
        RawVariant(id="r40", attribute_values={"Color": "Red", "Size": "40"}, stock=5),
        RawVariant(id="r42", attribute_values={"Color": "Red", "Size": "42"}, stock=0),
        RawVariant(id="b40", attribute_values={"Color": "Blue", "Size": "40"}, stock=2),
        RawVariant(id="b42", attribute_values={"Color": "Blue", "Size": "42"}),
    ]
