# ⚙️ config_service.py
"""
⚙️ config_service.py — Сервіс для доступу до статичної конфігурації рушія.

🔹 Клас `ConfigService`:
- Завантажує конфігурацію з config.yaml та змінних середовища (.env).
- Надає єдиний метод .get() для доступу до будь-якого параметра за крапковим ключем.
- Працює як Singleton; `reset()` скидає кеш (для тестів).
"""

# 🌐 Зовнішні бібліотеки
import yaml                                  # 📦 YAML-парсинг
from dotenv import load_dotenv               # 🔐 Завантаження змінних із .env

# 🔠 Системні імпорти
import logging                               # 🧾 Логування
import os                                    # 📁 Доступ до змінних середовища
from pathlib import Path                     # 📁 Побудова шляху до файлів
from typing import Any, Dict, Optional       # 🧩 Типізація

# 🧩 Внутрішні модулі проєкту
from variant_engine.shared.utils.logger import LOG_NAME

logger = logging.getLogger(f"{LOG_NAME}.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"   # 📘 Вбудований config.yaml
CONFIG_PATH_ENV = "VARIANT_ENGINE_CONFIG"                      # 🔀 Перевизначення шляху до YAML

# 🔐 Змінні середовища → крапкові ключі конфігурації
ENV_OVERRIDES: Dict[str, str] = {
    "VARIANT_ENGINE_LOG_LEVEL": "logging.level",
    "VARIANT_ENGINE_LOW_STOCK_THRESHOLD": "variants.low_stock_threshold",
}


# ============================
# ⚙️ СЕРВІС ДОСТУПУ ДО КОНФІГІВ
# ============================
class ConfigService:
    """
    ⚙️ Надає доступ до всіх статичних параметрів рушія.
    Працює як Singleton — конфігурація зчитується лише один раз.
    """

    _instance: Optional["ConfigService"] = None                 # 🧩 Singleton-екземпляр
    _config: Dict[str, Any]                                     # 📦 Обʼєднана конфігурація

    def __new__(cls):
        # ✅ Патерн Singleton: створюємо лише один екземпляр
        if cls._instance is None:
            instance = super().__new__(cls)
            instance._config = {}
            instance._load_all_configs()
            cls._instance = instance
            logger.debug("🔄 Singleton ConfigService створено і конфігурація завантажена")
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """♻️ Скидає Singleton — наступний виклик перечитає джерела."""
        cls._instance = None

    def _load_all_configs(self) -> None:
        """
        📥 Завантажує всі джерела конфігурації в один словник.
        Пріоритет (останній перемагає): config.yaml → .env/змінні середовища.
        """

        # --- 1. YAML-файл ---
        yaml_path = Path(os.getenv(CONFIG_PATH_ENV) or DEFAULT_CONFIG_PATH)
        try:
            logger.debug("📘 Завантаження %s", yaml_path)
            with open(yaml_path, "r", encoding="utf-8") as f:
                self._deep_update(self._config, yaml.safe_load(f) or {})
        except (FileNotFoundError, yaml.YAMLError) as e:
            logger.warning("⚠️ Не вдалося завантажити %s: %s", yaml_path, e)

        # --- 2. .env змінні ---
        load_dotenv()                                           # 🔐 Ініціалізує змінні середовища з .env
        env_vars = {
            key: os.getenv(env_name)
            for env_name, key in ENV_OVERRIDES.items()
            if os.getenv(env_name) not in (None, "")
        }
        self._deep_update(self._config, self._unflatten_dict(env_vars))

        logger.info("✅ Конфігурацію успішно завантажено.")
        logger.debug("🔍 Обʼєднаний словник конфігурації: %s", self._config)

    def get(self, key: str, default: Any = None) -> Any:
        """
        🔑 Отримує значення конфігурації за ключем (наприклад: 'variants.low_stock_threshold').

        Args:
            key (str): Ключ у форматі з крапкою.
            default (Any): Значення за замовчуванням, якщо ключ не знайдено.

        Returns:
            Any: Значення параметра або default.
        """
        value: Any = self._config
        for part in key.split("."):
            if isinstance(value, dict) and part in value:
                value = value[part]                             # 🔎 Переходимо глибше в структуру
            else:
                logger.debug("❓ Ключ '%s' не знайдено, повертаємо значення за замовчуванням", key)
                return default
        return value

    # ===============================
    # 🔧 ДОПОМІЖНІ МЕТОДИ ЗЛИТТЯ КОНФІГІВ
    # ===============================

    @staticmethod
    def _unflatten_dict(d: Dict[str, Any]) -> Dict[str, Any]:
        """
        🔁 Перетворює ключі з крапками в ієрархічний словник.
        'variants.low_stock_threshold' → {'variants': {'low_stock_threshold': ...}}
        """
        result: Dict[str, Any] = {}
        for key, value in d.items():
            parts = key.split(".")
            d_ref = result
            for part in parts[:-1]:
                d_ref = d_ref.setdefault(part, {})
            d_ref[parts[-1]] = value
        return result

    def _deep_update(self, source: Dict[str, Any], overrides: Dict[str, Any]) -> None:
        """
        🔁 Рекурсивно обʼєднує два словники (оновлення значень).
        """
        for key, value in overrides.items():
            if isinstance(value, dict) and isinstance(source.get(key), dict):
                self._deep_update(source[key], value)           # 🔁 Глибоке обʼєднання
            else:
                source[key] = value                             # 🧩 Перезапис простого значення
