# 🧩 variant_engine/shared/__init__.py
"""🧩 Спільний шар: утиліти логування, незмінні структури та ієрархія помилок."""
