# 🧩 variant_engine/domain/__init__.py
"""🧩 Доменний шар: чисті функції без I/O."""
