# 🛍️ variant_engine/application/__init__.py
"""🛍️ Прикладний шар: сесія вибору варіанта поверх чистого домену."""

from .selection_session import CommitResult, SelectionMode, SelectionSession

__all__ = ["CommitResult", "SelectionMode", "SelectionSession"]
