"""Вспомогательные утилиты blog_core."""
