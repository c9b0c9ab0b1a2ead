"""Schema migrations (SQLite)."""
from __future__ import annotations

from .runner import MIGRATIONS, Migration, apply_migrations, applied_versions, current_version

__all__ = ["MIGRATIONS", "Migration", "apply_migrations", "applied_versions", "current_version"]
