"""Operation pipeline stages: mutation guard and connection completion."""

from .mutation_guard import check, guard
from .pagination import complete_connections, complete_each

__all__ = ["guard", "check", "complete_connections", "complete_each"]
