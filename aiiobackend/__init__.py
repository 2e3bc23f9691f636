"""Order placement over SQLAlchemy: domain models, repositories and a filter-driven query builder."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "domain",
    "filters",
    "helpers",
    "main",
    "place_order",
    "query",
    "repositories",
]