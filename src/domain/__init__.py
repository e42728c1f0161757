"""Domain models and engines for the dealer inventory ledger.

Record types are plain Pydantic models, independent from persistence models.
Engines receive an `EntityStore` and never reach for a global one, so
business logic and tests can evolve without DB coupling.
"""

__all__ = [
    "access_policy",
    "directory",
    "inventory",
    "ledger",
    "ledger_engine",
]
