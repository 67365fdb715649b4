from cardcollection.db.store import DEFAULT_SEED, CardStore, SeedCard

__all__ = [
    "DEFAULT_SEED",
    "CardStore",
    "SeedCard",
]
