from festivals.stores.interfaces import FestivalSeed, FestivalStore, PlanStore, SetSeed

__all__ = [
    "FestivalStore",
    "PlanStore",
    "FestivalSeed",
    "SetSeed",
]
