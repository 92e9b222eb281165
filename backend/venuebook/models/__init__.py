from .generated import (
    Activities,
    ActivityBlocks,
    Base,
    Customers,
    Organizations,
    Reservations,
    metadata,
)

__all__ = [
    "Base",
    "metadata",
    "Organizations",
    "Activities",
    "ActivityBlocks",
    "Customers",
    "Reservations",
]
