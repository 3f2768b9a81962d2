"""
Models package - Data structures for the application.
"""
from .document import (
    ProcessingStatus,
    AddressInfo,
    PartyInfo,
    LineItem,
    Installment,
    PresentationDocument,
)
from .config import (
    Settings,
    EnvironmentSettings,
)
from .results import (
    ProcessingResult,
    ProcessingError,
    BatchProcessingResult,
)

__all__ = [
    # Presentation models
    "ProcessingStatus",
    "AddressInfo",
    "PartyInfo",
    "LineItem",
    "Installment",
    "PresentationDocument",
    # Configuration
    "Settings",
    "EnvironmentSettings",
    # Results
    "ProcessingResult",
    "ProcessingError",
    "BatchProcessingResult",
]
