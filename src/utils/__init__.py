"""
Utilities package.
"""
from .formatters import (
    MalformedTimestamp,
    mask_person_id,
    mask_company_id,
    format_national_id,
    format_date,
    format_time,
    format_currency,
    format_access_key,
)
from .file_handler import FileHandler, FileValidator, ZIPExtractor

__all__ = [
    "MalformedTimestamp",
    "mask_person_id",
    "mask_company_id",
    "format_national_id",
    "format_date",
    "format_time",
    "format_currency",
    "format_access_key",
    "FileHandler",
    "FileValidator",
    "ZIPExtractor",
]
