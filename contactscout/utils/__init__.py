from .extractor import extract_emails
from .urls import is_valid_url

__all__ = [
    "extract_emails",
    "is_valid_url",
]
