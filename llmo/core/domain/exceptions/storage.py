"""Storage exceptions for LLMO Checker."""

from .base import LLMOError


class StorageError(LLMOError):
    """Failed to persist or read diagnosis records.

    Common causes:
    - Database file not writable
    - Qdrant unreachable or wrong credentials
    - Vector size differs from the collection's configured size
    """

    error_code = "LLMO_STO_001"
