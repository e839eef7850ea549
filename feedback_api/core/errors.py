# feedback_api/core/errors.py


class StorageError(Exception):
    """A storage or serialization failure the caller cannot correct."""
