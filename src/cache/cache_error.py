"""Any exception that can occur during cache operations."""


class CacheError(Exception):
    """Error raised when summary cache operation can not be performed."""
