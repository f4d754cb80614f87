"""Decorator that makes sure the object is 'connected' according to it's connected predicate."""

from functools import wraps
from typing import Any, Callable


def connection(f: Callable) -> Callable:
    """Decorate a method to ensure the object is connected before it is called.

    Example:
    ```python
    @connection
    def _count(self) -> int:
       pass
    ```
    """

    @wraps(f)
    def wrapper(connectable: Any, *args: Any, **kwargs: Any) -> Any:
        if not connectable.connected():
            connectable.connect()
        return f(connectable, *args, **kwargs)

    return wrapper
