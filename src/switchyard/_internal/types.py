"""Shared type aliases used across switchyard modules."""

from collections.abc import Callable
from typing import Any, TypeAlias

# Chain handler — called as handler(request, response); sync or async
Handler: TypeAlias = Callable[..., Any]
