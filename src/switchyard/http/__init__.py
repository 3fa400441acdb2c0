"""HTTP primitives — the request view and the response sink handlers receive."""

from switchyard.http.headers import Headers
from switchyard.http.query import QueryParams
from switchyard.http.request import Request
from switchyard.http.response import Response

__all__ = ["Headers", "QueryParams", "Request", "Response"]
