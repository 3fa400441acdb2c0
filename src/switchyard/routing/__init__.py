"""Routing — pattern compilation and the ordered route table.

Routes are registered during setup and the table is frozen when the app
starts serving.
"""

from switchyard.routing.pattern import MatchRule, compile_pattern
from switchyard.routing.route import Method, Route, RouteMatch
from switchyard.routing.table import RouteTable

__all__ = ["MatchRule", "Method", "Route", "RouteMatch", "RouteTable", "compile_pattern"]
