"""Ordered route table.

One ordered mapping per method from pattern string to an entry holding
the compiled rule and the accumulated chain. Lookup walks the entries of
the request method in registration order and returns the first
structural match.
"""

from collections.abc import Iterable
from dataclasses import dataclass, field

from switchyard._internal.types import Handler
from switchyard.errors import ConfigurationError, NotFound
from switchyard.routing.pattern import MatchRule, compile_pattern
from switchyard.routing.route import Method, Route, RouteMatch


@dataclass(slots=True)
class _Entry:
    """A pattern and its chain. Mutable until the table freezes."""

    rule: MatchRule
    chain: list[Handler] = field(default_factory=list)


class RouteTable:
    """Route table with first-match-wins lookup.

    Usage::

        table = RouteTable()
        table.register("GET", "/users/:id", [load_user, show_user])
        table.freeze()
        match = table.match("GET", "/users/42")
        match.params  # {"id": "42"}

    Registering the same ``(method, pattern)`` twice appends to the
    existing chain and keeps the entry's original lookup position.
    """

    __slots__ = ("_entries", "_frozen", "_routes")

    def __init__(self) -> None:
        self._entries: dict[Method, dict[str, _Entry]] = {m: {} for m in Method}
        self._frozen = False
        # Compiled state — set during freeze()
        self._routes: dict[Method, tuple[Route, ...]] = {}

    def register(self, method: str | Method, pattern: str, handlers: Iterable[Handler]) -> None:
        """Append *handlers* to the chain for ``(method, pattern)``.

        Raises ``ConfigurationError`` for an unsupported method, an invalid
        pattern, an empty handler list, or a non-callable handler.
        Raises ``RuntimeError`` once the table is frozen.
        """
        if self._frozen:
            msg = "Cannot add routes after the route table is frozen."
            raise RuntimeError(msg)

        verb = Method.parse(method)
        chain = list(handlers)
        if not chain:
            msg = f"No handlers given for {verb} {pattern!r}"
            raise ConfigurationError(msg)
        for handler in chain:
            if not callable(handler):
                msg = f"Handler for {verb} {pattern!r} is not callable: {handler!r}"
                raise ConfigurationError(msg)

        by_pattern = self._entries[verb]
        entry = by_pattern.get(pattern)
        if entry is None:
            entry = _Entry(rule=compile_pattern(pattern))
            by_pattern[pattern] = entry
        entry.chain.extend(chain)

    def freeze(self) -> None:
        """Compile entries into immutable routes. No more routes can be added."""
        if self._frozen:
            return
        self._routes = {
            method: tuple(
                Route(method=method, rule=entry.rule, chain=tuple(entry.chain))
                for entry in by_pattern.values()
            )
            for method, by_pattern in self._entries.items()
        }
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def routes(self) -> list[Route]:
        """All routes, grouped by method, each group in registration order."""
        if self._frozen:
            return [route for method in Method for route in self._routes[method]]
        return [
            Route(method=method, rule=entry.rule, chain=tuple(entry.chain))
            for method in Method
            for entry in self._entries[method].values()
        ]

    def chain_for(self, method: str | Method, pattern: str) -> tuple[Handler, ...]:
        """Return the chain registered for the exact ``(method, pattern)`` pair."""
        entry = self._entries[Method.parse(method)].get(pattern)
        if entry is None:
            msg = f"No route registered for {method} {pattern!r}"
            raise KeyError(msg)
        return tuple(entry.chain)

    def match(self, method: str, path: str) -> RouteMatch:
        """Find the first route for *method* whose pattern matches *path*.

        Raises ``NotFound`` if the method is not supported or no pattern
        matches. Works before and after ``freeze()``; serving code only
        calls it on a frozen table.
        """
        try:
            verb = Method(method)
        except ValueError:
            raise NotFound(f"No route matches {method} {path!r}") from None

        if self._frozen:
            for route in self._routes[verb]:
                pairs = route.rule.match(path)
                if pairs is not None:
                    return RouteMatch(route=route, params=dict(pairs))
        else:
            for entry in self._entries[verb].values():
                pairs = entry.rule.match(path)
                if pairs is not None:
                    route = Route(method=verb, rule=entry.rule, chain=tuple(entry.chain))
                    return RouteMatch(route=route, params=dict(pairs))

        raise NotFound(f"No route matches {method} {path!r}")
