"""Method enum and the frozen Route / RouteMatch dataclasses."""

from dataclasses import dataclass
from enum import StrEnum

from switchyard._internal.types import Handler
from switchyard.errors import ConfigurationError
from switchyard.routing.pattern import MatchRule


class Method(StrEnum):
    """The HTTP methods a route can be registered under."""

    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, value: "str | Method") -> "Method":
        """Case-insensitive lookup. Raises ``ConfigurationError`` when unsupported."""
        try:
            return cls(value.upper())
        except ValueError:
            supported = ", ".join(m.value for m in cls)
            msg = f"Unsupported HTTP method {value!r}. Supported methods: {supported}"
            raise ConfigurationError(msg) from None


@dataclass(frozen=True, slots=True)
class Route:
    """A frozen route: one pattern under one method with its full chain.

    The chain already includes the global middleware that was registered
    before each ``register`` call that contributed to it.
    """

    method: Method
    rule: MatchRule
    chain: tuple[Handler, ...]

    @property
    def pattern(self) -> str:
        return self.rule.pattern


@dataclass(frozen=True, slots=True)
class RouteMatch:
    """Result of a successful route lookup."""

    route: Route
    params: dict[str, str]
