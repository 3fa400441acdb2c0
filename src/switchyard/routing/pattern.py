"""Path pattern compilation.

A pattern is split on ``/``. A segment written ``:name`` captures one or
more non-``/`` characters under ``name``; every other segment is a
literal matched verbatim. Patterns compile once, at registration, into an
anchored regex::

    rule = compile_pattern("/posts/:id/comments/:commentId/replies")
    rule.match("/posts/42/comments/7/replies")
    # [("id", "42"), ("commentId", "7")]
"""

import re
from dataclasses import dataclass

from switchyard.errors import ConfigurationError

PARAM_PREFIX = ":"
PARAM_REGEX = r"([^/]+)"


@dataclass(frozen=True, slots=True)
class Segment:
    """A parsed segment of a path pattern.

    Literal: ``users`` (is_param=False)
    Param:   ``:id``   (is_param=True, name="id")
    """

    value: str
    is_param: bool = False
    name: str | None = None


@dataclass(frozen=True, slots=True)
class MatchRule:
    """A compiled pattern.

    ``match()`` requires the whole path to match. Trailing slashes are
    significant: ``/users`` and ``/users/`` are different paths.
    """

    pattern: str
    segments: tuple[Segment, ...]
    regex: re.Pattern[str]

    @property
    def param_names(self) -> tuple[str, ...]:
        return tuple(s.name for s in self.segments if s.is_param and s.name is not None)

    def match(self, path: str) -> list[tuple[str, str]] | None:
        """Return ``(name, value)`` pairs in declaration order, or ``None``."""
        m = self.regex.fullmatch(path)
        if m is None:
            return None
        return list(zip(self.param_names, m.groups(), strict=True))


def parse_pattern(pattern: str) -> list[Segment]:
    """Split a pattern into literal and parameter segments.

    Examples::

        "/users"        -> [Segment(""), Segment("users")]
        "/users/:id"    -> [Segment(""), Segment("users"), Segment(":id", True, "id")]
        "/files/*"      -> [Segment(""), Segment("files"), Segment("*")]

    The leading empty segment is the root before the first ``/``.
    """
    if not pattern.startswith("/"):
        msg = f"Route pattern must start with '/': {pattern!r}"
        raise ConfigurationError(msg)

    segments: list[Segment] = []
    seen: set[str] = set()
    for part in pattern.split("/"):
        if part.startswith(PARAM_PREFIX) and len(part) > len(PARAM_PREFIX):
            name = part[len(PARAM_PREFIX) :]
            if name in seen:
                msg = f"Duplicate parameter name {name!r} in route pattern {pattern!r}"
                raise ConfigurationError(msg)
            seen.add(name)
            segments.append(Segment(value=part, is_param=True, name=name))
        else:
            segments.append(Segment(value=part))
    return segments


def compile_pattern(pattern: str) -> MatchRule:
    """Compile *pattern* into a reusable ``MatchRule``.

    Raises ``ConfigurationError`` if the pattern does not start with ``/``
    or declares the same parameter name twice.
    """
    segments = parse_pattern(pattern)
    source = "/".join(PARAM_REGEX if s.is_param else re.escape(s.value) for s in segments)
    return MatchRule(pattern=pattern, segments=tuple(segments), regex=re.compile(source))
