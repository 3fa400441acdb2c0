"""Application configuration.

AppConfig is a frozen dataclass — immutable after creation, IDE-autocompletable,
no string-key dict lookups.
"""

import os
from collections.abc import Mapping
from dataclasses import dataclass, fields


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Application configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = AppConfig(port=8080, stop_on_end=False)
    """

    # Server
    host: str = "127.0.0.1"
    port: int = 3000

    # Chain execution
    stop_on_end: bool = True  # Skip remaining handlers once the response is ended
    threaded_handlers: bool = False  # Run sync handlers in a worker thread

    # Logging
    log_level: str = "info"
    access_log: bool = True

    # Limits
    max_body_size: int = 1024 * 1024  # 1 MiB

    @classmethod
    def from_env(
        cls,
        prefix: str = "SWITCHYARD_",
        environ: Mapping[str, str] | None = None,
    ) -> "AppConfig":
        """Build a config from environment variables.

        Each field is read from ``{prefix}{FIELD}`` (e.g. ``SWITCHYARD_PORT``).
        A bare ``PORT`` variable is honored when the prefixed one is absent.

        Raises ``ValueError`` if a value cannot be converted.
        """
        env = os.environ if environ is None else environ
        overrides: dict[str, object] = {}

        for f in fields(cls):
            raw = env.get(f"{prefix}{f.name.upper()}")
            if raw is None and f.name == "port":
                raw = env.get("PORT")
            if raw is None:
                continue
            overrides[f.name] = _coerce(raw, f.type, f.name)

        return cls(**overrides)


def _coerce(raw: str, annotation: object, name: str) -> object:
    if annotation in (bool, "bool"):
        lowered = raw.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off", ""):
            return False
        msg = f"Invalid boolean for {name}: {raw!r}"
        raise ValueError(msg)
    if annotation in (int, "int"):
        try:
            return int(raw)
        except ValueError:
            msg = f"Invalid integer for {name}: {raw!r}"
            raise ValueError(msg) from None
    return raw
