"""Locate the App a CLI command operates on.

Targets are either an import string (``blog.app:app``) or a path to a
Python file (``examples/blog/app.py:app``). The attribute defaults to
``app`` in both forms.
"""

import importlib
import importlib.util
import sys
from pathlib import Path
from types import ModuleType

from switchyard.app import App
from switchyard.errors import ConfigurationError

DEFAULT_ATTRIBUTE = "app"


def _import_target(location: str) -> ModuleType:
    if not location.endswith(".py"):
        try:
            return importlib.import_module(location)
        except ImportError as exc:
            raise ConfigurationError(f"Cannot import {location!r}: {exc}") from exc

    path = Path(location)
    if not path.is_file():
        raise ConfigurationError(f"No such file: {location}")
    spec = importlib.util.spec_from_file_location(path.stem, path)
    if spec is None or spec.loader is None:
        raise ConfigurationError(f"Cannot load {location!r} as a module")
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def resolve_app(target: str) -> App:
    """Return the App named by *target*.

    A callable found under the attribute that is not itself an App is a
    factory and is called with no arguments.

    Raises ``ConfigurationError`` when the module, the attribute or the
    App cannot be produced.
    """
    location, _, attr = target.rpartition(":") if ":" in target else (target, "", "")
    attr = attr or DEFAULT_ATTRIBUTE
    module = _import_target(location)

    try:
        obj = getattr(module, attr)
    except AttributeError:
        raise ConfigurationError(f"{location!r} has no attribute {attr!r}") from None

    if not isinstance(obj, App) and callable(obj):
        try:
            obj = obj()
        except Exception as exc:
            raise ConfigurationError(f"App factory {target!r} raised {exc!r}") from exc

    if not isinstance(obj, App):
        raise ConfigurationError(
            f"{target!r} is a {type(obj).__name__}, not a switchyard.App instance"
        )
    return obj


def load_app(target: str) -> App:
    """``resolve_app`` for commands: report the problem and exit 1 on failure."""
    try:
        return resolve_app(target)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
