"""Locate web service definitions by import path.

A definition is named ``package.module:attribute``. Without an attribute the
module's ``define`` function is used. Classes are instantiated with no
arguments; the resulting object must provide ``define(registry)``.
"""

import importlib
import inspect
from pathlib import Path

import yaml

from api_registry.errors import RegistryError
from api_registry.registry import Definition, Registry

DEFAULT_ATTRIBUTE = "define"


class LoaderError(RegistryError):
    """A web service definition could not be located."""


def resolve(spec: str) -> Definition:
    """Resolve ``module:attribute`` to a definition usable by Registry.define."""
    module_name, _, attribute = spec.partition(":")
    attribute = attribute or DEFAULT_ATTRIBUTE
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise LoaderError(f"Cannot import web service module '{module_name}': {e}") from e

    target = module
    for part in attribute.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise LoaderError(f"Module '{module_name}' has no attribute '{attribute}'") from None

    if inspect.isclass(target):
        target = target()
    if not (callable(target) or hasattr(target, "define")):
        raise LoaderError(f"'{spec}' is neither callable nor a web service")
    return target


def read_config(config_path: Path) -> list[str]:
    """Read the ``services`` list from a YAML config file."""
    try:
        doc = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise LoaderError(f"Invalid YAML in {config_path}: {e}") from e

    if doc is None:
        return []
    services = doc.get("services", []) if isinstance(doc, dict) else None
    if not isinstance(services, list) or not all(isinstance(s, str) for s in services):
        raise LoaderError(f"{config_path}: 'services' must be a list of 'module:attribute' strings")
    return services


def load_registry(specs: list[str]) -> Registry:
    """Build a registry from the given definitions, then close it."""
    registry = Registry()
    registry.define(*(resolve(spec) for spec in specs))
    registry.close()
    return registry
