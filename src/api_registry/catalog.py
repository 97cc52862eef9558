"""Machine-readable export of the registry for documentation tooling."""

import json

import yaml

from api_registry.model.actions import Action
from api_registry.model.controllers import Controller
from api_registry.model.params import Parameter
from api_registry.registry import Registry


def param_to_dict(param: Parameter) -> dict:
    data = {
        "key": param.key,
        "description": param.description,
        "required": param.required,
        "internal": param.internal,
        "since": param.since,
        "deprecated_since": param.deprecated_since,
        "deprecated_key": param.deprecated_key,
        "deprecated_key_since": param.deprecated_key_since,
        "default_value": param.default_value,
        "example_value": param.example_value,
        "possible_values": list(param.possible_values) if param.possible_values is not None else None,
    }
    return {k: v for k, v in data.items() if v is not None}


def action_to_dict(action: Action, include_internals: bool = False) -> dict:
    params = sorted(
        (p for p in action.params if include_internals or not p.internal),
        key=lambda p: p.key,
    )
    data = {
        "key": action.key,
        "path": action.path,
        "description": action.description,
        "since": action.since,
        "deprecated_since": action.deprecated_since,
        "post": action.post,
        "internal": action.internal,
        "has_response_example": action.response_example is not None,
        "changelog": [{"version": c.version, "description": c.description} for c in action.changelog],
        "params": [param_to_dict(p) for p in params],
    }
    return {k: v for k, v in data.items() if v is not None}


def controller_to_dict(controller: Controller, include_internals: bool = False) -> dict:
    actions = sorted(
        (a for a in controller.actions if include_internals or not a.internal),
        key=lambda a: a.key,
    )
    data = {
        "path": controller.path,
        "description": controller.description,
        "since": controller.since,
        "internal": controller.is_internal,
        "actions": [action_to_dict(a, include_internals) for a in actions],
    }
    return {k: v for k, v in data.items() if v is not None}


def catalog(registry: Registry, include_internals: bool = False) -> dict:
    """Describe every web service, hiding internal ones unless asked to."""
    return {
        "web_services": [
            controller_to_dict(c, include_internals)
            for c in registry.controllers()
            if include_internals or not c.is_internal
        ]
    }


def dump_yaml(data: dict) -> str:
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def dump_json(data: dict) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)
