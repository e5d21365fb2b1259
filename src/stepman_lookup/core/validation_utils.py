"""Shape checks for decoded JSON values.

JSON objects are decoded leniently: a missing field yields its zero value, a
field of the wrong JSON type raises :class:`ValueError` naming the field.
Unknown fields are ignored.
"""

from __future__ import annotations

from typing import Any, Dict, List, Mapping

_JSON_TYPE_NAMES = {
    dict: "object",
    list: "array",
    str: "string",
    bool: "boolean",
    int: "number",
}


def _type_name(value: Any) -> str:
    if value is None:
        return "null"
    for cls, name in _JSON_TYPE_NAMES.items():
        if isinstance(value, cls):
            return name
    if isinstance(value, float):
        return "number"
    return type(value).__name__


def _mismatch(field: str, want: str, value: Any) -> ValueError:
    return ValueError(f"field '{field}': expected {want}, got {_type_name(value)}")


def require_mapping(value: Any, field: str) -> Dict[str, Any]:
    """Return ``value`` as a dict; ``None`` becomes ``{}``."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise _mismatch(field, "object", value)
    return dict(value)


def get_mapping(obj: Mapping[str, Any], key: str, field: str) -> Dict[str, Any]:
    return require_mapping(obj.get(key), f"{field}.{key}" if field else key)


def get_str(obj: Mapping[str, Any], key: str, field: str = "") -> str:
    value = obj.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise _mismatch(f"{field}.{key}" if field else key, "string", value)
    return value


def get_bool(obj: Mapping[str, Any], key: str, field: str = "") -> bool:
    value = obj.get(key)
    if value is None:
        return False
    if not isinstance(value, bool):
        raise _mismatch(f"{field}.{key}" if field else key, "boolean", value)
    return value


def get_int(obj: Mapping[str, Any], key: str, field: str = "") -> int:
    name = f"{field}.{key}" if field else key
    value = obj.get(key)
    if value is None:
        return 0
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _mismatch(name, "number", value)
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"field '{name}': expected integer, got {value}")
    return int(value)


def get_list(obj: Mapping[str, Any], key: str, field: str = "") -> List[Any]:
    value = obj.get(key)
    if value is None:
        return []
    if not isinstance(value, list):
        raise _mismatch(f"{field}.{key}" if field else key, "array", value)
    return list(value)


def get_str_list(obj: Mapping[str, Any], key: str, field: str = "") -> List[str]:
    name = f"{field}.{key}" if field else key
    items = get_list(obj, key, field)
    for idx, item in enumerate(items):
        if item is not None and not isinstance(item, str):
            raise _mismatch(f"{name}[{idx}]", "string", item)
    # null elements decode as empty strings
    return ["" if item is None else item for item in items]


def require_str_mapping(value: Any, field: str) -> Dict[str, str]:
    """Return ``value`` as a ``Dict[str, str]`` or raise :class:`ValueError`."""
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise _mismatch(field, "object", value)
    for key, item in value.items():
        if item is not None and not isinstance(item, str):
            raise _mismatch(f"{field}.{key}", "string", item)
    return {key: "" if item is None else item for key, item in value.items()}
