from typing import Any, List, Mapping


def has_options(schema: Any) -> bool:
    """Whether a rule's schema declares anything configurable."""
    if isinstance(schema, (list, tuple)):
        return len(schema) > 0
    if isinstance(schema, Mapping):
        return len(schema) > 0
    return False


def _collect(schema: Any, out: List[str]) -> None:
    if isinstance(schema, (list, tuple)):
        for item in schema:
            _collect(item, out)
        return
    if not isinstance(schema, Mapping):
        return

    properties = schema.get("properties")
    if isinstance(properties, Mapping):
        for name, sub_schema in properties.items():
            out.append(name)
            _collect(sub_schema, out)

    items = schema.get("items")
    if items is not None:
        _collect(items, out)

    for key in ("anyOf", "oneOf", "allOf"):
        if key in schema:
            _collect(schema[key], out)


def get_all_named_options(schema: Any) -> List[str]:
    """Every option name declared in the schema, nested ones included, without duplicates."""
    names: List[str] = []
    _collect(schema, names)
    return list(dict.fromkeys(names))
