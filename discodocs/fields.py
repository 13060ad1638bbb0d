"""Flatten request schemas into the key=value cursors accepted on the command line."""
from dataclasses import dataclass

from .discovery import JsonSchema, RestDescription
from .naming import kebab_case

POD = "pod"
VEC = "vec"
MAP = "map"


@dataclass(frozen=True)
class FieldInfo:
    cursor: str
    json_path: str
    json_type: str
    container: str
    description: str = ""


def json_type(schema: JsonSchema) -> str:
    # Discovery encodes 64 bit integers as strings, so only `integer` maps to int.
    if schema.type == "integer":
        return "int"
    if schema.type == "number":
        return "float"
    if schema.type == "boolean":
        return "boolean"
    return "string"


def _resolve(desc: RestDescription, schema: JsonSchema) -> tuple[JsonSchema, str | None]:
    if schema.ref:
        return desc.schemas.get(schema.ref, JsonSchema()), schema.ref
    return schema, None


def _is_object(schema: JsonSchema) -> bool:
    return schema.type == "object" or bool(schema.properties)


def _flatten(
    desc: RestDescription,
    schema: JsonSchema,
    cursor: list[str],
    path: list[str],
    stack: tuple[str, ...],
    out: list[FieldInfo],
) -> None:
    for name, prop in schema.properties.items():
        if prop.read_only:
            continue
        resolved, ref = _resolve(desc, prop)
        container = POD
        item = resolved
        if resolved.type == "array" and resolved.items is not None:
            container = VEC
            item, ref = _resolve(desc, resolved.items)
        elif resolved.additional_properties is not None and not resolved.properties:
            container = MAP
            item, ref = _resolve(desc, resolved.additional_properties)

        sub_cursor = [*cursor, kebab_case(name)]
        sub_path = [*path, name]
        if _is_object(item):
            # Lists and maps of objects cannot be expressed as a single key=value.
            if container != POD or (ref is not None and ref in stack):
                continue
            _flatten(desc, item, sub_cursor, sub_path, stack + ((ref,) if ref else ()), out)
            continue
        out.append(
            FieldInfo(
                cursor=".".join(sub_cursor),
                json_path=".".join(sub_path),
                json_type=json_type(item),
                container=container,
                description=(prop.description or resolved.description).strip(),
            )
        )


def request_fields(desc: RestDescription, schema_name: str) -> list[FieldInfo]:
    """
    All settable, non read-only fields of a request schema, sorted by cursor.

    Nested objects are flattened into dotted cursors (budget.display-name).
    A schema already being expanded on the current path is not expanded again.
    """
    schema = desc.schemas.get(schema_name)
    if schema is None:
        return []
    out: list[FieldInfo] = []
    _flatten(desc, schema, [], [], (schema_name,), out)
    return sorted(out, key=lambda f: f.cursor)
