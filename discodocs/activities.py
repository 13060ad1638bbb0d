"""Flatten the resource tree of a REST description into activities."""
from dataclasses import dataclass
from typing import Iterator

from .discovery import JsonSchema, Parameter, RestDescription, RestMethod, RestResource
from .errors import UnknownActivity
from .naming import kebab_case, page_name, snake_case, title_words

# Methods declared at the top level of a description are grouped under this resource.
TOP_LEVEL_RESOURCE = "methods"

UPLOAD_PROTOCOLS = ("simple", "resumable")

REQUEST_VALUE = "RequestValue"
RESPONSE_RESULT = "ResponseResult"
PART = "Part"
NESTED_TYPE = "NestedType"


@dataclass(frozen=True)
class Activity:
    """One API method, addressed through its top-level resource."""

    resource: str
    path: tuple[str, ...]
    name: str
    method: RestMethod

    @property
    def id(self) -> str:
        return self.method.id

    @property
    def subcommand(self) -> str:
        # agent.entityTypes.batchDelete -> agent-entity-types-batch-delete
        return "-".join(kebab_case(p) for p in (*self.path, self.name))

    @property
    def call_name(self) -> str:
        return "_".join(snake_case(p) for p in (*self.path, self.name))

    @property
    def page(self) -> str:
        return page_name(self.resource, self.subcommand)

    @property
    def title(self) -> str:
        return title_words(self.subcommand)

    @property
    def resource_title(self) -> str:
        return title_words(self.resource)

    @property
    def resource_command(self) -> str:
        return kebab_case(self.resource)

    @property
    def resource_accessor(self) -> str:
        return snake_case(self.resource)


def _walk(resource_name: str, path: tuple[str, ...], resource: RestResource) -> Iterator[Activity]:
    for name, method in resource.methods.items():
        yield Activity(resource_name, path, name, method)
    for sub_name, sub in resource.resources.items():
        yield from _walk(resource_name, (*path, sub_name), sub)


def iter_activities(desc: RestDescription) -> list[Activity]:
    """All activities, sorted by resource and then by subcommand."""
    activities: list[Activity] = []
    for name, method in desc.methods.items():
        activities.append(Activity(TOP_LEVEL_RESOURCE, (), name, method))
    for name, resource in desc.resources.items():
        activities.extend(_walk(name, (), resource))
    return sorted(activities, key=lambda a: (a.resource, a.subcommand))


def group_by_resource(desc: RestDescription) -> dict[str, list[Activity]]:
    groups: dict[str, list[Activity]] = {}
    for activity in iter_activities(desc):
        groups.setdefault(activity.resource, []).append(activity)
    return groups


def find_activity(desc: RestDescription, method_id: str) -> Activity:
    for activity in iter_activities(desc):
        if activity.id == method_id:
            return activity
    raise UnknownActivity(method_id)


def required_parameters(method: RestMethod) -> list[tuple[str, Parameter]]:
    # parameterOrder first, then any remaining required parameters by name.
    ordered = [(n, method.parameters[n]) for n in method.parameter_order if n in method.parameters]
    seen = {n for n, _ in ordered}
    rest = sorted(
        (n, p) for n, p in method.parameters.items() if p.required and n not in seen
    )
    return ordered + rest


def optional_parameters(method: RestMethod) -> list[tuple[str, Parameter]]:
    required = {n for n, _ in required_parameters(method)}
    return sorted((n, p) for n, p in method.parameters.items() if n not in required)


def upload_protocols(method: RestMethod) -> list[str]:
    if not method.supports_media_upload or method.media_upload is None:
        return []
    return [p for p in UPLOAD_PROTOCOLS if p in method.media_upload.protocols]


def supports_download(method: RestMethod) -> bool:
    return method.supports_media_download


def _referenced_schemas(schema: JsonSchema) -> Iterator[str]:
    if schema.ref:
        yield schema.ref
    for prop in schema.properties.values():
        yield from _referenced_schemas(prop)
    if schema.items is not None:
        yield from _referenced_schemas(schema.items)
    if schema.additional_properties is not None:
        yield from _referenced_schemas(schema.additional_properties)


def schema_traits(desc: RestDescription) -> dict[str, set[str]]:
    """
    Classify schemas by how activities and other schemas use them.

    RequestValue: sent as a request body. ResponseResult: returned by a method.
    Part: embedded in another schema. NestedType: none of the above.
    """
    traits: dict[str, set[str]] = {name: set() for name in desc.schemas}
    for activity in iter_activities(desc):
        if activity.method.request is not None:
            traits.setdefault(activity.method.request.ref, set()).add(REQUEST_VALUE)
        if activity.method.response is not None:
            traits.setdefault(activity.method.response.ref, set()).add(RESPONSE_RESULT)
    for name, schema in desc.schemas.items():
        for ref in _referenced_schemas(schema):
            if ref != name:
                traits.setdefault(ref, set()).add(PART)
    for marks in traits.values():
        if not marks:
            marks.add(NESTED_TYPE)
    return traits
