"""Load Google API discovery documents (REST descriptions) into typed models."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from urllib.parse import urlparse

import httpx
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic.alias_generators import to_camel

from .config import settings
from .errors import FetchError, InvalidDiscoveryDocument, OriginNotAllowed

logger = logging.getLogger(__name__)

REST_DESCRIPTION_KIND = "discovery#restDescription"

# Prefer JSON, allow YAML for locally mirrored documents.
DISCOVERY_ACCEPT = "application/json, application/yaml, text/yaml, */*"


class _DiscoveryModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class JsonSchema(_DiscoveryModel):
    id: str | None = None
    type: str | None = None
    ref: str | None = Field(None, alias="$ref")
    description: str = ""
    format: str | None = None
    properties: dict[str, JsonSchema] = {}
    items: JsonSchema | None = None
    additional_properties: JsonSchema | None = None
    read_only: bool = False
    enum: list[str] = []

    @field_validator("additional_properties", mode="before")
    @classmethod
    def drop_boolean_additional_properties(cls, v):
        # JSON schema allows `additionalProperties: true`, which carries no type.
        return None if isinstance(v, bool) else v


class Parameter(_DiscoveryModel):
    type: str = "string"
    format: str | None = None
    location: str = "query"
    required: bool = False
    repeated: bool = False
    description: str = ""
    default: str | None = None
    enum: list[str] = []
    pattern: str | None = None


class SchemaRef(_DiscoveryModel):
    ref: str = Field(..., alias="$ref")
    parameter_name: str | None = None


class UploadProtocol(_DiscoveryModel):
    multipart: bool = False
    path: str = ""


class MediaUpload(_DiscoveryModel):
    accept: list[str] = []
    max_size: str | None = None
    protocols: dict[str, UploadProtocol] = {}


class RestMethod(_DiscoveryModel):
    id: str
    path: str = ""
    flat_path: str | None = None
    http_method: str = "GET"
    description: str = ""
    parameters: dict[str, Parameter] = {}
    parameter_order: list[str] = []
    request: SchemaRef | None = None
    response: SchemaRef | None = None
    scopes: list[str] = []
    supports_media_upload: bool = False
    media_upload: MediaUpload | None = None
    supports_media_download: bool = False
    use_media_download_service: bool = False


class RestResource(_DiscoveryModel):
    methods: dict[str, RestMethod] = {}
    resources: dict[str, RestResource] = {}


class RestDescription(_DiscoveryModel):
    kind: str = REST_DESCRIPTION_KIND
    name: str
    version: str
    title: str = ""
    description: str = ""
    revision: str = ""
    canonical_name: str | None = None
    root_url: str = ""
    service_path: str = ""
    base_url: str = ""
    documentation_link: str | None = None
    parameters: dict[str, Parameter] = {}
    auth: dict = {}
    schemas: dict[str, JsonSchema] = {}
    resources: dict[str, RestResource] = {}
    methods: dict[str, RestMethod] = {}

    @property
    def display_name(self) -> str:
        return self.canonical_name or self.name

    @property
    def scopes(self) -> dict[str, str]:
        # OAuth2 scope URL -> description.
        raw = ((self.auth or {}).get("oauth2") or {}).get("scopes") or {}
        return {url: (info or {}).get("description", "") for url, info in raw.items()}

    @property
    def endpoint(self) -> str:
        if self.root_url:
            return self.root_url.rstrip("/") + "/" + self.service_path.lstrip("/")
        return self.base_url


class DirectoryItem(_DiscoveryModel):
    id: str = ""
    name: str
    version: str
    title: str = ""
    description: str = ""
    discovery_rest_url: str = ""
    preferred: bool = False


JsonSchema.model_rebuild()
RestResource.model_rebuild()


def _is_url(source: str) -> bool:
    return urlparse(source).scheme in ("http", "https")


def _origin_from_url(url: str) -> str:
    # Return scheme + netloc for allowlist checks (e.g. https://www.googleapis.com).
    parsed = urlparse(url.strip().rstrip("/"))
    if parsed.scheme and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}"
    return ""


def check_allowed_origin(url: str) -> None:
    # Raise OriginNotAllowed if origins are restricted and url's origin is not listed.
    if not settings.allowed_discovery_origins:
        return
    origin = _origin_from_url(url)
    allowed = [o.rstrip("/") for o in settings.allowed_discovery_origins]
    if not origin or origin.rstrip("/") not in allowed:
        raise OriginNotAllowed(url)


def _decode(text: str, content_type: str, name: str) -> object:
    # JSON first; YAML when the content type or file name says so, or JSON fails.
    if "yaml" in content_type or name.lower().endswith((".yaml", ".yml")):
        return yaml.safe_load(text)
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        return yaml.safe_load(text)


def _get_json(url: str, client: httpx.Client | None = None) -> object:
    check_allowed_origin(url)
    headers = {"Accept": DISCOVERY_ACCEPT}
    try:
        if client is None:
            with httpx.Client(timeout=settings.fetch_timeout) as own_client:
                r = own_client.get(url, headers=headers)
                r.raise_for_status()
        else:
            r = client.get(url, headers=headers)
            r.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise FetchError(f"Could not fetch discovery document: {e.response.status_code} from {url}") from e
    except httpx.RequestError as e:
        raise FetchError(f"Could not fetch discovery document (check URL and network): {e!s}") from e
    content_type = (r.headers.get("content-type") or "").split(";")[0].strip().lower()
    try:
        return _decode(r.text, content_type, urlparse(url).path)
    except yaml.YAMLError as e:
        raise InvalidDiscoveryDocument(f"Invalid response from {url}: {e!s}") from e


def parse_discovery(data: object) -> RestDescription:
    if not isinstance(data, dict):
        raise InvalidDiscoveryDocument("Discovery document is not a JSON object")
    kind = data.get("kind")
    if kind != REST_DESCRIPTION_KIND:
        raise InvalidDiscoveryDocument(f"Unexpected document kind {kind!r}, expected {REST_DESCRIPTION_KIND!r}")
    for key in ("name", "version"):
        if not data.get(key):
            raise InvalidDiscoveryDocument(f"Discovery document is missing {key!r}")
    try:
        return RestDescription.model_validate(data)
    except ValidationError as e:
        raise InvalidDiscoveryDocument(f"Malformed discovery document: {e}") from e


def load_discovery(source: str, client: httpx.Client | None = None) -> RestDescription:
    """
    Load a REST description from an http(s) URL or a local JSON/YAML file.
    """
    if _is_url(source):
        logger.debug("Fetching discovery document from %s", source)
        data = _get_json(source, client)
    else:
        path = Path(source)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise FetchError(f"Could not read discovery document {source}: {e!s}") from e
        except UnicodeDecodeError as e:
            raise InvalidDiscoveryDocument(f"Discovery document {source} is not valid UTF-8: {e!s}") from e
        try:
            data = _decode(text, "", path.name)
        except yaml.YAMLError as e:
            raise InvalidDiscoveryDocument(f"Could not parse {source}: {e!s}") from e
    return parse_discovery(data)


def discovery_url(name: str, version: str, directory_url: str | None = None) -> str:
    base = (directory_url or settings.discovery_directory_url).rstrip("/")
    return f"{base}/{name}/{version}/rest"


def fetch_directory(
    url: str | None = None,
    preferred_only: bool = False,
    client: httpx.Client | None = None,
) -> list[DirectoryItem]:
    # List the APIs published in a discovery directory, sorted by name and version.
    data = _get_json(url or settings.discovery_directory_url, client)
    if not isinstance(data, dict) or not isinstance(data.get("items"), list):
        raise InvalidDiscoveryDocument("Discovery directory response has no 'items' list")
    items = []
    for raw in data["items"]:
        try:
            item = DirectoryItem.model_validate(raw)
        except ValidationError:
            logger.warning("Skipping malformed directory entry: %r", raw)
            continue
        if preferred_only and not item.preferred:
            continue
        items.append(item)
    return sorted(items, key=lambda i: (i.name, i.version))
