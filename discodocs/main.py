from typing import Literal
from urllib.parse import urlparse

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, PlainTextResponse
from pydantic import BaseModel, Field

from .activities import find_activity
from .config import settings
from .discovery import RestDescription, fetch_directory, load_discovery
from .errors import FetchError, InvalidDiscoveryDocument, OriginNotAllowed, UnknownActivity
from .examples import STYLES, generate_example, generate_overview_summary
from .mkdocs import render_mkdocs_yaml
from .pages import render_cli_index, render_method_page
from .readme import render_library_readme
from .reference import build_reference_data, build_reference_html

# Swagger UI is disabled so /docs serves the discovery reference page.
app = FastAPI(title="discodocs", version="0.1.0", docs_url=None)

# Allow a docs frontend hosted elsewhere to call the API
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

DISCOVERY_URL_QUERY = Query(None, description="Discovery document URL; defaults to DEFAULT_DISCOVERY_URL")


def _load(discovery_url: str | None) -> tuple[RestDescription, str]:
    # Resolve and load the discovery document, mapping errors to HTTP status codes.
    effective_url = discovery_url or settings.default_discovery_url
    if not effective_url:
        raise HTTPException(400, detail="discovery_url is required (no default discovery URL configured)")
    parsed = urlparse(effective_url.strip())
    if parsed.scheme not in ("http", "https"):
        raise HTTPException(400, detail="discovery_url must be http or https")
    if not parsed.netloc:
        raise HTTPException(400, detail="discovery_url must be a valid http or https URL")
    try:
        return load_discovery(effective_url), effective_url
    except OriginNotAllowed:
        raise HTTPException(
            403,
            detail="This docs instance is restricted to specific APIs. The given URL is not allowed.",
        )
    except (FetchError, InvalidDiscoveryDocument) as e:
        raise HTTPException(502, detail=str(e))


@app.get("/health")
def health():
    # Health check for load balancers and platforms.
    return {"status": "ok"}


@app.get("/api/apis")
def api_directory(preferred: bool = Query(False, description="Only list preferred versions")):
    try:
        items = fetch_directory(preferred_only=preferred)
    except OriginNotAllowed:
        raise HTTPException(403, detail="The discovery directory URL is not allowed.")
    except (FetchError, InvalidDiscoveryDocument) as e:
        raise HTTPException(502, detail=str(e))
    return {"items": [item.model_dump() for item in items]}


@app.get("/api/reference")
def api_reference_json(discovery_url: str | None = DISCOVERY_URL_QUERY):
    # Structured docs payload for a docs UI.
    desc, _ = _load(discovery_url)
    data = build_reference_data(desc)
    overview = generate_overview_summary(desc, settings.openai_api_key)
    if overview:
        data["overview_summary"] = overview
    return data


@app.get("/api/mkdocs", response_class=PlainTextResponse)
def api_mkdocs(discovery_url: str | None = DISCOVERY_URL_QUERY):
    desc, _ = _load(discovery_url)
    return PlainTextResponse(render_mkdocs_yaml(desc), media_type="application/yaml")


@app.get("/api/readme", response_class=PlainTextResponse)
def api_readme(
    discovery_url: str | None = DISCOVERY_URL_QUERY,
    kind: Literal["api", "cli"] = Query("api", description="api: library README, cli: CLI landing page"),
):
    desc, _ = _load(discovery_url)
    text = render_library_readme(desc) if kind == "api" else render_cli_index(desc)
    return PlainTextResponse(text, media_type="text/markdown")


@app.get("/api/pages/{method_id}", response_class=PlainTextResponse)
def api_method_page(method_id: str, discovery_url: str | None = DISCOVERY_URL_QUERY):
    desc, _ = _load(discovery_url)
    try:
        activity = find_activity(desc, method_id)
    except UnknownActivity as e:
        raise HTTPException(404, detail=str(e))
    return PlainTextResponse(render_method_page(desc, activity), media_type="text/markdown")


@app.get("/docs", response_class=HTMLResponse)
def api_reference_page(discovery_url: str | None = DISCOVERY_URL_QUERY):
    # Server-rendered API reference of a discovery document.
    desc, effective_url = _load(discovery_url)
    return build_reference_html(desc, discovery_url=effective_url)


class GenerateExampleRequest(BaseModel):
    method_id: str = Field(..., description="Discovery method id, e.g. books.bookshelves.get")
    style: str = Field("cli", description="cli or library")
    discovery_url: str | None = Field(None, description="When set, load the method from this discovery document")


@app.post("/api/examples")
def api_generate_example(body: GenerateExampleRequest):
    allowed = {s[0] for s in STYLES}
    if body.style not in allowed:
        raise HTTPException(400, detail=f"style must be one of: {', '.join(sorted(allowed))}")
    desc, _ = _load(body.discovery_url)
    try:
        activity = find_activity(desc, body.method_id)
    except UnknownActivity:
        raise HTTPException(404, detail=f"Method {body.method_id} not found in discovery document")
    code = generate_example(desc, activity, body.style, settings.openai_api_key)
    return {"code": code}
