"""Generate an API reference (JSON payload and HTML page) from a REST description."""
import json
from html import escape

from .activities import (
    Activity,
    group_by_resource,
    optional_parameters,
    required_parameters,
    supports_download,
    upload_protocols,
)
from .discovery import JsonSchema, Parameter, RestDescription
from .examples import STYLES
from .naming import kebab_case, library_for


def _schema_type_str(schema: JsonSchema) -> str:
    # Return a short type string for a schema (e.g. string, object, array of X).
    if schema.ref:
        return schema.ref
    if schema.type == "array":
        return f"array of {_schema_type_str(schema.items) if schema.items else 'any'}"
    if schema.type == "object" and schema.additional_properties is not None:
        return f"map of {_schema_type_str(schema.additional_properties)}"
    if schema.format:
        return f"{schema.type} ({schema.format})"
    return schema.type or "any"


def _schema_to_data(desc: RestDescription, name: str | None) -> dict | None:
    # JSON-serializable one-level summary of a named schema.
    if not name:
        return None
    schema = desc.schemas.get(name)
    if schema is None:
        return {"type": name}
    properties = [
        {
            "name": prop_name,
            "type": _schema_type_str(prop),
            "read_only": prop.read_only,
            "description": prop.description,
        }
        for prop_name, prop in sorted(schema.properties.items())
    ]
    return {"type": name, "description": schema.description, "properties": properties}


def _param_data(name: str, param: Parameter) -> dict:
    return {
        "name": name,
        "cli_name": kebab_case(name),
        "location": param.location,
        "type": param.type,
        "required": param.required,
        "repeated": param.repeated,
        "description": param.description.replace("\n", " "),
        "enum": list(param.enum),
    }


def _full_url(desc: RestDescription, activity: Activity) -> str:
    base = desc.endpoint
    return (base.rstrip("/") + "/" + activity.method.path.lstrip("/")) if base else activity.method.path


def _slug(s: str) -> str:
    # Safe HTML id from a method id.
    return "".join(c if c.isalnum() or c in "-_" else "-" for c in s.lower()).strip("-")


def _activity_data(desc: RestDescription, activity: Activity) -> dict:
    method = activity.method
    params = required_parameters(method) + optional_parameters(method)
    return {
        "id": method.id,
        "anchor": "method-" + _slug(method.id),
        "title": activity.title,
        "http_method": method.http_method,
        "path": method.path,
        "full_url": _full_url(desc, activity),
        "description": method.description,
        "command": f"{library_for(desc)} {activity.resource_command} {activity.subcommand}",
        "page": activity.page,
        "scopes": list(method.scopes),
        "parameters": [_param_data(n, p) for n, p in params],
        "request": _schema_to_data(desc, method.request.ref if method.request else None),
        "response": _schema_to_data(desc, method.response.ref if method.response else None),
        "upload_protocols": upload_protocols(method),
        "supports_download": supports_download(method),
    }


def build_reference_data(desc: RestDescription) -> dict:
    # Build API reference as JSON-serializable data for a docs UI.
    resources = [
        {
            "name": resource,
            "title": activities[0].resource_title,
            "methods": [_activity_data(desc, a) for a in activities],
        }
        for resource, activities in group_by_resource(desc).items()
    ]
    return {
        "name": desc.name,
        "title": desc.title or desc.display_name,
        "version": desc.version,
        "revision": desc.revision,
        "description": desc.description,
        "documentation_link": desc.documentation_link,
        "base_url": desc.endpoint,
        "scopes": [{"url": url, "description": d} for url, d in desc.scopes.items()],
        "resources": resources,
        "styles": [{"value": v, "label": l} for v, l in STYLES],
    }


def _params_table(params: list[dict]) -> str:
    if not params:
        return ""
    rows = []
    for p in params:
        required = "required" if p["required"] else "optional"
        rows.append(
            f"<tr><td><code>{escape(p['name'])}</code></td><td>{escape(p['location'])}</td>"
            f"<td><code>{escape(p['type'])}</code></td><td>{required}</td><td>{escape(p['description'])}</td></tr>"
        )
    return (
        '<table class="schema-table"><thead><tr><th>Name</th><th>In</th><th>Type</th><th>Required</th>'
        "<th>Description</th></tr></thead><tbody>" + "".join(rows) + "</tbody></table>"
    )


def _schema_table(schema: dict | None) -> str:
    if not schema:
        return ""
    rows = []
    for prop in schema.get("properties") or []:
        flag = " <em>(read-only)</em>" if prop["read_only"] else ""
        rows.append(
            f"<tr><td><code>{escape(prop['name'])}</code>{flag}</td><td><code>{escape(prop['type'])}</code></td>"
            f"<td>{escape(prop['description'].replace(chr(10), ' '))}</td></tr>"
        )
    head = f'<p class="schema-ref">Schema: <code>{escape(schema["type"])}</code></p>'
    if not rows:
        return head
    return (
        head + '<table class="schema-table"><thead><tr><th>Field</th><th>Type</th><th>Description</th></tr></thead>'
        "<tbody>" + "".join(rows) + "</tbody></table>"
    )


def _method_html(method: dict) -> str:
    parts = [
        f'<article id="{method["anchor"]}" class="endpoint-card">',
        '<div class="endpoint-header">'
        f'<span class="method method-{method["http_method"].lower()}">{escape(method["http_method"])}</span>'
        f'<code class="endpoint-path">{escape(method["full_url"])}</code></div>',
        f'<p class="endpoint-summary">{escape(method["title"])} <code>{escape(method["id"])}</code></p>',
    ]
    if method["description"]:
        parts.append(f'<div class="endpoint-description">{escape(method["description"]).replace(chr(10), "<br>")}</div>')
    parts.append(f'<pre class="code-block">{escape(method["command"])} ...</pre>')
    if method["scopes"]:
        parts.append("<h4>Scopes</h4><ul>" + "".join(f"<li><code>{escape(s)}</code></li>" for s in method["scopes"]) + "</ul>")
    if method["parameters"]:
        parts.append("<h4>Parameters</h4>")
        parts.append(_params_table(method["parameters"]))
    if method["request"]:
        parts.append("<h4>Request body</h4>")
        parts.append(_schema_table(method["request"]))
    if method["response"]:
        parts.append("<h4>Response</h4>")
        parts.append(_schema_table(method["response"]))
    if method["upload_protocols"]:
        parts.append(f'<p class="media">Upload protocols: {escape(", ".join(method["upload_protocols"]))}</p>')
    if method["supports_download"]:
        parts.append('<p class="media">Supports media download (<code>alt=media</code>).</p>')
    parts.append(
        f'<div class="code-example-block" data-method-id="{escape(method["id"])}">'
        + "".join(
            f'<button type="button" class="code-example-tab" data-style="{escape(value)}">{escape(label)}</button>'
            for value, label in STYLES
        )
        + '<pre class="code-example-pre" hidden><code class="code-example-code"></code></pre></div>'
    )
    parts.append("</article>")
    return "".join(parts)


def build_reference_html(desc: RestDescription, discovery_url: str = "") -> str:
    # Build the API reference page with a resource sidebar and one card per method.
    data = build_reference_data(desc)
    title = escape(data["title"])

    sidebar = ['<aside class="sidebar"><nav><a href="#overview" class="sidebar-link">Overview</a>']
    for resource in data["resources"]:
        sidebar.append(f'<p class="sidebar-category">{escape(resource["title"])}</p><ul class="sidebar-list">')
        for m in resource["methods"]:
            sidebar.append(
                f'<li><a href="#{m["anchor"]}" class="sidebar-link sublink">'
                f'<span class="method method-{m["http_method"].lower()}">{escape(m["http_method"])}</span> {escape(m["title"])}</a></li>'
            )
        sidebar.append("</ul>")
    sidebar.append("</nav></aside>")

    main = ['<main class="content">', '<section id="overview" class="doc-section">', f"<h1>{title}</h1>"]
    main.append(f'<p class="version-badge">Version {escape(data["version"])} (revision {escape(data["revision"] or "unknown")})</p>')
    if data["description"]:
        main.append(f'<div class="overview-description">{escape(data["description"])}</div>')
    if data["scopes"]:
        main.append("<h2>Scopes</h2><ul>")
        main.extend(f"<li><code>{escape(s['url'])}</code> {escape(s['description'])}</li>" for s in data["scopes"])
        main.append("</ul>")
    main.append("</section>")
    for resource in data["resources"]:
        main.append(f'<section class="doc-section"><h2 class="section-title">{escape(resource["title"])}</h2>')
        main.extend(_method_html(m) for m in resource["methods"])
        main.append("</section>")
    main.append("</main>")

    sidebar_html = "\n".join(sidebar)
    main_html = "\n".join(main)
    discovery_js = json.dumps(discovery_url).replace("</", "<\\/")
    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{title} - API Reference</title>
    <style>
        :root {{ --side-width: 280px; --bg: #0f172a; --bg-card: #1e293b; --text: #f1f5f9; --text-muted: #94a3b8; --accent: #3b82f6; --border: #334155; }}
        * {{ box-sizing: border-box; }}
        body {{ margin: 0; font-family: system-ui, sans-serif; line-height: 1.6; color: var(--text); background: var(--bg); }}
        .sidebar {{ width: var(--side-width); position: fixed; top: 0; bottom: 0; left: 0; overflow-y: auto; padding: 1rem; border-right: 1px solid var(--border); }}
        .sidebar-category {{ font-size: 0.75rem; text-transform: uppercase; color: var(--text-muted); margin: 1rem 0 0.25rem; }}
        .sidebar-list {{ list-style: none; margin: 0; padding: 0; }}
        .sidebar-link {{ display: block; padding: 0.25rem 0; color: var(--text-muted); text-decoration: none; font-size: 0.85rem; }}
        .sidebar-link:hover {{ color: var(--accent); }}
        .content {{ margin-left: var(--side-width); padding: 2rem 2.5rem; max-width: 60rem; }}
        .endpoint-card {{ background: var(--bg-card); border: 1px solid var(--border); border-radius: 10px; padding: 1.25rem; margin-bottom: 1.25rem; }}
        .endpoint-path, code {{ background: var(--bg); color: var(--text-muted); padding: 0.1rem 0.35rem; border-radius: 4px; }}
        .method {{ font-size: 0.65rem; font-weight: 700; padding: 0.15rem 0.35rem; border-radius: 4px; }}
        .method-get {{ background: #1e3a5f; color: #7dd3fc; }}
        .method-post {{ background: #14532d; color: #86efac; }}
        .method-put {{ background: #431407; color: #fdba74; }}
        .method-patch {{ background: #4c0519; color: #f9a8d4; }}
        .method-delete {{ background: #450a0a; color: #fca5a5; }}
        .code-block, .code-example-pre {{ background: var(--bg); padding: 0.75rem; border-radius: 6px; overflow-x: auto; font-size: 0.8rem; }}
        .schema-table {{ width: 100%; border-collapse: collapse; font-size: 0.85rem; }}
        .schema-table th, .schema-table td {{ text-align: left; padding: 0.4rem 0.6rem; border-bottom: 1px solid var(--border); }}
        .code-example-tab {{ margin-right: 0.5rem; padding: 0.3rem 0.6rem; background: var(--accent); color: #fff; border: none; border-radius: 6px; cursor: pointer; }}
    </style>
</head>
<body>
    {sidebar_html}
    {main_html}
    <script>
        (function() {{
            var discoveryUrl = {discovery_js};
            document.querySelectorAll('.code-example-block').forEach(function(block) {{
                var pre = block.querySelector('.code-example-pre');
                var code = block.querySelector('.code-example-code');
                block.querySelectorAll('.code-example-tab').forEach(function(tab) {{
                    tab.addEventListener('click', function() {{
                        fetch(window.location.origin + '/api/examples', {{
                            method: 'POST',
                            headers: {{ 'Content-Type': 'application/json' }},
                            body: JSON.stringify({{ method_id: block.getAttribute('data-method-id'), style: tab.getAttribute('data-style'), discovery_url: discoveryUrl || null }})
                        }}).then(function(r) {{ return r.json(); }}).then(function(d) {{
                            code.textContent = d.code || d.detail || '';
                            pre.hidden = false;
                        }});
                    }});
                }});
            }});
        }})();
    </script>
</body>
</html>"""
