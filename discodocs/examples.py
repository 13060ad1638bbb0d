import logging

from .activities import Activity, group_by_resource
from .config import settings
from .discovery import RestDescription
from .naming import hub_type
from .pages import cli_commands
from .text import builder_call, cli_command, one_line

logger = logging.getLogger(__name__)

STYLES = [
    ("cli", "Command line"),
    ("library", "Library call builder"),
]


def _template_example(desc: RestDescription, activity: Activity, style: str) -> str:
    """Generate a deterministic usage example without AI."""
    if style == "library":
        lines = [f"// {hub_type(desc)} hub, see the README for how to construct it"]
        if activity.method.request is not None:
            lines.append(f"let mut req = {activity.method.request.ref}::default();")
        lines.append(f"let result = {builder_call(desc, activity)};")
        return "\n".join(lines)

    return cli_command(desc, activity)


def _build_prompt(desc: RestDescription, activity: Activity, style: str, template: str) -> str:
    method = activity.method
    return f"""You are a documentation assistant for generated Google API clients. Improve the usage example below for this API method.

API: {desc.display_name} {desc.version}
Method: {method.id} ({method.http_method} {method.path})
Description: {one_line(method.description)[:500]}
Scopes: {", ".join(method.scopes) or "None."}
Request body: {method.request.ref if method.request else "None."}

Style: {style}

Template example:
{template}

Requirements:
- Output ONLY the example. No markdown fences, no explanation before or after.
- Keep the exact command, resource and method names of the template.
- For the command line style, fill in realistic argument values and add `-p` only for parameters that matter.
- For the library style, keep the builder chain and end it with `.doit().await`.

Generate the example now:"""


def generate_example(
    desc: RestDescription,
    activity: Activity,
    style: str,
    openai_api_key: str | None,
) -> str:

    # Generate a usage example for the given method.
    # Uses OpenAI if openai_api_key is set (or from config); otherwise uses template.

    template = _template_example(desc, activity, style)
    api_key = openai_api_key or settings.openai_api_key

    if api_key:
        try:
            from openai import OpenAI
            client = OpenAI(api_key=api_key)
            prompt = _build_prompt(desc, activity, style, template)
            resp = client.chat.completions.create(
                model=settings.openai_model,
                messages=[
                    {"role": "system", "content": "You output only code. No markdown, no explanation."},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.2,
            )
            code = (resp.choices[0].message.content or "").strip()
            if code.startswith("```"):
                lines = code.split("\n")
                if lines[0].startswith("```"):
                    lines = lines[1:]
                if lines and lines[-1].strip() == "```":
                    lines = lines[:-1]
                code = "\n".join(lines)
            if code:
                return code
        except Exception as e:
            logger.warning("OpenAI example generation failed: %s", e)

    return template


def _api_summary_text(desc: RestDescription) -> str:
    # Build a short text summary of the API for LLM context.
    lines = [f"Title: {desc.title or desc.display_name}", f"Version: {desc.version}"]
    description = one_line(desc.description)[:800]
    if description:
        lines.append(f"Description: {description}")
    lines.append("Resources:")
    for resource, activities in group_by_resource(desc).items():
        lines.append(f"  [{resource}]")
        for activity in activities[:20]:
            summary = one_line(activity.method.description)[:120]
            lines.append(f"    {activity.id}" + (f": {summary}" if summary else ""))
    lines.append("Commands:")
    lines.extend(f"  {c}" for c in cli_commands(desc)[:20])
    return "\n".join(lines)


def generate_overview_summary(desc: RestDescription, openai_api_key: str | None) -> str | None:
    """
    Use an LLM to generate a short introduction/overview for the API (2-4 sentences).
    Returns None if no API key or on error.
    """
    api_key = openai_api_key or settings.openai_api_key
    if not api_key:
        return None
    try:
        from openai import OpenAI
        client = OpenAI(api_key=api_key)
        api_text = _api_summary_text(desc)
        resp = client.chat.completions.create(
            model=settings.openai_model,
            messages=[
                {
                    "role": "system",
                    "content": "You write brief, clear API overviews for documentation. Output only 2-4 sentences. No markdown, no bullets.",
                },
                {
                    "role": "user",
                    "content": f"Write a short introduction/overview for this API:\n\n{api_text}",
                },
            ],
            temperature=0.3,
        )
        summary = (resp.choices[0].message.content or "").strip()
        return summary if summary else None
    except Exception as e:
        logger.warning("OpenAI overview summary failed: %s", e)
        return None
