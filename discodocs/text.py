"""Small text helpers shared by the markdown renderers."""
import re

from .activities import Activity, optional_parameters, required_parameters, upload_protocols
from .discovery import Parameter, RestDescription, RestMethod
from .naming import kebab_case, library_for, snake_case

GENERATED_BANNER = (
    "<!---\n"
    "DO NOT EDIT !\n"
    "This file was generated automatically by discodocs from the '{name}' {version} discovery document\n"
    "DO NOT EDIT !\n"
    "-->\n"
)

# Variants of the generated clients' Error type, in the order the docs list them.
ERROR_CATEGORIES = [
    ("HttpError(_)", "the HTTP client failed to communicate with the server"),
    ("Io(_)", "an I/O error occurred while reading or writing a body"),
    ("MissingAPIKey", "neither an API key nor a token was provided"),
    ("MissingToken(_)", "the authenticator could not produce a token for the required scopes"),
    ("Cancelled", "the delegate cancelled the operation"),
    ("UploadSizeLimitExceeded(_, _)", "the media to upload exceeds the maximum size the method accepts"),
    ("Failure(_)", "the server responded with a non-success status code"),
    ("BadRequest(_)", "the server rejected the request, its error body is attached"),
    ("FieldClash(_)", "a custom parameter clashes with a parameter of the method"),
    ("JsonDecodeError(_, _)", "the server's response could not be decoded"),
]


def banner(desc: RestDescription) -> str:
    return GENERATED_BANNER.format(name=desc.name, version=desc.version)


def one_line(text: str) -> str:
    return re.sub(r"\s+", " ", text or "").strip()


def indent_description(text: str, prefix: str = "    - ") -> str:
    # Bullet description with continuation lines aligned below the bullet.
    text = (text or "").strip()
    if not text:
        return ""
    pad = " " * len(prefix)
    lines = text.splitlines()
    return "\n".join([prefix + lines[0], *(pad + line if line.strip() else "" for line in lines[1:])])


def default_scope(method: RestMethod) -> str | None:
    # The shortest scope url is assumed to grant the fewest permissions.
    if not method.scopes:
        return None
    return min(method.scopes, key=lambda s: (len(s), s))


def placeholder(name: str, param: Parameter) -> str:
    # A literal used for a parameter in library examples.
    if param.type == "integer":
        return "42"
    if param.type == "number":
        return "0.5"
    if param.type == "boolean":
        return "true"
    if param.enum:
        return f'"{param.enum[0]}"'
    return f'"{name}"'


def cli_synopsis(activity: Activity) -> str:
    """Invocation of one method, without the program name and resource."""
    parts = [activity.subcommand]
    parts.extend(f"<{kebab_case(n)}>" for n, _ in required_parameters(activity.method))
    if activity.method.request is not None:
        parts.append("(-r <kv>)...")
    if upload_protocols(activity.method):
        parts.append("(-u simple|resumable <file> <mime>)")
    # General properties can be set on every method.
    parts.append("[-p <v>]...")
    parts.append("[-o <out>]")
    return " ".join(parts)


def cli_command(desc: RestDescription, activity: Activity) -> str:
    return f"{library_for(desc)} {activity.resource_command} {cli_synopsis(activity)}"


def builder_call(desc: RestDescription, activity: Activity) -> str:
    """A library call chain for the activity, ending in doit() or upload()."""
    method = activity.method
    args = []
    if method.request is not None:
        args.append("req")
    args.extend(placeholder(n, p) for n, p in required_parameters(method))
    lines = [f"hub.{activity.resource_accessor}().{activity.call_name}({', '.join(args)})"]
    for name, param in optional_parameters(method):
        lines.append(f".{snake_case(name)}({placeholder(name, param)})")
    protocols = upload_protocols(method)
    if protocols:
        call = "upload" if protocols[0] == "simple" else "upload_resumable"
        lines.append(f'.{call}(fs::File::open("file.ext").unwrap(), "application/octet-stream".parse().unwrap()).await')
    else:
        lines.append(".doit().await")
    return "\n             ".join(lines)
