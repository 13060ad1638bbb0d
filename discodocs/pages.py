"""Markdown pages of a command line client's documentation site."""
from .activities import Activity, group_by_resource, optional_parameters, required_parameters, supports_download, upload_protocols
from .config import Settings, settings as default_settings
from .discovery import RestDescription
from .fields import MAP, VEC, request_fields
from .naming import crate_name, directory_name, kebab_case, library_for, version_string
from .text import banner, cli_command, cli_synopsis, default_scope, indent_description, one_line


def _details_url(desc: RestDescription, activity: Activity, settings: Settings) -> str:
    crate = crate_name(desc, cli=True).replace("-", "_")
    return f"{settings.docs_base_url.rstrip('/')}/{crate}/{activity.page[:-3]}"


def _scopes_section(desc: RestDescription, activity: Activity) -> list[str]:
    method = activity.method
    if not method.scopes:
        return []
    lib = library_for(desc)
    lines = [
        "# Scopes",
        "",
        "You will need authorization for at least one of the following scopes to make a valid call:",
        "",
    ]
    lines.extend(f"* *{scope}*" for scope in method.scopes)
    lines += [
        "",
        f"If unset, the scope for this method defaults to *{default_scope(method)}*.",
        "You can set the scope for this method like this: "
        f"`{lib} --scope <scope> {activity.resource_command} {activity.subcommand} ...`",
        "",
    ]
    return lines


def _request_section(desc: RestDescription, activity: Activity) -> list[str]:
    request = activity.method.request
    if request is None:
        return []
    fields = request_fields(desc, request.ref)
    lines = [
        "# Required Request Value",
        "",
        f"The request value is a data-structure of type *{request.ref}* with various fields. "
        "Each field may be a simple scalar or another data-structure. "
        "Nested structures are addressed with a dotted *field cursor*, "
        "and a cursor may be set once to shorten the field names that follow it.",
        "",
    ]
    if not fields:
        lines += ["The request value has no fields that can be set from the command line.", ""]
        return lines
    lines += [
        "For example, the structure can be set completely with the following arguments, "
        "which are assumed to be executed in the given order.",
        "",
        "```bash",
        f"{library_for(desc)} {activity.resource_command} {activity.subcommand} ...",
    ]
    lines.extend(f"    -r {f.cursor}=<{f.json_type}>" for f in fields)
    lines += ["```", ""]
    for f in fields:
        kind = f.json_type
        if f.container == VEC:
            kind += ", list; repeat the key to add values"
        elif f.container == MAP:
            kind += ", map; use key=name=value"
        lines.append(f"* **-r {f.cursor}=<{f.json_type}>** *({kind})*")
        description = indent_description(f.description)
        if description:
            lines.append(description)
    lines.append("")
    return lines


def _upload_section(activity: Activity) -> list[str]:
    protocols = upload_protocols(activity.method)
    if not protocols:
        return []
    media = activity.method.media_upload
    lines = [
        "# Required Upload Flags",
        "",
        "This method supports the upload of data, which *requires* all of the following flags to be set:",
        "",
        f"* **-u {' | '.join(protocols)} <file> <mime>**",
        "    - **protocol** specifies which upload protocol to use. "
        f"It must be one of {', '.join(protocols)}.",
        "    - **file** is the path to the file to upload. It must be seekable.",
        "    - **mime** is the mime-type of the data, e.g. *application/octet-stream*.",
        "",
    ]
    if media is not None and media.accept:
        lines += [f"Accepted mime-types are {', '.join(f'`{a}`' for a in media.accept)}.", ""]
    if media is not None and media.max_size:
        lines += [f"The maximum upload size is *{media.max_size}*.", ""]
    return lines


def _output_section(activity: Activity) -> list[str]:
    method = activity.method
    lines = ["# Optional Output Flags", ""]
    if method.response is not None:
        lines.append(
            f"The method's return value is a JSON encoded structure of type *{method.response.ref}*, "
            "which will be written to standard output by default."
        )
    else:
        lines.append("The method does not return a value, so there is nothing written to standard output.")
    if supports_download(method):
        lines.append(
            "This method supports media downloads. Set `-p alt=media` to write the media "
            "instead of its metadata to the output."
        )
    lines += [
        "",
        "* **-o out**",
        "    - *out* specifies the *destination* to which to write the server's result to. "
        "It will be a JSON-encoded structure. The *destination* may be `-` to indicate standard output, "
        "or a filepath that is to contain the received bytes. If unset, it defaults to standard output.",
        "",
    ]
    return lines


def _properties_section(title: str, intro: str, params) -> list[str]:
    if not params:
        return []
    lines = [f"# {title}", "", intro, ""]
    for name, param in params:
        lines.append(f"* **-p {kebab_case(name)}={param.type}**")
        description = indent_description(param.description)
        if description:
            lines.append(description)
        if param.enum:
            lines.append(f"    - Possible values: {', '.join(f'*{e}*' for e in param.enum)}")
        lines.append("")
    return lines


def render_method_page(desc: RestDescription, activity: Activity, settings: Settings | None = None) -> str:
    """Markdown page documenting one method of the command line client."""
    settings = settings or default_settings
    method = activity.method
    lines = []
    if method.description.strip():
        lines += [method.description.strip(), ""]
    lines += _scopes_section(desc, activity)

    required = required_parameters(method)
    if required:
        lines += ["# Required Scalar Arguments", ""]
        for name, param in required:
            lines.append(f"* **&lt;{kebab_case(name)}&gt;** *({param.type})*")
            description = indent_description(param.description)
            if description:
                lines.append(description)
        lines.append("")

    lines += _request_section(desc, activity)
    lines += _upload_section(activity)
    lines += _output_section(activity)
    lines += _properties_section(
        "Optional Method Properties",
        "You may set the following properties to further configure the call. "
        "Please note that `-p` is followed by one or more key-value-pairs, and is called like this "
        "`-p k1=v1 k2=v2` even though the listing below repeats the `-p` for completeness.",
        optional_parameters(method),
    )
    lines += _properties_section(
        "Optional General Properties",
        "The following properties can configure any call, and are not specific to this method.",
        sorted(desc.parameters.items()),
    )
    lines += [f"Details at {_details_url(desc, activity, settings)}", ""]
    return "\n".join(lines)


def render_cli_index(desc: RestDescription, settings: Settings | None = None, overview: str | None = None) -> str:
    """Landing page of the command line client's documentation site."""
    settings = settings or default_settings
    lib = library_for(desc)
    crate = crate_name(desc, cli=True)
    repo_url = settings.repo_url_template.format(directory=directory_name(desc, cli=True))
    lines = [
        banner(desc),
        f"The `{lib}` command-line interface *(CLI)* allows to use most features of the "
        f"*Google {desc.display_name}* service from the comfort of your terminal.",
        "",
    ]
    if overview or desc.description:
        lines += [one_line(overview or desc.description), ""]
    lines += [
        "By default all output is printed to standard out, but flags can be set to direct it into a file "
        "independent of your shell's capabilities. Errors will be printed to standard error, and cause "
        "the program's exit code to be non-zero.",
        "",
        "If data-structures are requested, these will be returned as pretty-printed JSON, "
        "to be useful as input to other tools.",
        "",
    ]
    if desc.documentation_link:
        lines += [
            f"Everything else about the *{desc.display_name}* API can be found at the "
            f"[official documentation site]({desc.documentation_link}).",
            "",
        ]
    lines += [
        "# Installation and Source Code",
        "",
        "Install the command-line interface with cargo using:",
        "",
        "```bash",
        f"cargo install {crate}",
        "```",
        "",
        f"Find the source code [on github]({repo_url}).",
        "",
        "# Usage",
        "",
        f"This documentation was generated from the *{desc.display_name}* API at revision "
        f"*{desc.revision or 'unknown'}*. The CLI is at version *{version_string(desc, settings.generator_version)}*.",
        "",
        "```bash",
        f"{lib} [options]",
    ]
    for activities in group_by_resource(desc).values():
        lines.append(f"        {activities[0].resource_command}")
        lines.extend(f"                {cli_synopsis(a)}" for a in activities)
    lines += [
        f"  {lib} --help",
        "",
        "Configuration:",
        "  [--scope <url>]...",
        "            Specify the authentication a method should be executed in. Each scope",
        "            requires the user to grant this application permission to use it.",
        "            If unset, it defaults to the shortest scope url for a particular method.",
        "  --config-dir <folder>",
        "            A directory into which we will store our persistent data. Defaults to",
        f"            a user-writable directory that we will create during the first invocation. [default: {settings.cli_config_dir}]",
        "  --debug",
        "            Debug print all errors",
        "```",
        "",
        "# Configuration",
        "",
        f"The program will store all persistent data in the `{settings.cli_config_dir}` directory in *JSON* files "
        f"prefixed with `{lib}-`. You can change the directory used to store configuration with the "
        "`--config-dir` flag on a per-invocation basis.",
        "",
        "## Authentication",
        "",
        "Most APIs require a user to authenticate any request. If this is the case, the scope determines "
        "the set of permissions granted. The granularity of these is usually no more than *read-only* or *full-access*.",
        "",
        f"If not set, the system will automatically select the smallest feasible scope, e.g. when invoking a method "
        f"that is read-only, it will ask only for a read-only scope. Tokens are stored per scope in "
        f"`{lib}-token-<scope-hash>.json` files.",
        "",
        "## Application Secrets",
        "",
        "In order to allow any application to use Google services, it will need to be registered using the "
        "[Google Developer Console](https://console.developers.google.com). "
        f"The program ships with a default secret, which is written to `{lib}-secret.json` during the first "
        "invocation. Replace its contents with your own secret to use your own quota.",
        "",
        "# Debugging",
        "",
        "Even though the CLI does its best to provide usable error messages, sometimes it might be desirable "
        "to know what exactly led to a particular issue. The `--debug` flag prints all errors using their "
        "debug representation, which contains the full request and response details.",
        "",
    ]
    # Resource index with links to the method pages.
    lines += ["# Methods", ""]
    for activities in group_by_resource(desc).values():
        lines.append(f"* {activities[0].resource_title}")
        lines.extend(f"    * [{a.title}]({a.page})" for a in activities)
    lines.append("")
    return "\n".join(lines)


def cli_commands(desc: RestDescription) -> list[str]:
    # Full command line of every method, handy for quick overviews.
    return [cli_command(desc, a) for acts in group_by_resource(desc).values() for a in acts]
