"""README of a generated client library."""
from .activities import (
    NESTED_TYPE,
    PART,
    REQUEST_VALUE,
    RESPONSE_RESULT,
    Activity,
    group_by_resource,
    iter_activities,
    optional_parameters,
    schema_traits,
    supports_download,
    upload_protocols,
)
from .config import Settings, settings as default_settings
from .discovery import RestDescription
from .naming import crate_name, directory_name, hub_type, library_for, version_string
from .text import ERROR_CATEGORIES, banner, builder_call, one_line

_TRAIT_LABELS = {
    REQUEST_VALUE: "request value",
    RESPONSE_RESULT: "response result",
    PART: "part",
    NESTED_TYPE: "nested type",
}


def _enumerate(names: list[str]) -> str:
    # a, b and c
    if len(names) <= 1:
        return "".join(names)
    return ", ".join(names[:-1]) + " and " + names[-1]


def pick_example_activity(desc: RestDescription) -> Activity | None:
    # The activity with the most optional parameters shows off the most builder methods.
    activities = iter_activities(desc)
    if not activities:
        return None
    return sorted(activities, key=lambda a: (-len(optional_parameters(a.method)), a.id))[0]


def _features(desc: RestDescription) -> list[str]:
    hub = hub_type(desc)
    lines = [
        "# Features",
        "",
        f"Handle the following *Resources* with ease from the central *hub* ({hub}) ...",
        "",
    ]
    for activities in group_by_resource(desc).values():
        lines.append(f"* {activities[0].resource_command.replace('-', ' ')}")
        names = [f"*{a.subcommand.replace('-', ' ')}*" for a in activities]
        lines.append(f" * {_enumerate(names)}")
    lines.append("")

    uploads = [a for a in iter_activities(desc) if upload_protocols(a.method)]
    downloads = [a for a in iter_activities(desc) if supports_download(a.method)]
    for label, activities in (("Upload", uploads), ("Download", downloads)):
        if not activities:
            continue
        lines += [f"{label} supported by ...", ""]
        lines.extend(f"* *{a.resource_command} {a.subcommand.replace('-', ' ')}*" for a in activities)
        lines.append("")
    return lines


def _structure(desc: RestDescription, traits: dict[str, set[str]]) -> list[str]:
    hub = hub_type(desc)
    lines = [
        "# Structure of this Library",
        "",
        "The API is structured into the following primary items:",
        "",
        f"* **Hub** ({hub})",
        "    * a central object to maintain state and allow accessing all *Activities*",
        "    * creates *Method Builders* which in turn allow access to individual *Call Builders*",
        "* **Resources**",
        "    * primary types that you can apply *Activities* to",
        "    * a collection of properties and *Parts*",
        "    * **Parts**",
        "        * a collection of properties",
        "        * never directly used in *Activities*",
        "* **Activities**",
        "    * operations to apply to *Resources*",
        "",
        "All *structures* are marked with applicable traits to further categorize them and ease browsing.",
        "",
        "Generally speaking, you can invoke *Activities* like this:",
        "",
        "```Rust,ignore",
        "let r = hub.resource().activity(...).doit().await",
        "```",
        "",
    ]
    activities = iter_activities(desc)
    if activities:
        first = activities[0].resource
        same = [a for a in activities if a.resource == first]
        lines += ["Or specifically ...", "", "```ignore"]
        lines.extend(f"let r = hub.{a.resource_accessor}().{a.call_name}(...).doit().await" for a in same)
        lines += ["```", ""]
    lines += [
        "The `resource()` and `activity(...)` calls create builders. The second one dealing with `Activities` "
        "supports various methods to configure the impending operation (not shown here). It is made such that "
        "all required arguments have to be specified right away (i.e. `(...)`), whereas all optional ones can "
        "be build up as desired. The `doit()` method performs the actual communication with the server and "
        "returns the respective result.",
        "",
    ]
    if traits:
        lines += ["## Structures", ""]
        for name in sorted(traits):
            labels = [label for trait, label in _TRAIT_LABELS.items() if trait in traits[name]]
            lines.append(f"* `{name}` *({', '.join(labels)})*")
        lines.append("")
    return lines


def _usage(desc: RestDescription) -> list[str]:
    lib = library_for(desc)
    crate = crate_name(desc)
    hub = hub_type(desc)
    lines = [
        "# Usage",
        "",
        "## Setting up your Project",
        "",
        "To use this library, you would put the following lines into your `Cargo.toml` file:",
        "",
        "```toml",
        "[dependencies]",
        f'{crate} = "*"',
        'serde = "^1.0"',
        'serde_json = "^1.0"',
        "```",
        "",
        "## A complete example",
        "",
        "```Rust",
        "extern crate hyper;",
        "extern crate hyper_rustls;",
        f"extern crate {crate.replace('-', '_')} as {lib};",
        f"use {lib}::{{Result, Error}};",
        "use std::default::Default;",
        f"use {lib}::{{{hub}, oauth2, hyper, hyper_rustls, chrono, FieldMask}};",
        "",
        "// Get an ApplicationSecret instance by some means. It contains the `client_id` and",
        "// `client_secret`, among other things.",
        "let secret: oauth2::ApplicationSecret = Default::default();",
        "// Instantiate the authenticator. It will choose a suitable authentication flow for you,",
        "// unless you replace `None` with the desired Flow.",
        "let auth = oauth2::InstalledFlowAuthenticator::builder(",
        "        secret,",
        "        oauth2::InstalledFlowReturnMethod::HTTPRedirect,",
        "    ).build().await.unwrap();",
        f"let mut hub = {hub}::new(hyper::Client::builder().build(hyper_rustls::HttpsConnectorBuilder::new()"
        ".with_native_roots().https_or_http().enable_http1().enable_http2().build()), auth);",
    ]
    example = pick_example_activity(desc)
    if example is not None:
        if example.method.request is not None:
            lines += [
                "// As the method needs a request, you would usually fill it with the desired information",
                "// into the respective structure. Some of the parts shown here might not be applicable !",
                f"let mut req = {lib}::api::{example.method.request.ref}::default();",
                "",
            ]
        lines += [
            "// You can configure optional parameters by calling the respective setters at will, and",
            "// execute the final call using `doit()`.",
            "// Values shown here are possibly random and not representative !",
            f"let result = {builder_call(desc, example)};",
            "",
        ]
    else:
        lines += ["let result: Result<()> = Ok(());", ""]
    lines += [
        "match result {",
        "    Err(e) => match e {",
        "        // The Error enum provides details about what exactly happened.",
        "        // You can also just use its `Debug`, `Display` or `Error` traits",
    ]
    variants = [f"Error::{variant}" for variant, _ in ERROR_CATEGORIES]
    lines.append(f"         {variants[0]}")
    lines.extend(f"        |{v}" for v in variants[1:-1])
    lines.append(f'        |{variants[-1]} => println!("{{}}", e),')
    lines += [
        "    },",
        '    Ok(res) => println!("Success: {:?}", res),',
        "}",
        "```",
        "",
    ]
    return lines


def _result_handling() -> list[str]:
    lines = [
        "## Handling the Result",
        "",
        "The `doit()` method returns a `Result` which is either the server's response, or an `Error`. "
        "Transport and authentication failures are never thrown, they are part of the result:",
        "",
    ]
    lines.extend(f"* `Error::{variant}`: {text}" for variant, text in ERROR_CATEGORIES)
    lines += [
        "",
        "When delegates handle errors or intermediate values, they may have a chance to instruct the system "
        "to retry. This makes the system potentially resilient to all kinds of errors.",
        "",
    ]
    return lines


def _boilerplate() -> list[str]:
    return [
        "## Uploads and Downloads",
        "",
        "If a method supports downloads, the response body, which is part of the `Result`, should be read by "
        "you to obtain the media. If such a method also supports a *Response Result*, it will return that by "
        "default. You can see it as meta-data for the actual media. To trigger a media download, you will have "
        "to set up the builder by making this call: `.param(\"alt\", \"media\")`.",
        "",
        "Methods supporting uploads can do so using up to 2 different protocols: *simple* and *resumable*. "
        "The distinctiveness of each is represented by customized `doit(...)` methods, which are then named "
        "`upload(...)` and `upload_resumable(...)` respectively.",
        "",
        "## Customization and Callbacks",
        "",
        "You may alter the way a `doit()` method is called by providing a *delegate* to the *Method Builder* "
        "before making the final `doit()` call. Respective methods will be called to provide progress "
        "information, as well as determine whether the system should retry on failure.",
        "",
        "The delegate trait is default-implemented, allowing you to customize it with minimal effort.",
        "",
        "## Optional Parts in Server-Requests",
        "",
        "All structures provided by this library are made to be encodable and decodable via *json*. "
        "Optionals are used to indicate that partial requests and responses are valid. Most optionals are "
        "considered *Parts* which are identifiable by name, which will be sent to the server to indicate "
        "either the set parts of the request or the desired parts in the response.",
        "",
        "## Builder Arguments",
        "",
        "Using method builders, you are able to prepare an action call by repeatedly calling its methods. "
        "These will always take a single argument, for which the following statements are true.",
        "",
        "* PODs are handed by copy",
        "* strings are passed as `&str`",
        "* request values are moved",
        "",
        "Arguments will always be copied or cloned into the builder, to make them independent of their "
        "original life times.",
        "",
    ]


def render_library_readme(
    desc: RestDescription,
    settings: Settings | None = None,
    overview: str | None = None,
    traits: dict[str, set[str]] | None = None,
) -> str:
    """README.md for the generated client library of a REST description."""
    settings = settings or default_settings
    crate = crate_name(desc)
    repo_url = settings.repo_url_template.format(directory=directory_name(desc))
    version = version_string(desc, settings.generator_version)
    lines = [
        banner(desc),
        f"The `{crate}` library allows access to all features of the *Google {desc.display_name}* service.",
        "",
        f"This documentation was generated from *{desc.display_name}* crate version *{version}*, "
        f"where *{desc.revision or 'unknown'}* is the exact revision of the *{desc.name}:{desc.version}* "
        f"schema built by the generator *v{settings.generator_version}*.",
        "",
    ]
    if overview or desc.description:
        lines += [one_line(overview or desc.description), ""]
    if desc.documentation_link:
        lines += [
            f"Everything else about the *{desc.display_name}* *{desc.version}* API can be found at the "
            f"[official documentation site]({desc.documentation_link}).",
            "",
        ]
    lines += _features(desc)
    lines += _structure(desc, traits if traits is not None else schema_traits(desc))
    lines += _usage(desc)
    lines += _result_handling()
    lines += _boilerplate()
    lines += [
        "# License",
        "",
        f"The **{library_for(desc)}** library was generated by {settings.author.split(' <')[0]}, "
        "and is placed under the *MIT* license.",
        f"You can read the full text at the repository's [license file]({repo_url}/LICENSE.md).",
        "",
    ]
    return "\n".join(lines)
