"""Name mangling shared by every generated artifact."""
import re

from .discovery import RestDescription

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_WORD_SPLIT = re.compile(r"[^A-Za-z0-9$]+")
_VERSION_RE = re.compile(r"^v?(\d+)(?:\.(\d+))?(.*)$")


def _words(name: str) -> list[str]:
    return [w.lower() for w in _WORD_SPLIT.split(_CAMEL_BOUNDARY.sub(" ", name)) if w]


def snake_case(name: str) -> str:
    # listOfflineMetadata -> list_offline_metadata
    return "_".join(w for w in (w.replace("$", "") for w in _words(name)) if w)


def kebab_case(name: str) -> str:
    # entityTypes -> entity-types, $.xgafv -> $-xgafv
    return "-".join(_words(name))


def title_words(name: str) -> str:
    # annotation-data-get -> Annotation Data Get
    return " ".join(w.capitalize() for w in _words(name))


def api_version(version: str) -> str:
    """
    Mangle a discovery version into the suffix used for library names.

    v1 -> 1, v1beta1 -> 1_beta1, v1.1 -> 1d1, v1management -> 1_management
    """
    m = _VERSION_RE.match(version.strip())
    if not m:
        return re.sub(r"[^a-z0-9]+", "_", version.lower()).strip("_")
    major, minor, rest = m.groups()
    out = major
    if minor:
        out += "d" + minor
    rest = re.sub(r"[^a-z0-9]+", "_", rest.lower()).strip("_")
    if rest:
        out += "_" + rest
    return out


def library_name(name: str, version: str) -> str:
    return re.sub(r"[^a-z0-9]", "", name.lower()) + api_version(version)


def library_for(desc: RestDescription) -> str:
    return library_name(desc.name, desc.version)


def crate_name(desc: RestDescription, cli: bool = False) -> str:
    crate = f"google-{library_for(desc)}"
    return crate + "-cli" if cli else crate


def directory_name(desc: RestDescription, cli: bool = False) -> str:
    lib = library_for(desc)
    return lib + "-cli" if cli else lib


def hub_type(desc: RestDescription) -> str:
    # "CustomSearch API" -> CustomSearchAPI, "books" -> Books
    name = re.sub(r"[^A-Za-z0-9]", "", desc.display_name)
    return name[:1].upper() + name[1:]


def version_string(desc: RestDescription, generator_version: str) -> str:
    return f"{generator_version}+{desc.revision}" if desc.revision else generator_version


def page_name(resource: str, subcommand: str) -> str:
    return f"{kebab_case(resource)}_{subcommand}.md"
