"""Build the mkdocs.yml of a generated command line client's documentation site."""
import yaml

from .activities import group_by_resource
from .config import Settings, settings as default_settings
from .discovery import RestDescription
from .naming import crate_name, directory_name, version_string

HOME_PAGE = "index.md"


def build_nav(desc: RestDescription) -> list:
    # Home first, then one section per resource with one page per method.
    nav: list = [{"Home": HOME_PAGE}]
    for activities in group_by_resource(desc).values():
        section = [{a.title: a.page} for a in activities]
        nav.append({activities[0].resource_title: section})
    return nav


def build_mkdocs_config(desc: RestDescription, settings: Settings | None = None) -> dict:
    settings = settings or default_settings
    crate = crate_name(desc, cli=True)
    return {
        "site_name": f"{desc.display_name} v{version_string(desc, settings.generator_version)}",
        "site_url": settings.site_url_template.format(crate=crate),
        "site_description": f"A complete library to interact with {desc.display_name} (protocol {desc.version})",
        "repo_url": settings.repo_url_template.format(directory=directory_name(desc, cli=True)),
        "docs_dir": "docs",
        "site_dir": "build_html",
        "nav": build_nav(desc),
        "theme": settings.theme,
        "copyright": settings.copyright,
    }


def render_mkdocs_yaml(desc: RestDescription, settings: Settings | None = None) -> str:
    return yaml.safe_dump(
        build_mkdocs_config(desc, settings),
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=1000,
    )
