
# discodocs: documentation generator for clients of Google APIs.
#  Reads discovery documents and writes library READMEs, mkdocs sites and method pages.

from .discovery import RestDescription, load_discovery
from .generator import generate_all
from .mkdocs import build_mkdocs_config, render_mkdocs_yaml
from .pages import render_cli_index, render_method_page
from .readme import render_library_readme

__all__ = [
    "RestDescription",
    "build_mkdocs_config",
    "generate_all",
    "load_discovery",
    "render_cli_index",
    "render_library_readme",
    "render_method_page",
    "render_mkdocs_yaml",
]
