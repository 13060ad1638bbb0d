"""Write the generated documentation artifacts of one API to disk."""
import logging
from pathlib import Path

from .activities import iter_activities
from .config import Settings, settings as default_settings
from .discovery import RestDescription
from .mkdocs import HOME_PAGE, render_mkdocs_yaml
from .naming import directory_name
from .pages import render_cli_index, render_method_page
from .readme import render_library_readme

logger = logging.getLogger(__name__)

KIND_API = "api"
KIND_CLI = "cli"
KINDS = (KIND_API, KIND_CLI)


def write_if_changed(path: Path, content: str) -> bool:
    # Leave files with identical content untouched so mtimes stay stable.
    if path.is_file() and path.read_text(encoding="utf-8") == content:
        logger.debug("Unchanged: %s", path)
        return False
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.info("Wrote %s", path)
    return True


def generate_library_docs(
    desc: RestDescription,
    out_dir: Path,
    settings: Settings | None = None,
    overview: str | None = None,
) -> list[Path]:
    settings = settings or default_settings
    readme = Path(out_dir) / directory_name(desc) / "README.md"
    write_if_changed(readme, render_library_readme(desc, settings, overview))
    return [readme]


def generate_cli_docs(
    desc: RestDescription,
    out_dir: Path,
    settings: Settings | None = None,
    overview: str | None = None,
) -> list[Path]:
    """
    Write mkdocs.yml, the landing page and one page per method.

    Returns every path belonging to the site, whether rewritten or not.
    """
    settings = settings or default_settings
    root = Path(out_dir) / directory_name(desc, cli=True)
    docs = root / "docs"
    outputs = {
        root / "mkdocs.yml": render_mkdocs_yaml(desc, settings),
        docs / HOME_PAGE: render_cli_index(desc, settings, overview),
    }
    for activity in iter_activities(desc):
        outputs[docs / activity.page] = render_method_page(desc, activity, settings)
    for path, content in outputs.items():
        write_if_changed(path, content)
    return list(outputs)


def generate_all(
    desc: RestDescription,
    out_dir: Path,
    settings: Settings | None = None,
    kinds: tuple[str, ...] = KINDS,
    overview: str | None = None,
) -> list[Path]:
    unknown = set(kinds) - set(KINDS)
    if unknown:
        raise ValueError(f"Unknown documentation kinds: {', '.join(sorted(unknown))}")
    written: list[Path] = []
    if KIND_API in kinds:
        written += generate_library_docs(desc, out_dir, settings, overview)
    if KIND_CLI in kinds:
        written += generate_cli_docs(desc, out_dir, settings, overview)
    logger.info("Generated %d files for %s %s", len(written), desc.name, desc.version)
    return written
