import logging

import pytest
import yaml

from discodocs import __main__ as cli
from discodocs.discovery import DirectoryItem
from discodocs.errors import FetchError


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch):
    # basicConfig is a no-op once pytest has installed its handlers; keep it out of the way
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: None)


def test_parse_args_defaults():
    args = cli.parse_args(["generate", "books.json"])
    assert args.command == "generate"
    assert args.sources == ["books.json"]
    assert args.out == "gen"
    assert args.kind == "all"
    assert args.summarize is False
    assert args.log_level == "INFO"


def test_parse_args_requires_command():
    with pytest.raises(SystemExit):
        cli.parse_args([])


def test_generate(books_path, tmp_path):
    assert cli.main(["generate", str(books_path), "-o", str(tmp_path)]) == 0
    assert (tmp_path / "books1" / "README.md").is_file()
    assert (tmp_path / "books1-cli" / "docs" / "bookshelves_get.md").is_file()


def test_generate_cli_only(books_path, tmp_path):
    assert cli.main(["generate", str(books_path), "-o", str(tmp_path), "--kind", "cli"]) == 0
    assert not (tmp_path / "books1").exists()
    assert (tmp_path / "books1-cli" / "mkdocs.yml").is_file()


def test_nav(books_path, capsys):
    assert cli.main(["nav", str(books_path)]) == 0
    config = yaml.safe_load(capsys.readouterr().out)
    assert config["nav"][0] == {"Home": "index.md"}


def test_page(books_path, capsys):
    assert cli.main(["page", str(books_path), "books.cloudloading.updateBook"]) == 0
    out = capsys.readouterr().out
    assert "# Required Request Value" in out
    assert "    -r volume-id=<string>" in out


def test_unknown_page(books_path, caplog):
    assert cli.main(["page", str(books_path), "books.nope"]) == 1
    assert "books.nope" in caplog.text


def test_missing_source(tmp_path, caplog):
    assert cli.main(["nav", str(tmp_path / "missing.json")]) == 1
    assert "Could not read discovery document" in caplog.text


def test_source_not_utf8(tmp_path, caplog):
    path = tmp_path / "broken.json"
    path.write_bytes(b'{"name": "\xff\xfe"}')
    assert cli.main(["nav", str(path)]) == 1
    assert "not valid UTF-8" in caplog.text


def test_list(monkeypatch, capsys):
    monkeypatch.setattr(
        cli,
        "fetch_directory",
        lambda preferred_only=False: [DirectoryItem(name="books", version="v1", title="Books API")],
    )
    assert cli.main(["list"]) == 0
    assert capsys.readouterr().out == "books\tv1\tBooks API\n"


def test_list_error(monkeypatch):
    def fail(preferred_only=False):
        raise FetchError("offline")

    monkeypatch.setattr(cli, "fetch_directory", fail)
    assert cli.main(["list", "--preferred"]) == 1
