import pytest

from discodocs.activities import find_activity
from discodocs.discovery import Parameter
from discodocs.text import (
    builder_call,
    cli_command,
    cli_synopsis,
    default_scope,
    indent_description,
    one_line,
    placeholder,
)


@pytest.mark.parametrize(
    "param, expected",
    [
        (Parameter(type="integer"), "42"),
        (Parameter(type="number"), "0.5"),
        (Parameter(type="boolean"), "true"),
        (Parameter(enum=["REASON_UNDEFINED", "IOS_PREX"]), '"REASON_UNDEFINED"'),
        (Parameter(), '"shelf"'),
    ],
)
def test_placeholder(param, expected):
    assert placeholder("shelf", param) == expected


def test_one_line():
    assert one_line("Lists\n   all  the\tthings. ") == "Lists all the things."
    assert one_line(None) == ""


def test_indent_description():
    assert indent_description("first\nsecond\n\nthird") == "    - first\n      second\n\n      third"
    assert indent_description("  ") == ""


def test_default_scope(budgets):
    method = find_activity(budgets, "billingbudgets.billingAccounts.budgets.list").method
    assert default_scope(method) == "https://www.googleapis.com/auth/cloud-billing"
    method.scopes = []
    assert default_scope(method) is None


class TestCommands:
    def test_synopsis_with_upload(self, drive):
        activity = find_activity(drive, "drive.files.create")
        assert cli_synopsis(activity) == (
            "create (-r <kv>)... (-u simple|resumable <file> <mime>) [-p <v>]... [-o <out>]"
        )

    def test_command(self, books):
        activity = find_activity(books, "books.bookshelves.volumes.list")
        assert cli_command(books, activity) == (
            "books1 bookshelves volumes-list <user-id> <shelf> [-p <v>]... [-o <out>]"
        )

    def test_builder_call(self, books):
        activity = find_activity(books, "books.mylibrary.bookshelves.addVolume")
        lines = builder_call(books, activity).split("\n")
        assert [line.strip() for line in lines] == [
            'hub.mylibrary().bookshelves_add_volume("shelf", "volumeId")',
            '.reason("REASON_UNDEFINED")',
            '.source("source")',
            ".doit().await",
        ]

    def test_builder_call_upload(self, drive):
        call = builder_call(drive, find_activity(drive, "drive.files.create"))
        assert call.startswith("hub.files().create(req)")
        assert ".ignore_default_visibility(true)" in call
        assert call.endswith('.upload(fs::File::open("file.ext").unwrap(), "application/octet-stream".parse().unwrap()).await')
