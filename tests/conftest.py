"""
Shared fixtures for discodocs tests.

Discovery documents under tests/fixtures are trimmed copies of real
Google API descriptions:
- books v1: nested resources and global parameters
- billingbudgets v1beta1: nested request schemas and a canonical name
- drive v3: media upload/download, top-level methods, maps and cycles
"""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from discodocs.config import Settings, settings
from discodocs.discovery import RestDescription, parse_discovery

FIXTURES = Path(__file__).parent / "fixtures"


def load_fixture(name: str) -> dict:
    return json.loads((FIXTURES / name).read_text(encoding="utf-8"))


@pytest.fixture(autouse=True)
def no_openai(monkeypatch):
    """Never reach out to OpenAI from tests, whatever the environment says."""
    monkeypatch.setattr(settings, "openai_api_key", None)
    monkeypatch.setattr(settings, "allowed_discovery_origins", [])


@pytest.fixture
def test_settings() -> Settings:
    return Settings(_env_file=None, openai_api_key=None)


@pytest.fixture
def books_path() -> Path:
    return FIXTURES / "books_v1.json"


@pytest.fixture
def books() -> RestDescription:
    return parse_discovery(load_fixture("books_v1.json"))


@pytest.fixture
def budgets() -> RestDescription:
    return parse_discovery(load_fixture("billingbudgets_v1beta1.json"))


@pytest.fixture
def drive() -> RestDescription:
    return parse_discovery(load_fixture("drive_v3.json"))
