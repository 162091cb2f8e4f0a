from __future__ import annotations

from pathlib import Path

import pytest

from sitebuild.config import BuildSettings
from sitebuild.search.dataset import DEFAULT_BOOKS_URL


def test_defaults_apply_when_environment_is_empty() -> None:
    settings = BuildSettings.from_env({})

    assert settings.content_dir == Path("content")
    assert settings.templates_dir == Path("src/templates")
    assert settings.page_limit == 1000
    assert settings.books_url == DEFAULT_BOOKS_URL
    assert settings.dev_port == 8000
    assert settings.tunnel_command == "gp url"
    assert settings.template_suffix == ".html"


def test_values_are_read_from_environment() -> None:
    settings = BuildSettings.from_env(
        {
            "SITEBUILD_CONTENT_DIR": "site/content",
            "SITEBUILD_PAGE_LIMIT": "25",
            "SITEBUILD_FETCH_TIMEOUT_SECONDS": "2.5",
            "SITEBUILD_TEMPLATE_SUFFIX": ".tsx",
            "SITEBUILD_DEV_PORT": "9000",
        }
    )

    assert settings.content_dir == Path("site/content")
    assert settings.page_limit == 25
    assert settings.fetch_timeout_seconds == 2.5
    assert settings.template_suffix == ".tsx"
    assert settings.dev_port == 9000


def test_empty_books_url_disables_search() -> None:
    assert BuildSettings.from_env({"SITEBUILD_BOOKS_URL": "  "}).books_url is None


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("SITEBUILD_PAGE_LIMIT", "0"),
        ("SITEBUILD_PAGE_LIMIT", "many"),
        ("SITEBUILD_DEV_PORT", "70000"),
        ("SITEBUILD_FETCH_TIMEOUT_SECONDS", "0"),
        ("SITEBUILD_BOOKS_URL", "books.json"),
        ("SITEBUILD_TEMPLATE_SUFFIX", "html"),
        ("SITEBUILD_CONTENT_DIR", " "),
    ],
)
def test_invalid_values_fail_fast_naming_the_variable(name: str, value: str) -> None:
    with pytest.raises(ValueError, match=name):
        BuildSettings.from_env({name: value})
