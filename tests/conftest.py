import pytest
from click.testing import CliRunner

from txt2tags_lite.converter import LineProcessor
from txt2tags_lite.html_renderer import HtmlRenderer
from txt2tags_lite.man_renderer import ManRenderer
from txt2tags_lite.wiki_renderer import WikiRenderer


@pytest.fixture()
def cli_runner() -> CliRunner:
    """Provides a reusable Click CLI runner."""
    return CliRunner()


@pytest.fixture()
def html() -> HtmlRenderer:
    return HtmlRenderer()


@pytest.fixture()
def man() -> ManRenderer:
    return ManRenderer()


@pytest.fixture()
def wiki() -> WikiRenderer:
    return WikiRenderer()


@pytest.fixture()
def html_processor() -> LineProcessor:
    """Line processor converting to HTML."""
    return LineProcessor(HtmlRenderer())
