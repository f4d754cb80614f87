"""Unit tests for content sources (targets)."""

import httpx
import pytest

from models.config import TargetConfiguration
from models.responses import TargetInfo
from services.targets import (
    ConfiguredTargetSource,
    extract_visible_text,
    is_hidden,
)

PAGE = """
<html>
  <head><title>Cats</title><style>body { color: red; }</style></head>
  <body>
    <h1>All about   cats</h1>
    <script>var hidden = "script text";</script>
    <p>Cats are <b>small</b> mammals.<br>They purr.</p>
    <div style="display: none">invisible block</div>
    <div hidden><span>hidden attribute</span></div>
    <p style="Visibility:Hidden">not shown</p>
    <noscript>enable javascript</noscript>
    <img src="cat.png" alt="cat">
    <p>Fish &amp; chips</p>
  </body>
</html>
"""


def test_extract_visible_text() -> None:
    """Test that only visible text is extracted."""
    assert (
        extract_visible_text(PAGE)
        == "All about cats Cats are small mammals. They purr. Fish & chips"
    )


def test_extract_visible_text_empty_document() -> None:
    """Test extraction from document without text."""
    assert extract_visible_text("") == ""
    assert extract_visible_text("<script>x()</script>") == ""


def test_extract_visible_text_unbalanced_markup() -> None:
    """Test that stray end tags do not break extraction."""
    assert extract_visible_text("</div><p>text</p></p></body>") == "text"


def test_extract_visible_text_implicitly_closed_elements() -> None:
    """Test that unclosed list items inside hidden element do not hide the rest."""
    html = (
        "<nav hidden><ul><li>menu a<li>menu b</ul></nav>"
        "<p>Visible article text<p>Second paragraph"
    )
    assert extract_visible_text(html) == "Visible article text Second paragraph"


def test_is_hidden() -> None:
    """Test detection of hidden elements."""
    assert is_hidden([("hidden", None)]) is True
    assert is_hidden([("style", "display:none")]) is True
    assert is_hidden([("style", "color: red; DISPLAY : NONE")]) is True
    assert is_hidden([("style", "color: red; display: block;")]) is False
    assert is_hidden([("style", None)]) is False
    assert is_hidden([("class", "hidden")]) is False
    assert is_hidden([]) is False


def make_source(handler) -> ConfiguredTargetSource:
    """Target source with two targets and mocked HTTP transport."""
    return ConfiguredTargetSource(
        [
            TargetConfiguration(id="1", url="https://example.com", title="Example"),
            TargetConfiguration(id="2", url="https://example.org"),
        ],
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_list_targets() -> None:
    """Test that configured targets are listed in configuration order."""
    source = make_source(lambda request: httpx.Response(200))

    targets = await source.list_targets()

    assert targets == [
        TargetInfo(id="1", url="https://example.com", title="Example"),
        TargetInfo(id="2", url="https://example.org", title="Untitled"),
    ]


@pytest.mark.asyncio
async def test_get_target() -> None:
    """Test lookup of single target."""
    source = make_source(lambda request: httpx.Response(200))

    target = await source.get_target("2")
    assert target is not None
    assert target.url == "https://example.org"
    assert await source.get_target("3") is None


@pytest.mark.asyncio
async def test_extract_text() -> None:
    """Test that target is downloaded and markup is stripped."""
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(str(request.url))
        return httpx.Response(200, text=PAGE)

    source = make_source(handler)

    text = await source.extract_text("1")

    assert text.startswith("All about cats")
    assert "script text" not in text
    assert requested == ["https://example.com"]


@pytest.mark.asyncio
async def test_extract_text_http_error() -> None:
    """Test that HTTP error results in empty text."""
    source = make_source(lambda request: httpx.Response(404, text="not found"))
    assert await source.extract_text("1") == ""


@pytest.mark.asyncio
async def test_extract_text_network_error() -> None:
    """Test that unreachable target results in empty text."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    source = make_source(handler)
    assert await source.extract_text("1") == ""


@pytest.mark.asyncio
async def test_extract_text_unknown_target() -> None:
    """Test that unknown target results in empty text without any request."""
    requested = []

    def handler(request: httpx.Request) -> httpx.Response:
        requested.append(request)
        return httpx.Response(200, text=PAGE)

    source = make_source(handler)

    assert await source.extract_text("42") == ""
    assert not requested
