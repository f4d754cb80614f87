"""Content sources (targets) that can be listed and summarized."""

from abc import ABC, abstractmethod
from html.parser import HTMLParser
from typing import Optional

import httpx

import constants
from log import get_logger
from models.config import TargetConfiguration
from models.responses import TargetInfo

logger = get_logger(__name__)

# content of these elements is never visible
SKIPPED_ELEMENTS = frozenset({"script", "style", "noscript", "iframe", "template", "head"})

# elements without end tag
VOID_ELEMENTS = frozenset(
    {
        "area",
        "base",
        "br",
        "col",
        "embed",
        "hr",
        "img",
        "input",
        "link",
        "meta",
        "source",
        "track",
        "wbr",
    }
)


class VisibleTextParser(HTMLParser):
    """Collect text that would be visible in rendered document.

    Text inside script-like elements and inside elements hidden by inline
    `display:none` / `visibility:hidden` style or `hidden` attribute is
    skipped.
    """

    def __init__(self) -> None:
        """Initialize the parser."""
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []
        self._stack: list[tuple[str, bool]] = []

    @property
    def hidden(self) -> bool:
        """Check if parser is inside invisible element."""
        return any(hidden for _, hidden in self._stack)

    def handle_starttag(self, tag: str, attrs: list[tuple[str, Optional[str]]]) -> None:
        """Track whether the element hides its content."""
        if tag in VOID_ELEMENTS:
            return
        self._stack.append((tag, tag in SKIPPED_ELEMENTS or is_hidden(attrs)))

    def handle_endtag(self, tag: str) -> None:
        """Leave the nearest open element with the same name.

        Elements left open inside it (e.g. `<li>`, `<p>`) are closed too, stray
        end tags are ignored.
        """
        if tag in VOID_ELEMENTS:
            return
        for index in range(len(self._stack) - 1, -1, -1):
            if self._stack[index][0] == tag:
                del self._stack[index:]
                return

    def handle_data(self, data: str) -> None:
        """Collect visible text."""
        if not self.hidden and data.strip():
            self.parts.append(data.strip())

    def text(self) -> str:
        """Return visible text joined by single spaces."""
        return " ".join(" ".join(self.parts).split())


def is_hidden(attrs: list[tuple[str, Optional[str]]]) -> bool:
    """Check if element is hidden by attribute or inline style."""
    for name, value in attrs:
        if name == "hidden":
            return True
        if name == "style" and value:
            style = value.replace(" ", "").lower()
            if "display:none" in style or "visibility:hidden" in style:
                return True
    return False


def extract_visible_text(html: str) -> str:
    """Extract visible text from HTML document."""
    parser = VisibleTextParser()
    parser.feed(html)
    parser.close()
    return parser.text()


class TargetSource(ABC):
    """Source of documents that can be summarized."""

    @abstractmethod
    async def list_targets(self) -> list[TargetInfo]:
        """Return all available targets."""

    @abstractmethod
    async def extract_text(self, target_id: str) -> str:
        """Return visible text of the target, empty string on any failure."""

    async def get_target(self, target_id: str) -> Optional[TargetInfo]:
        """Return target with given ID, None when it does not exist."""
        for target in await self.list_targets():
            if target.id == target_id:
                return target
        return None


class ConfiguredTargetSource(TargetSource):
    """Targets listed in configuration, text is fetched over HTTP."""

    def __init__(
        self,
        targets: list[TargetConfiguration],
        timeout: Optional[float] = constants.DEFAULT_PROVIDER_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """Initialize target source with configured targets."""
        self.targets = [
            TargetInfo(id=t.id, url=t.url, title=t.title) for t in targets
        ]
        self.timeout = timeout
        self.transport = transport

    async def list_targets(self) -> list[TargetInfo]:
        """Return configured targets."""
        return list(self.targets)

    async def extract_text(self, target_id: str) -> str:
        """Download target and strip markup."""
        target = await self.get_target(target_id)
        if target is None:
            logger.warning("Unknown target %s", target_id)
            return ""
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self.transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(target.url)
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.error("Unable to fetch %s: %s", target.url, e)
            return ""
        return extract_visible_text(response.text)
