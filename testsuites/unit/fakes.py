"""
In-memory stand-ins for the parts of the Playwright page API the framework
uses, so framework behaviour can be checked without a browser.

A FakePage holds a tiny "DOM": a mapping of selector -> list of FakeElement.
"""

from typing import Any, Callable, Dict, List, Optional

from playwright.async_api import TimeoutError as PlaywrightTimeoutError


class DummyConfig:
    def __init__(self, data=None):
        self.data = data or {}

    def get(self, key, default=None):
        return self.data.get(key, default)


class FakeElement:
    def __init__(
        self,
        text: str = "",
        visible: bool = True,
        attrs: Optional[Dict[str, str]] = None,
        styles: Optional[Dict[str, str]] = None,
        on_click: Optional[Callable[[], None]] = None,
        click_error: Optional[Exception] = None,
        visibility_error: Optional[Exception] = None,
    ):
        self.text = text
        self.visible = visible
        self.attrs = attrs or {}
        self.styles = styles or {}
        self.on_click = on_click
        self.click_error = click_error
        self.visibility_error = visibility_error
        self.clicks = 0
        self.filled: List[str] = []
        self.hovered = False
        self.scrolled = False


class FakeNthLocator:
    """A locator narrowed to one index of a FakeLocator's matches."""

    def __init__(self, parent: "FakeLocator", index: int):
        self.parent = parent
        self.index = index

    @property
    def element(self) -> FakeElement:
        elements = self.parent.elements
        if self.index >= len(elements):
            raise PlaywrightTimeoutError(f"No element for {self.parent.selector}")
        return elements[self.index]

    async def is_visible(self) -> bool:
        element = self.element
        if element.visibility_error is not None:
            raise element.visibility_error
        return element.visible

    async def click(self, timeout=None):
        element = self.element
        self.parent.page.timeouts.append(timeout)
        if element.click_error is not None:
            raise element.click_error
        element.clicks += 1
        self.parent.page.clicked.append(self.parent.selector)
        if element.on_click is not None:
            element.on_click()

    async def fill(self, value, timeout=None):
        self.parent.page.timeouts.append(timeout)
        self.element.filled.append(value)

    async def hover(self, timeout=None):
        self.parent.page.timeouts.append(timeout)
        self.element.hovered = True

    async def text_content(self):
        return self.element.text

    async def get_attribute(self, name):
        return self.element.attrs.get(name)

    async def scroll_into_view_if_needed(self, timeout=None):
        self.element.scrolled = True

    async def evaluate(self, script, arg=None):
        if "getComputedStyle" in script:
            return self.element.styles.get(arg, "")
        return self.element.attrs.get("__evaluate__")

    async def wait_for(self, state="visible", timeout=None):
        self.parent.page.timeouts.append(timeout)
        elements = self.parent.elements
        present = self.index < len(elements) and elements[self.index].visible
        if state == "visible" and not present:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")
        if state == "hidden" and present:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded")


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    @property
    def elements(self) -> List[FakeElement]:
        return self.page.dom.get(self.selector, [])

    async def count(self) -> int:
        if self.page.count_error is not None:
            raise self.page.count_error
        return len(self.elements)

    @property
    def first(self) -> FakeNthLocator:
        return FakeNthLocator(self, 0)

    def nth(self, index: int) -> FakeNthLocator:
        return FakeNthLocator(self, index)

    async def all_text_contents(self) -> List[str]:
        return [element.text for element in self.elements]

    async def click(self, **options):
        await self.first.click()


class FakeResponse:
    def __init__(self, status: int = 200):
        self.status = status


class FakePage:
    def __init__(
        self,
        dom: Optional[Dict[str, List[FakeElement]]] = None,
        viewport_size: Optional[Dict[str, int]] = None,
    ):
        self.dom = dom if dom is not None else {}
        self.viewport_size = viewport_size if viewport_size is not None else {"width": 1280, "height": 720}
        self.url = "about:blank"
        self.count_error: Optional[Exception] = None
        self.inner_width = 1280
        self.snapshots: List[Any] = []
        self.load_state_errors: Dict[str, Exception] = {}
        self.goto_results: List[Any] = []
        self.scroll_y = 0
        self.scroll_height = 3000
        self.clipboard = ""

        self.clicked: List[str] = []
        self.handlers: Dict[str, List[Callable]] = {}
        self.load_states: List[str] = []
        self.waits: List[int] = []
        self.visited: List[str] = []
        self.timeouts: List[Optional[int]] = []

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def remove_listener(self, event: str, handler: Callable) -> None:
        self.handlers.get(event, []).remove(handler)

    async def wait_for_load_state(self, state, timeout=None):
        if state in self.load_state_errors:
            raise self.load_state_errors[state]
        self.load_states.append(state)

    async def wait_for_timeout(self, ms):
        self.waits.append(ms)

    async def evaluate(self, script, arg=None):
        if "innerWidth" in script:
            return self.inner_width
        if "scrollTo" in script:
            self.scroll_y = self.scroll_height
            return None
        if "scrollY" in script:
            return self.scroll_y
        if "clipboard" in script:
            return self.clipboard
        if self.snapshots:
            return self.snapshots.pop(0)
        return [100, 0]

    async def goto(self, url, **options):
        self.visited.append(url)
        result = self.goto_results.pop(0) if self.goto_results else FakeResponse(200)
        if isinstance(result, Exception):
            raise result
        self.url = url
        return result

    async def title(self):
        return "Fake Page"

    async def reload(self, **options):
        self.visited.append(self.url)
        return FakeResponse(200)
