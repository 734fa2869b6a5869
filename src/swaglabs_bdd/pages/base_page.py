import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from playwright.async_api import Page

from ..utils.wait_strategy import wait_for_condition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LookupResult:
    """
    Outcome of a query that may not find anything.

    found=False with error=None means the element was verified absent;
    error set means the query itself failed and value is only a default.
    """
    found: bool
    value: Any = None
    error: Optional[BaseException] = None

    @property
    def errored(self) -> bool:
        return self.error is not None


class BasePage:
    """
    Common primitives every page object is built from.
    Actions wait for the target to be visible before interacting.
    """

    locators: Dict[str, str] = {}

    def __init__(self, page: Page, timeout: int = 30000):
        self.page = page
        self.timeout = timeout

    async def navigate(self, url: str):
        await self.page.goto(url, wait_until='domcontentloaded')

    async def wait_for_element(self, selector: str, timeout: Optional[int] = None):
        await self.page.wait_for_selector(selector, state='visible', timeout=timeout or self.timeout)

    async def wait_for_element_hidden(self, selector: str, timeout: Optional[int] = None):
        await self.page.wait_for_selector(selector, state='hidden', timeout=timeout or self.timeout)

    async def wait_until(self, condition, description: str, timeout: Optional[int] = None,
                         interval: int = 100) -> bool:
        """Poll an observable UI condition instead of sleeping"""
        return await wait_for_condition(condition, timeout or self.timeout, interval, description)

    async def click(self, selector: str):
        await self.wait_for_element(selector)
        await self.page.click(selector)

    async def fill(self, selector: str, text: str):
        await self.wait_for_element(selector)
        await self.page.fill(selector, text)

    async def get_text(self, selector: str) -> str:
        await self.wait_for_element(selector)
        return await self.page.text_content(selector) or ""

    async def get_all_texts(self, selector: str) -> List[str]:
        await self.wait_for_element(selector)
        return await self.page.locator(selector).all_text_contents()

    # Lookups that may legitimately find nothing

    async def lookup_visible(self, selector: str) -> LookupResult:
        try:
            visible = await self.page.is_visible(selector)
        except Exception as e:
            logger.debug(f"Visibility query failed for {selector}: {e}")
            return LookupResult(found=False, value=False, error=e)
        return LookupResult(found=visible, value=visible)

    async def lookup_count(self, selector: str) -> LookupResult:
        try:
            count = await self.page.locator(selector).count()
        except Exception as e:
            logger.debug(f"Count query failed for {selector}: {e}")
            return LookupResult(found=False, value=0, error=e)
        return LookupResult(found=count > 0, value=count)

    async def lookup_text(self, selector: str, timeout: Optional[int] = None) -> LookupResult:
        try:
            await self.wait_for_element(selector, timeout=timeout)
            text = await self.page.text_content(selector) or ""
        except Exception as e:
            logger.debug(f"Text query failed for {selector}: {e}")
            return LookupResult(found=False, value="", error=e)
        return LookupResult(found=True, value=text)

    async def is_visible(self, selector: str) -> bool:
        return (await self.lookup_visible(selector)).value

    async def get_count(self, selector: str) -> int:
        return (await self.lookup_count(selector)).value

    async def get_text_or_default(self, selector: str, timeout: Optional[int] = None) -> str:
        return (await self.lookup_text(selector, timeout)).value

    async def is_enabled(self, selector: str) -> bool:
        return await self.page.is_enabled(selector)

    async def get_attribute(self, selector: str, attribute: str) -> Optional[str]:
        await self.wait_for_element(selector)
        return await self.page.get_attribute(selector, attribute)

    async def select_option(self, selector: str, option: str):
        await self.wait_for_element(selector)
        await self.page.select_option(selector, option)

    async def check(self, selector: str):
        await self.wait_for_element(selector)
        await self.page.check(selector)

    async def uncheck(self, selector: str):
        await self.wait_for_element(selector)
        await self.page.uncheck(selector)

    async def hover(self, selector: str):
        await self.wait_for_element(selector)
        await self.page.hover(selector)

    async def press_key(self, key: str):
        await self.page.keyboard.press(key)

    async def type(self, selector: str, text: str, delay: int = 100):
        """Type text key by key with a delay between keystrokes"""
        await self.wait_for_element(selector)
        await self.page.locator(selector).press_sequentially(text, delay=delay)

    async def take_screenshot(self, path: str):
        await self.page.screenshot(path=path, full_page=True)

    async def scroll_to_element(self, selector: str):
        await self.page.locator(selector).scroll_into_view_if_needed()

    async def wait_for_page_load(self):
        await self.page.wait_for_load_state('domcontentloaded')

    async def wait_for_network_idle(self):
        await self.page.wait_for_load_state('networkidle')

    @property
    def url(self) -> str:
        return self.page.url

    async def get_title(self) -> str:
        return await self.page.title()

    async def reload(self):
        await self.page.reload(wait_until='domcontentloaded')

    async def go_back(self):
        await self.page.go_back(wait_until='domcontentloaded')

    async def go_forward(self):
        await self.page.go_forward(wait_until='domcontentloaded')
