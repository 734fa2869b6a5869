import asyncio
import inspect
import time
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from playwright.async_api import Page

from ..core.exceptions import ConditionTimeoutError

logger = logging.getLogger(__name__)

Condition = Callable[[], Union[bool, Awaitable[bool]]]


async def wait_for_condition(
        condition: Condition,
        timeout: int = 30000,
        interval: int = 500,
        description: Optional[str] = None
) -> bool:
    """
    Poll a condition until it returns a truthy value.

    Args:
        condition: Sync or async callable returning a boolean
        timeout: Budget in milliseconds
        interval: Polling interval in milliseconds
        description: Included in the timeout message

    Returns:
        True once the condition holds

    Raises:
        ConditionTimeoutError: if the budget runs out first
    """
    deadline = time.monotonic() + timeout / 1000
    while True:
        result = condition()
        if inspect.isawaitable(result):
            result = await result
        if result:
            return True

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            break
        await asyncio.sleep(min(interval / 1000, remaining))

    message = f"Condition not met within {timeout}ms"
    if description:
        message = f"{message}: {description}"
    raise ConditionTimeoutError(message, timeout_ms=timeout)


class WaitStrategy:
    """Different wait strategies for element interactions"""

    def __init__(self, page: Page, timeout: int = 30000):
        self.page = page
        self.timeout = timeout

    async def wait_for_visible(self, selector: str, timeout: Optional[int] = None):
        await self.page.wait_for_selector(selector, state='visible', timeout=timeout or self.timeout)

    async def wait_for_hidden(self, selector: str, timeout: Optional[int] = None):
        await self.page.wait_for_selector(selector, state='hidden', timeout=timeout or self.timeout)

    async def wait_for_attached(self, selector: str, timeout: Optional[int] = None):
        await self.page.wait_for_selector(selector, state='attached', timeout=timeout or self.timeout)

    async def wait_for_detached(self, selector: str, timeout: Optional[int] = None):
        await self.page.wait_for_selector(selector, state='detached', timeout=timeout or self.timeout)

    async def wait_for_url(self, url_part: str, timeout: Optional[int] = None):
        """Wait for the current URL to contain url_part"""
        await self.page.wait_for_url(f"**/{url_part.lstrip('/')}**", timeout=timeout or self.timeout)

    async def wait_for_navigation(self, action: Callable[[], Awaitable[Any]]):
        """Run an action that triggers navigation and wait for the new document"""
        async with self.page.expect_navigation(wait_until='domcontentloaded'):
            await action()

    async def wait_for_network_idle(self, timeout: Optional[int] = None):
        await self.page.wait_for_load_state('networkidle', timeout=timeout or self.timeout)

    async def wait_for_dom_ready(self):
        await self.page.wait_for_load_state('domcontentloaded')

    async def wait_for_full_load(self):
        await self.page.wait_for_load_state('load')

    async def wait_for_condition(self, condition: Condition, timeout: Optional[int] = None,
                                 interval: int = 500) -> bool:
        return await wait_for_condition(condition, timeout or self.timeout, interval)

    async def wait_for_element_count(self, selector: str, expected_count: int,
                                     timeout: Optional[int] = None):
        """Wait until exactly expected_count elements match selector"""
        async def count_matches() -> bool:
            return await self.page.locator(selector).count() == expected_count

        await wait_for_condition(
            count_matches,
            timeout or self.timeout,
            description=f"{selector} count == {expected_count}"
        )

    async def wait_for_text(self, selector: str, text: str, timeout: Optional[int] = None):
        await self.page.wait_for_selector(f'{selector}:has-text("{text}")', timeout=timeout or self.timeout)

    async def wait_for_enabled(self, selector: str, timeout: Optional[int] = None):
        await wait_for_condition(
            lambda: self.page.is_enabled(selector),
            timeout or self.timeout,
            description=f"{selector} enabled"
        )

    async def wait_for_disabled(self, selector: str, timeout: Optional[int] = None):
        await wait_for_condition(
            lambda: self.page.is_disabled(selector),
            timeout or self.timeout,
            description=f"{selector} disabled"
        )
