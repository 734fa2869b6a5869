import logging
from contextlib import AsyncExitStack
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Type, TypeVar

from playwright.async_api import Browser, BrowserContext, FrameLocator, Page

from ..core.config import RunnerConfig
from ..pages.base_page import BasePage
from ..utils.helpers import artifact_stem, ensure_directory_exists

logger = logging.getLogger(__name__)

PageT = TypeVar('PageT', bound=BasePage)


@dataclass
class ScenarioWorld:
    """
    Per-scenario state handed to every step.

    Owns the browser, context and page for exactly one scenario and caches
    the page objects steps create, so nothing leaks between scenarios that
    run side by side.
    """
    config: RunnerConfig
    base_url: str = ""
    playwright: Any = None
    browser: Optional[Browser] = None
    context: Optional[BrowserContext] = None
    page: Optional[Page] = None
    scenario_name: str = ""
    env_config: Dict[str, Any] = field(default_factory=dict)
    current_step: Optional[Any] = None
    current_frame: Optional[FrameLocator] = None
    test_data: Dict[str, Any] = field(default_factory=dict)
    attachments: List[str] = field(default_factory=list)
    tracing_started: bool = False
    exit_stack: AsyncExitStack = field(default_factory=AsyncExitStack, repr=False)
    _pages: Dict[type, BasePage] = field(default_factory=dict, repr=False)

    def page_object(self, page_class: Type[PageT], fresh: bool = False) -> PageT:
        """
        Page object of the given class bound to this scenario's page.

        Created on first use and reused afterwards; fresh=True rebuilds it,
        e.g. right after a navigation.
        """
        if fresh or page_class not in self._pages:
            self._pages[page_class] = page_class(self.page, timeout=self.config.action_timeout)
        return self._pages[page_class]

    def url_for(self, path: str = '') -> str:
        if path.startswith(('http://', 'https://')):
            return path
        if not path:
            return self.base_url
        return self.base_url.rstrip('/') + '/' + path.lstrip('/')

    async def navigate(self, path: str = ''):
        await self.page.goto(self.url_for(path), wait_until='domcontentloaded')

    def _frame_locator(self, selector: str):
        """Locator inside the frame chosen by 'I switch to frame', if any"""
        if self.current_frame is None:
            return None
        return self.current_frame.locator(selector)

    async def wait_for_element(self, selector: str, timeout: int = 30000):
        locator = self._frame_locator(selector)
        if locator is not None:
            await locator.wait_for(state='visible', timeout=timeout)
        else:
            await self.page.wait_for_selector(selector, timeout=timeout)

    async def click_element(self, selector: str):
        locator = self._frame_locator(selector)
        if locator is not None:
            await locator.click()
        else:
            await self.page.click(selector)

    async def fill_input(self, selector: str, text: str):
        locator = self._frame_locator(selector)
        if locator is not None:
            await locator.fill(text)
        else:
            await self.page.fill(selector, text)

    async def get_text(self, selector: str) -> Optional[str]:
        locator = self._frame_locator(selector)
        if locator is not None:
            return await locator.text_content()
        return await self.page.text_content(selector)

    async def is_visible(self, selector: str) -> bool:
        locator = self._frame_locator(selector)
        if locator is not None:
            return await locator.is_visible()
        return await self.page.is_visible(selector)

    async def take_screenshot(self, name: str) -> str:
        """Save a full-page screenshot under the screenshots directory"""
        directory = ensure_directory_exists(Path(self.config.output_dir) / "screenshots")
        path = directory / f"{artifact_stem(name)}.png"
        await self.page.screenshot(path=str(path), full_page=True)
        self.attachments.append(str(path))
        logger.info(f"Screenshot saved: {path}")
        return str(path)

    def store_data(self, key: str, value: Any):
        """Store data for use in later steps"""
        self.test_data[key] = value

    def get_data(self, key: str, default: Any = None) -> Any:
        return self.test_data.get(key, default)

    @property
    def current_url(self) -> str:
        return self.page.url
