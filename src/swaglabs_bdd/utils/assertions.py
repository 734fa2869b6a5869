import re
from typing import Any, Iterable, Optional

from playwright.async_api import Page


def assert_equal(actual: Any, expected: Any, message: str = "") -> None:
    if actual != expected:
        raise AssertionError(message or f"Expected {expected!r}, got {actual!r}")


def assert_contains(container: Any, item: Any, message: str = "") -> None:
    if container is None or item not in container:
        raise AssertionError(message or f"Expected {container!r} to contain {item!r}")


def assert_not_contains(container: Any, item: Any, message: str = "") -> None:
    if container is not None and item in container:
        raise AssertionError(message or f"Expected {container!r} not to contain {item!r}")


def assert_matches(value: Optional[str], pattern: str, message: str = "") -> None:
    if value is None or not re.search(pattern, value):
        raise AssertionError(message or f"Expected {value!r} to match /{pattern}/")


def assert_true(value: Any, message: str = "") -> None:
    if not value:
        raise AssertionError(message or f"Expected a truthy value, got {value!r}")


def assert_false(value: Any, message: str = "") -> None:
    if value:
        raise AssertionError(message or f"Expected a falsy value, got {value!r}")


def assert_greater(actual: Any, threshold: Any, message: str = "") -> None:
    if not actual > threshold:
        raise AssertionError(message or f"Expected {actual!r} to be greater than {threshold!r}")


def assert_all(values: Iterable[Any], message: str = "") -> None:
    values = list(values)
    for index, value in enumerate(values):
        if not value:
            raise AssertionError(message or f"Item {index} is empty in {values!r}")


class AssertionHelper:
    """Custom page assertions with descriptive failure messages"""

    def __init__(self, page: Page):
        self.page = page

    async def assert_visible(self, selector: str, message: str = ""):
        is_visible = await self.page.is_visible(selector)
        assert_true(is_visible, message or f"Element {selector} should be visible")

    async def assert_not_visible(self, selector: str, message: str = ""):
        is_visible = await self.page.is_visible(selector)
        assert_false(is_visible, message or f"Element {selector} should not be visible")

    async def assert_text_contains(self, selector: str, expected_text: str, message: str = ""):
        text = await self.page.text_content(selector)
        assert_contains(text, expected_text,
                        message or f'Element {selector} should contain text "{expected_text}", got {text!r}')

    async def assert_text_equals(self, selector: str, expected_text: str, message: str = ""):
        text = await self.page.text_content(selector)
        actual = text.strip() if text is not None else None
        assert_equal(actual, expected_text,
                     message or f'Element {selector} should equal text "{expected_text}", got {actual!r}')

    async def assert_attribute(self, selector: str, attribute: str, expected_value: str, message: str = ""):
        value = await self.page.get_attribute(selector, attribute)
        assert_equal(value, expected_value,
                     message or f'Element {selector} should have {attribute}="{expected_value}", got {value!r}')

    async def assert_enabled(self, selector: str, message: str = ""):
        is_enabled = await self.page.is_enabled(selector)
        assert_true(is_enabled, message or f"Element {selector} should be enabled")

    async def assert_disabled(self, selector: str, message: str = ""):
        is_disabled = await self.page.is_disabled(selector)
        assert_true(is_disabled, message or f"Element {selector} should be disabled")

    async def assert_count(self, selector: str, expected_count: int, message: str = ""):
        count = await self.page.locator(selector).count()
        assert_equal(count, expected_count,
                     message or f"Count of {selector} should be {expected_count}, got {count}")

    def assert_url_contains(self, url_part: str, message: str = ""):
        url = self.page.url
        assert_contains(url, url_part, message or f'URL should contain "{url_part}", got {url!r}')

    def assert_url_equals(self, expected_url: str, message: str = ""):
        url = self.page.url
        assert_equal(url, expected_url, message or f'URL should equal "{expected_url}", got {url!r}')

    async def assert_title(self, expected_title: str, message: str = ""):
        title = await self.page.title()
        assert_equal(title, expected_title, message or f'Title should be "{expected_title}", got {title!r}')

    async def assert_title_contains(self, title_part: str, message: str = ""):
        title = await self.page.title()
        assert_contains(title, title_part, message or f'Title should contain "{title_part}", got {title!r}')

    async def assert_checked(self, selector: str, message: str = ""):
        is_checked = await self.page.is_checked(selector)
        assert_true(is_checked, message or f"Element {selector} should be checked")

    async def assert_not_checked(self, selector: str, message: str = ""):
        is_checked = await self.page.is_checked(selector)
        assert_false(is_checked, message or f"Element {selector} should not be checked")

    async def assert_has_class(self, selector: str, class_name: str, message: str = ""):
        class_attribute = await self.page.get_attribute(selector, 'class')
        assert_contains((class_attribute or "").split(), class_name,
                        message or f'Element {selector} should have class "{class_name}"')

    async def assert_value(self, selector: str, expected_value: str, message: str = ""):
        value = await self.page.input_value(selector)
        assert_equal(value, expected_value,
                     message or f'Element {selector} should have value "{expected_value}", got {value!r}')
