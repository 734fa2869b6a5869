from unittest.mock import AsyncMock, MagicMock

import pytest

from swaglabs_bdd.utils.assertions import (
    AssertionHelper,
    assert_all,
    assert_contains,
    assert_equal,
    assert_false,
    assert_greater,
    assert_matches,
    assert_not_contains,
    assert_true,
)


class TestPlainAssertions:
    """Test module-level assertion helpers"""

    def test_passing_assertions(self):
        assert_equal(1, 1)
        assert_contains('Epic sadface: locked out', 'locked out')
        assert_not_contains('https://www.saucedemo.com/', '/inventory.html')
        assert_matches('$29.99', r'^\$\d+\.\d{2}$')
        assert_true('x')
        assert_false('')
        assert_greater(2, 1)
        assert_all(['a', 'b'])

    def test_equal_failure_message(self):
        with pytest.raises(AssertionError, match=r"Expected 3, got 2"):
            assert_equal(2, 3)

    def test_custom_message_wins(self):
        with pytest.raises(AssertionError, match='badge mismatch'):
            assert_equal(2, 3, 'badge mismatch')

    def test_contains_none(self):
        with pytest.raises(AssertionError):
            assert_contains(None, 'x')

    def test_matches_failure(self):
        with pytest.raises(AssertionError, match='to match'):
            assert_matches('29.99', r'^\$')

    def test_all_reports_empty_item(self):
        with pytest.raises(AssertionError, match='Item 1 is empty'):
            assert_all(['a', '', 'c'])


class TestAssertionHelper:
    """Test page assertions against a mocked page"""

    @pytest.fixture
    def page(self):
        page = AsyncMock()
        page.url = 'https://www.saucedemo.com/inventory.html'
        return page

    @pytest.fixture
    def helper(self, page):
        return AssertionHelper(page)

    @pytest.mark.asyncio
    async def test_visible(self, helper, page):
        page.is_visible.return_value = True
        await helper.assert_visible('.app_logo')

        page.is_visible.return_value = False
        with pytest.raises(AssertionError, match='.app_logo should be visible'):
            await helper.assert_visible('.app_logo')

    @pytest.mark.asyncio
    async def test_text_equals_strips(self, helper, page):
        page.text_content.return_value = '  Products \n'
        await helper.assert_text_equals('.title', 'Products')

    @pytest.mark.asyncio
    async def test_text_contains_failure_shows_actual(self, helper, page):
        page.text_content.return_value = 'Your Cart'
        with pytest.raises(AssertionError, match="got 'Your Cart'"):
            await helper.assert_text_contains('.title', 'Checkout')

    @pytest.mark.asyncio
    async def test_count(self, helper, page):
        page.locator = MagicMock(return_value=MagicMock(count=AsyncMock(return_value=6)))
        await helper.assert_count('.inventory_item', 6)

        with pytest.raises(AssertionError, match='should be 5, got 6'):
            await helper.assert_count('.inventory_item', 5)

    def test_url_assertions(self, helper):
        helper.assert_url_contains('inventory')
        with pytest.raises(AssertionError):
            helper.assert_url_equals('https://www.saucedemo.com/')

    @pytest.mark.asyncio
    async def test_title(self, helper, page):
        page.title.return_value = 'Swag Labs'
        await helper.assert_title('Swag Labs')
        await helper.assert_title_contains('Swag')

    @pytest.mark.asyncio
    async def test_has_class_matches_whole_class_names(self, helper, page):
        page.get_attribute.return_value = 'btn btn_primary btn_small'
        await helper.assert_has_class('#add', 'btn_primary')

        with pytest.raises(AssertionError):
            await helper.assert_has_class('#add', 'btn_prim')

    @pytest.mark.asyncio
    async def test_value(self, helper, page):
        page.input_value.return_value = 'lohi'
        await helper.assert_value('.product_sort_container', 'lohi')
