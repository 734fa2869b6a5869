from unittest.mock import AsyncMock, MagicMock, call

import pytest

from swaglabs_bdd.core.exceptions import ConditionTimeoutError
from swaglabs_bdd.pages import BasePage, CartPage, CheckoutPage, InventoryPage, LoginPage, LookupResult


@pytest.fixture
def page():
    """Mocked Playwright page sitting on the login screen"""
    page = AsyncMock()
    page.url = 'https://www.saucedemo.com/'
    page.is_visible.return_value = False
    return page


def locator_with(**methods):
    locator = MagicMock()
    for name, value in methods.items():
        setattr(locator, name, AsyncMock(return_value=value))
    return locator


class TestBasePage:
    """Test shared page primitives"""

    @pytest.mark.asyncio
    async def test_click_waits_for_visibility(self, page):
        base = BasePage(page, timeout=1000)

        await base.click('#login-button')

        page.wait_for_selector.assert_awaited_once_with('#login-button', state='visible', timeout=1000)
        page.click.assert_awaited_once_with('#login-button')

    @pytest.mark.asyncio
    async def test_get_text_none_becomes_empty(self, page):
        page.text_content.return_value = None

        assert await BasePage(page).get_text('.title') == ''

    @pytest.mark.asyncio
    async def test_lookup_visible_absent(self, page):
        result = await BasePage(page).lookup_visible('.shopping_cart_badge')

        assert result == LookupResult(found=False, value=False)
        assert not result.errored

    @pytest.mark.asyncio
    async def test_lookup_visible_error_is_distinguished(self, page):
        page.is_visible.side_effect = RuntimeError('Target closed')
        base = BasePage(page)

        result = await base.lookup_visible('.shopping_cart_badge')

        assert result.found is False
        assert result.errored
        assert await base.is_visible('.shopping_cart_badge') is False

    @pytest.mark.asyncio
    async def test_count_defaults_to_zero_on_error(self, page):
        page.locator = MagicMock(return_value=locator_with(count=None))
        page.locator.return_value.count.side_effect = RuntimeError('detached')

        assert await BasePage(page).get_count('.cart_item') == 0

    @pytest.mark.asyncio
    async def test_text_or_default(self, page):
        page.wait_for_selector.side_effect = TimeoutError('not visible')

        assert await BasePage(page).get_text_or_default('[data-test="error"]', timeout=10) == ''

    @pytest.mark.asyncio
    async def test_lookup_text_found(self, page):
        page.text_content.return_value = 'Products'

        result = await BasePage(page).lookup_text('.title')

        assert result == LookupResult(found=True, value='Products')

    @pytest.mark.asyncio
    async def test_wait_until_times_out(self, page):
        with pytest.raises(ConditionTimeoutError, match='never'):
            await BasePage(page, timeout=50).wait_until(lambda: False, 'never')

    @pytest.mark.asyncio
    async def test_navigation_helpers(self, page):
        base = BasePage(page)

        await base.navigate('https://www.saucedemo.com/')
        await base.reload()

        page.goto.assert_awaited_once_with('https://www.saucedemo.com/', wait_until='domcontentloaded')
        page.reload.assert_awaited_once_with(wait_until='domcontentloaded')
        assert base.url == 'https://www.saucedemo.com/'


class TestLoginPage:
    """Test LoginPage"""

    @pytest.mark.asyncio
    async def test_login_reaches_inventory(self, page):
        login_page = LoginPage(page, timeout=1000)

        async def submit(selector):
            page.url = 'https://www.saucedemo.com/inventory.html'

        page.click.side_effect = submit

        await login_page.login('standard_user', 'secret_sauce')

        page.fill.assert_has_awaits([
            call('#user-name', 'standard_user'),
            call('#password', 'secret_sauce'),
        ])
        page.click.assert_awaited_once_with('#login-button')

    @pytest.mark.asyncio
    async def test_login_settles_on_error_banner(self, page):
        page.is_visible.side_effect = lambda selector: selector == '[data-test="error"]'
        page.text_content.return_value = 'Epic sadface: Sorry, this user has been locked out.'
        login_page = LoginPage(page, timeout=1000)

        await login_page.login('locked_out_user', 'secret_sauce')

        assert await login_page.get_error_message() == 'Epic sadface: Sorry, this user has been locked out.'

    @pytest.mark.asyncio
    async def test_login_times_out_without_outcome(self, page):
        login_page = LoginPage(page, timeout=50)

        with pytest.raises(ConditionTimeoutError):
            await login_page.click_login_button()

    @pytest.mark.asyncio
    async def test_close_error_only_when_shown(self, page):
        login_page = LoginPage(page)

        await login_page.close_error_message()

        page.click.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_clear_form(self, page):
        await LoginPage(page).clear_form()

        page.fill.assert_has_awaits([call('#user-name', ''), call('#password', '')])


class TestInventoryPage:
    """Test InventoryPage"""

    @pytest.mark.asyncio
    async def test_add_waits_for_remove_button(self, page):
        await InventoryPage(page).add_product_to_cart('Sauce Labs Backpack')

        page.click.assert_awaited_once_with('[data-test="add-to-cart-sauce-labs-backpack"]')
        page.wait_for_selector.assert_awaited_with(
            '[data-test="remove-sauce-labs-backpack"]', state='visible', timeout=30000
        )

    @pytest.mark.asyncio
    async def test_remove_waits_for_add_button(self, page):
        await InventoryPage(page).remove_product_from_cart('Test.allTheThings() T-Shirt (Red)')

        page.click.assert_awaited_once_with('[data-test="remove-test.allthethings()-t-shirt-(red)"]')
        page.wait_for_selector.assert_awaited_with(
            '[data-test="add-to-cart-test.allthethings()-t-shirt-(red)"]', state='visible', timeout=30000
        )

    @pytest.mark.asyncio
    async def test_cart_count_without_badge(self, page):
        assert await InventoryPage(page).get_cart_item_count() == 0

    @pytest.mark.asyncio
    async def test_cart_count_with_badge(self, page):
        page.is_visible.return_value = True
        page.text_content.return_value = '3'

        assert await InventoryPage(page).get_cart_item_count() == 3

    @pytest.mark.asyncio
    async def test_sort_waits_for_selected_value(self, page):
        page.input_value.return_value = 'hilo'

        await InventoryPage(page, timeout=1000).sort_products('hilo')

        page.select_option.assert_awaited_once_with('.product_sort_container', 'hilo')
        page.input_value.assert_awaited_with('.product_sort_container')

    @pytest.mark.asyncio
    async def test_product_names(self, page):
        page.locator = MagicMock(return_value=locator_with(all_text_contents=['Sauce Labs Backpack']))

        assert await InventoryPage(page).get_all_product_names() == ['Sauce Labs Backpack']
        page.locator.assert_called_with('.inventory_item_name')

    @pytest.mark.asyncio
    async def test_product_price_by_name(self, page):
        def make_item(name, price):
            item = MagicMock()
            parts = {
                '.inventory_item_name': locator_with(text_content=name),
                '.inventory_item_price': locator_with(text_content=price),
            }
            item.locator = MagicMock(side_effect=lambda selector: parts[selector])
            return item

        items = [make_item('Sauce Labs Backpack', '$29.99'), make_item('Sauce Labs Onesie', '$7.99')]
        page.locator = MagicMock(return_value=locator_with(all=items))
        inventory_page = InventoryPage(page)

        assert await inventory_page.get_product_price('Sauce Labs Onesie') == '$7.99'
        assert await inventory_page.get_product_price('Unknown') == ''

    @pytest.mark.asyncio
    async def test_close_menu_waits_for_hidden_link(self, page):
        await InventoryPage(page).close_menu()

        page.click.assert_awaited_once_with('#react-burger-cross-btn')
        page.wait_for_selector.assert_awaited_with('#logout_sidebar_link', state='hidden', timeout=30000)

    @pytest.mark.asyncio
    async def test_reset_app_state(self, page):
        await InventoryPage(page).reset_app_state()

        assert page.click.await_args_list == [
            call('#react-burger-menu-btn'),
            call('#reset_sidebar_link'),
            call('#react-burger-cross-btn'),
        ]


class TestCartPage:
    """Test CartPage"""

    @pytest.mark.asyncio
    async def test_empty_cart_has_no_names(self, page):
        page.locator = MagicMock(return_value=locator_with(count=0))
        cart_page = CartPage(page)

        assert await cart_page.get_cart_product_names() == []
        assert await cart_page.is_cart_empty() is True
        page.wait_for_selector.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_product_in_cart(self, page):
        page.locator = MagicMock(return_value=locator_with(
            count=2, all_text_contents=['Sauce Labs Backpack', 'Sauce Labs Onesie']
        ))

        assert await CartPage(page).is_product_in_cart('Sauce Labs Onesie') is True

    @pytest.mark.asyncio
    async def test_remove_waits_until_gone(self, page):
        await CartPage(page).remove_product_from_cart('Sauce Labs Backpack')

        page.wait_for_selector.assert_awaited_with(
            '[data-test="remove-sauce-labs-backpack"]', state='hidden', timeout=30000
        )


class TestCheckoutPage:
    """Test CheckoutPage"""

    @pytest.mark.asyncio
    async def test_continue_reaches_overview(self, page):
        async def submit(selector):
            page.url = 'https://www.saucedemo.com/checkout-step-two.html'

        page.click.side_effect = submit

        await CheckoutPage(page, timeout=1000).click_continue()

        page.click.assert_awaited_once_with('#continue')

    @pytest.mark.asyncio
    async def test_continue_settles_on_validation_error(self, page):
        page.is_visible.side_effect = lambda selector: selector == '[data-test="error"]'
        page.text_content.return_value = 'Error: First Name is required'
        checkout_page = CheckoutPage(page, timeout=1000)

        await checkout_page.click_continue()

        assert await checkout_page.get_error_message() == 'Error: First Name is required'

    @pytest.mark.asyncio
    async def test_complete_checkout(self, page):
        async def navigate(selector):
            if selector == '#continue':
                page.url = 'https://www.saucedemo.com/checkout-step-two.html'

        page.click.side_effect = navigate
        page.text_content.return_value = 'Thank you for your order!'
        checkout_page = CheckoutPage(page, timeout=1000)

        await checkout_page.complete_checkout('John', 'Doe', '12345')

        page.fill.assert_has_awaits([
            call('#first-name', 'John'),
            call('#last-name', 'Doe'),
            call('#postal-code', '12345'),
        ])
        assert page.click.await_args_list == [call('#continue'), call('#finish')]
        page.wait_for_selector.assert_awaited_with('.complete-header', state='visible', timeout=1000)
        assert await checkout_page.get_complete_header() == 'Thank you for your order!'
