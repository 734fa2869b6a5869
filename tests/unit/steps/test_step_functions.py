from unittest.mock import AsyncMock, MagicMock, call

import pytest
from behave.model import Table

from swaglabs_bdd.pages import CartPage, CheckoutPage, InventoryPage, LoginPage
from swaglabs_bdd.steps import inventory_steps, login_steps, shopping_steps


def make_page_object(page_class):
    page_object = MagicMock(spec=page_class)
    page_object.locators = page_class(AsyncMock()).locators
    return page_object


@pytest.fixture
def pages():
    return {cls: make_page_object(cls) for cls in (LoginPage, InventoryPage, CartPage, CheckoutPage)}


@pytest.fixture
def world(pages):
    """World stand-in handing out mocked page objects"""
    world = MagicMock()
    world.page_object.side_effect = lambda page_class, fresh=False: pages[page_class]
    world.navigate = AsyncMock()
    world.base_url = 'https://www.saucedemo.com'
    world.current_url = 'https://www.saucedemo.com/inventory.html'
    return world


class TestLoginSteps:
    """Test login step functions"""

    @pytest.mark.asyncio
    async def test_logged_in_as_uses_user_fixture(self, world, pages):
        await login_steps.logged_in_as(world, 'problem_user')

        world.navigate.assert_awaited_once_with()
        pages[LoginPage].login.assert_awaited_once_with('problem_user', 'secret_sauce')
        pages[InventoryPage].wait_for_page_load.assert_awaited_once()
        assert call(InventoryPage, fresh=True) in world.page_object.call_args_list

    @pytest.mark.asyncio
    async def test_logged_in_as_unknown_user_falls_back(self, world, pages):
        await login_steps.logged_in_as(world, 'nobody')

        pages[LoginPage].login.assert_awaited_once_with('standard_user', 'secret_sauce')

    @pytest.mark.asyncio
    async def test_enter_credentials(self, world, pages):
        await login_steps.enter_credentials(world, 'standard_user', '')

        pages[LoginPage].enter_username.assert_awaited_once_with('standard_user')
        pages[LoginPage].enter_password.assert_awaited_once_with('')

    @pytest.mark.asyncio
    async def test_login_result_success(self, world):
        await login_steps.login_result(world, 'success')

    @pytest.mark.asyncio
    async def test_login_result_locked_out(self, world, pages):
        pages[LoginPage].get_error_message.return_value = 'Epic sadface: Sorry, this user has been locked out.'

        await login_steps.login_result(world, 'locked_out')

    @pytest.mark.asyncio
    async def test_login_result_wrong_error(self, world, pages):
        pages[LoginPage].get_error_message.return_value = 'Epic sadface: Username is required'

        with pytest.raises(AssertionError):
            await login_steps.login_result(world, 'invalid_credentials')

    @pytest.mark.asyncio
    async def test_login_result_unknown(self, world):
        with pytest.raises(ValueError, match='Unknown login result: maybe'):
            await login_steps.login_result(world, 'maybe')

    @pytest.mark.asyncio
    async def test_remain_on_login_page_fails_on_inventory(self, world, pages):
        pages[LoginPage].is_on_login_page.return_value = True

        with pytest.raises(AssertionError):
            await login_steps.remain_on_login_page(world)

    @pytest.mark.asyncio
    async def test_redirected_back_to_login_ignores_trailing_slash(self, world):
        world.current_url = 'https://www.saucedemo.com/'

        await login_steps.redirected_to_login(world)


class TestInventorySteps:
    """Test inventory step functions"""

    @pytest.mark.asyncio
    async def test_sort_uses_option_code(self, world, pages):
        await inventory_steps.sort_products(world, 'Price (high to low)')

        pages[InventoryPage].sort_products.assert_awaited_once_with('hilo')

    @pytest.mark.asyncio
    async def test_price_ascending(self, world, pages):
        pages[InventoryPage].get_all_product_prices.return_value = ['$7.99', '$9.99', '$15.99', '$49.99']

        await inventory_steps.sorted_price_ascending(world)

    @pytest.mark.asyncio
    async def test_price_order_is_numeric(self, world, pages):
        # '$9.99' < '$15.99' numerically but not as text
        pages[InventoryPage].get_all_product_prices.return_value = ['$15.99', '$9.99']

        with pytest.raises(AssertionError):
            await inventory_steps.sorted_price_ascending(world)

    @pytest.mark.asyncio
    async def test_name_descending(self, world, pages):
        pages[InventoryPage].get_all_product_names.return_value = ['Test.allTheThings() T-Shirt (Red)', 'Sauce Labs Onesie']

        await inventory_steps.sorted_name_descending(world)

    @pytest.mark.asyncio
    async def test_prices_must_look_like_dollars(self, world, pages):
        pages[InventoryPage].get_all_product_prices.return_value = ['$29.99', '29.99']

        with pytest.raises(AssertionError):
            await inventory_steps.products_have_prices(world)

    @pytest.mark.asyncio
    async def test_products_displayed(self, world, pages):
        pages[InventoryPage].get_product_count.return_value = 6

        await inventory_steps.products_displayed(world, '6')
        with pytest.raises(AssertionError, match='Expected 5 products, found 6'):
            await inventory_steps.products_displayed(world, '5')

    @pytest.mark.asyncio
    async def test_all_products_have_add_buttons(self, world, pages):
        inventory_page = pages[InventoryPage]
        inventory_page.get_product_count.return_value = 6
        inventory_page.get_count.return_value = 6

        await inventory_steps.all_products_have_buttons(world, 'Add to cart')

        inventory_page.get_count.assert_awaited_once_with(inventory_page.locators['add_to_cart_button'])

    @pytest.mark.asyncio
    async def test_unknown_button(self, world):
        with pytest.raises(ValueError, match='Unknown button'):
            await inventory_steps.all_products_have_buttons(world, 'Buy now')

    @pytest.mark.asyncio
    async def test_product_has_remove_button(self, world, pages):
        pages[InventoryPage].is_visible.return_value = True

        await inventory_steps.product_has_button(world, 'Sauce Labs Bike Light', 'Remove')

        pages[InventoryPage].is_visible.assert_awaited_once_with('[data-test="remove-sauce-labs-bike-light"]')

    @pytest.mark.asyncio
    async def test_menu_options_from_table(self, world, pages):
        world.current_step.table = Table(['All Items'], rows=[['About'], ['Logout']])
        pages[InventoryPage].is_menu_item_visible.return_value = True

        await inventory_steps.menu_options(world)

        assert pages[InventoryPage].is_menu_item_visible.await_args_list == [
            call('All Items'), call('About'), call('Logout')
        ]

    @pytest.mark.asyncio
    async def test_missing_menu_option(self, world, pages):
        world.current_step.table = Table(['Reset App State'])
        pages[InventoryPage].is_menu_item_visible.return_value = False

        with pytest.raises(AssertionError, match="Menu option 'Reset App State' is not visible"):
            await inventory_steps.menu_options(world)


class TestShoppingSteps:
    """Test cart and checkout step functions"""

    @pytest.mark.asyncio
    async def test_add_to_cart(self, world, pages):
        await shopping_steps.add_to_cart(world, 'Sauce Labs Backpack')

        pages[InventoryPage].add_product_to_cart.assert_awaited_once_with('Sauce Labs Backpack')

    @pytest.mark.asyncio
    async def test_badge_count(self, world, pages):
        pages[InventoryPage].get_cart_item_count.return_value = 2

        with pytest.raises(AssertionError, match='Cart badge shows 2, expected 3'):
            await shopping_steps.cart_badge_shows(world, '3')

    @pytest.mark.asyncio
    async def test_cart_contains_count(self, world, pages):
        pages[CartPage].get_cart_item_count.return_value = 1

        await shopping_steps.cart_contains(world, '1')

        pages[CartPage].is_product_in_cart.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cart_contains_name(self, world, pages):
        pages[CartPage].is_product_in_cart.return_value = False

        with pytest.raises(AssertionError, match="'Sauce Labs Onesie' is not in the cart"):
            await shopping_steps.cart_contains(world, 'Sauce Labs Onesie')

    @pytest.mark.asyncio
    async def test_checkout_information_table(self, world, pages):
        world.current_step.table = Table(
            ['firstName', 'lastName', 'postalCode'], rows=[['John', 'Doe', '12345']]
        )

        await shopping_steps.enter_checkout_information(world)

        pages[CheckoutPage].fill_checkout_information.assert_awaited_once_with('John', 'Doe', '12345')

    @pytest.mark.asyncio
    async def test_checkout_information_empty_table(self, world):
        world.current_step.table = Table(['firstName', 'lastName', 'postalCode'])

        with pytest.raises(ValueError, match='empty'):
            await shopping_steps.enter_checkout_information(world)

    @pytest.mark.asyncio
    async def test_open_cart_rebuilds_cart_page(self, world, pages):
        await shopping_steps.open_cart(world)

        pages[InventoryPage].click_shopping_cart.assert_awaited_once()
        pages[CartPage].wait_for_page_load.assert_awaited_once()
        assert call(CartPage, fresh=True) in world.page_object.call_args_list

    @pytest.mark.asyncio
    async def test_cart_url(self, world):
        world.current_url = 'https://www.saucedemo.com/cart.html'

        await shopping_steps.on_cart_url(world)
