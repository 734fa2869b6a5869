from ..executor.step_definitions import when, then, table_hashes
from ..executor.world import ScenarioWorld
from ..pages.cart_page import CartPage
from ..pages.checkout_page import CheckoutPage
from ..pages.inventory_page import InventoryPage
from ..utils.assertions import assert_contains, assert_equal, assert_false, assert_true
from .support import wait_for_url_containing


@when('I am on the inventory page')
async def on_inventory_page(world: ScenarioWorld):
    await world.page_object(InventoryPage, fresh=True).wait_for_page_load()


@when('I add {string} to cart')
async def add_to_cart(world: ScenarioWorld, product_name: str):
    await world.page_object(InventoryPage).add_product_to_cart(product_name)


@when('I remove {string} from cart')
async def remove_from_cart(world: ScenarioWorld, product_name: str):
    await world.page_object(InventoryPage).remove_product_from_cart(product_name)


@when('I navigate to the cart page')
async def open_cart(world: ScenarioWorld):
    await world.page_object(InventoryPage).click_shopping_cart()
    await world.page_object(CartPage, fresh=True).wait_for_page_load()


@when('I remove {string} from the cart page')
async def remove_on_cart_page(world: ScenarioWorld, product_name: str):
    await world.page_object(CartPage).remove_product_from_cart(product_name)


@when('I click checkout')
async def click_checkout(world: ScenarioWorld):
    await world.page_object(CartPage).click_checkout()
    await world.page_object(CheckoutPage, fresh=True).wait_for_page_load()


@when('I enter checkout information:')
async def enter_checkout_information(world: ScenarioWorld):
    """
    Fill step one from a data table:

        | firstName | lastName | postalCode |
        | John      | Doe      | 12345      |
    """
    rows = table_hashes(world.current_step.table)
    if not rows:
        raise ValueError("Checkout information table is empty")
    data = rows[0]
    await world.page_object(CheckoutPage).fill_checkout_information(
        data['firstName'], data['lastName'], data['postalCode']
    )


@when('I complete checkout with {string} {string} {string}')
async def complete_checkout(world: ScenarioWorld, first_name: str, last_name: str, postal_code: str):
    await world.page_object(CheckoutPage).complete_checkout(first_name, last_name, postal_code)


@when('I enter first name {string} and postal code {string}')
async def enter_first_name_and_postal_code(world: ScenarioWorld, first_name: str, postal_code: str):
    checkout_page = world.page_object(CheckoutPage)
    await checkout_page.enter_first_name(first_name)
    await checkout_page.enter_postal_code(postal_code)


@when('I enter last name {string} and postal code {string}')
async def enter_last_name_and_postal_code(world: ScenarioWorld, last_name: str, postal_code: str):
    checkout_page = world.page_object(CheckoutPage)
    await checkout_page.enter_last_name(last_name)
    await checkout_page.enter_postal_code(postal_code)


@when('I enter first name {string} and last name {string}')
async def enter_first_and_last_name(world: ScenarioWorld, first_name: str, last_name: str):
    checkout_page = world.page_object(CheckoutPage)
    await checkout_page.enter_first_name(first_name)
    await checkout_page.enter_last_name(last_name)


@when('I click continue on checkout')
async def continue_checkout(world: ScenarioWorld):
    await world.page_object(CheckoutPage).click_continue()


@when('I click finish on checkout')
async def finish_checkout(world: ScenarioWorld):
    await world.page_object(CheckoutPage).click_finish()


@when('I click cancel on checkout')
async def cancel_checkout(world: ScenarioWorld):
    await world.page_object(CheckoutPage).click_cancel()


@when('I click continue shopping')
async def continue_shopping(world: ScenarioWorld):
    await world.page_object(CartPage).click_continue_shopping()


@when('I click back to products')
async def back_to_products(world: ScenarioWorld):
    await world.page_object(CheckoutPage).click_back_home()


@when('I reset the app state')
async def reset_app_state(world: ScenarioWorld):
    await world.page_object(InventoryPage).reset_app_state()


@then('the cart badge should show {string}')
async def cart_badge_shows(world: ScenarioWorld, count: str):
    cart_count = await world.page_object(InventoryPage).get_cart_item_count()
    assert_equal(cart_count, int(count), f"Cart badge shows {cart_count}, expected {count}")


@then('the cart badge should not be visible')
async def cart_badge_hidden(world: ScenarioWorld):
    assert_false(await world.page_object(InventoryPage).is_cart_badge_visible(), "Cart badge is visible")


@then('the cart should contain {string}')
async def cart_contains(world: ScenarioWorld, product_name_or_count: str):
    """A number checks the item count, anything else a product name"""
    cart_page = world.page_object(CartPage)
    if product_name_or_count.strip().isdigit():
        assert_equal(await cart_page.get_cart_item_count(), int(product_name_or_count))
    else:
        assert_true(
            await cart_page.is_product_in_cart(product_name_or_count),
            f"'{product_name_or_count}' is not in the cart"
        )


@then('the cart should contain {string} items')
async def cart_contains_items(world: ScenarioWorld, count: str):
    item_count = await world.page_object(CartPage).get_cart_item_count()
    assert_equal(item_count, int(count), f"Cart holds {item_count} items, expected {count}")


@then('the cart should be empty')
async def cart_empty(world: ScenarioWorld):
    assert_true(await world.page_object(CartPage).is_cart_empty(), "Cart is not empty")


@then('I should see order complete message')
async def order_complete(world: ScenarioWorld):
    assert_true(await world.page_object(CheckoutPage).is_order_complete(), "Order is not complete")


@then('I should see {string} header')
async def complete_header(world: ScenarioWorld, header_text: str):
    assert_contains(await world.page_object(CheckoutPage).get_complete_header(), header_text)


@then('I should see checkout error {string}')
async def checkout_error(world: ScenarioWorld, error_message: str):
    assert_contains(await world.page_object(CheckoutPage).get_error_message(), error_message)


@then('I should be on the inventory page')
async def on_inventory_url(world: ScenarioWorld):
    await wait_for_url_containing(world, '/inventory.html')


@then('I should be on the cart page')
async def on_cart_url(world: ScenarioWorld):
    await wait_for_url_containing(world, '/cart.html')
