from playwright.async_api import expect

from ..executor.step_definitions import when, then, table_raw
from ..executor.world import ScenarioWorld
from ..pages.inventory_page import InventoryPage
from ..pages.selectors import add_to_cart_selector, remove_selector
from ..utils.assertions import assert_all, assert_contains, assert_equal, assert_greater, assert_matches, assert_true
from ..utils.helpers import parse_price
from .support import sort_code, wait_for_url_containing

PRICE_PATTERN = r'^\$\d+\.\d{2}$'


@then('I should see {string} products displayed')
async def products_displayed(world: ScenarioWorld, count: str):
    product_count = await world.page_object(InventoryPage).get_product_count()
    assert_equal(product_count, int(count), f"Expected {count} products, found {product_count}")


@then('all products should have names')
async def products_have_names(world: ScenarioWorld):
    names = await world.page_object(InventoryPage).get_all_product_names()
    assert_greater(len(names), 0, "No products listed")
    assert_all([name.strip() for name in names], f"Some products have no name: {names}")


@then('all products should have prices')
async def products_have_prices(world: ScenarioWorld):
    prices = await world.page_object(InventoryPage).get_all_product_prices()
    assert_greater(len(prices), 0, "No products listed")
    for price in prices:
        assert_matches(price.strip(), PRICE_PATTERN)


@then('all products should have descriptions')
async def products_have_descriptions(world: ScenarioWorld):
    descriptions = await world.page_object(InventoryPage).get_all_product_descriptions()
    assert_greater(len(descriptions), 0, "No products listed")
    assert_all([desc.strip() for desc in descriptions], "Some products have no description")


@when('I sort products by {string}')
async def sort_products(world: ScenarioWorld, sort_option: str):
    """Accepts the dropdown label, e.g. 'Price (low to high)'"""
    await world.page_object(InventoryPage).sort_products(sort_code(sort_option))


@then('products should be sorted alphabetically ascending')
async def sorted_name_ascending(world: ScenarioWorld):
    names = await world.page_object(InventoryPage).get_all_product_names()
    assert_equal(names, sorted(names), "Products are not sorted A to Z")


@then('products should be sorted alphabetically descending')
async def sorted_name_descending(world: ScenarioWorld):
    names = await world.page_object(InventoryPage).get_all_product_names()
    assert_equal(names, sorted(names, reverse=True), "Products are not sorted Z to A")


@then('products should be sorted by price ascending')
async def sorted_price_ascending(world: ScenarioWorld):
    prices = [parse_price(p) for p in await world.page_object(InventoryPage).get_all_product_prices()]
    assert_equal(prices, sorted(prices), "Products are not sorted by price, low to high")


@then('products should be sorted by price descending')
async def sorted_price_descending(world: ScenarioWorld):
    prices = [parse_price(p) for p in await world.page_object(InventoryPage).get_all_product_prices()]
    assert_equal(prices, sorted(prices, reverse=True), "Products are not sorted by price, high to low")


@then('product {string} should have price {string}')
async def product_price(world: ScenarioWorld, product_name: str, expected_price: str):
    assert_equal(await world.page_object(InventoryPage).get_product_price(product_name), expected_price)


@then('product {string} should be visible')
async def product_visible(world: ScenarioWorld, product_name: str):
    assert_contains(await world.page_object(InventoryPage).get_all_product_names(), product_name)


@then('product {string} should have an image')
async def product_has_image(world: ScenarioWorld, product_name: str):
    await expect(world.page_object(InventoryPage).product_image(product_name)).to_be_visible()


@then('all products should have {string} buttons')
async def all_products_have_buttons(world: ScenarioWorld, button_text: str):
    inventory_page = world.page_object(InventoryPage)
    product_count = await inventory_page.get_product_count()

    if button_text == 'Add to cart':
        selector = inventory_page.locators['add_to_cart_button']
    elif button_text == 'Remove':
        selector = inventory_page.locators['remove_button']
    else:
        raise ValueError(f"Unknown button: {button_text}")

    button_count = await inventory_page.get_count(selector)
    assert_equal(button_count, product_count, f"Expected {product_count} '{button_text}' buttons, found {button_count}")


@then('no products should have {string} buttons initially')
async def no_products_have_buttons(world: ScenarioWorld, button_text: str):
    inventory_page = world.page_object(InventoryPage)
    if button_text == 'Remove':
        assert_equal(await inventory_page.get_count(inventory_page.locators['remove_button']), 0)
    elif button_text == 'Add to cart':
        assert_equal(await inventory_page.get_count(inventory_page.locators['add_to_cart_button']), 0)
    else:
        raise ValueError(f"Unknown button: {button_text}")


@then('product {string} should have {string} button')
async def product_has_button(world: ScenarioWorld, product_name: str, button_text: str):
    if button_text == 'Remove':
        selector = remove_selector(product_name)
    elif button_text == 'Add to cart':
        selector = add_to_cart_selector(product_name)
    else:
        raise ValueError(f"Unknown button: {button_text}")

    visible = await world.page_object(InventoryPage).is_visible(selector)
    assert_true(visible, f"'{button_text}' button not visible for {product_name}")


@then('I should see menu options:')
async def menu_options(world: ScenarioWorld):
    inventory_page = world.page_object(InventoryPage)
    options = [cell for row in table_raw(world.current_step.table) for cell in row]
    for option in options:
        assert_true(await inventory_page.is_menu_item_visible(option), f"Menu option '{option}' is not visible")


@when('I click {string} in the menu')
async def click_menu_item(world: ScenarioWorld, menu_item: str):
    await world.page_object(InventoryPage).click_menu_item(menu_item)


@then('I should be navigated to Sauce Labs website')
async def navigated_to_sauce_labs(world: ScenarioWorld):
    await wait_for_url_containing(world, 'saucelabs.com')


@then('I should see the Swag Labs logo')
async def swag_labs_logo(world: ScenarioWorld):
    inventory_page = world.page_object(InventoryPage)
    assert_true(await inventory_page.is_visible(inventory_page.locators['app_logo']), "Logo is not visible")


@then('I should see the shopping cart icon')
async def shopping_cart_icon(world: ScenarioWorld):
    inventory_page = world.page_object(InventoryPage)
    assert_true(
        await inventory_page.is_visible(inventory_page.locators['shopping_cart_link']),
        "Shopping cart icon is not visible"
    )
