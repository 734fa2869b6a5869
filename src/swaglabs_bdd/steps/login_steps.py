import logging

from ..data.test_data import get_test_data, get_user
from ..executor.step_definitions import given, when, then
from ..executor.world import ScenarioWorld
from ..pages.inventory_page import InventoryPage
from ..pages.login_page import LoginPage
from ..utils.assertions import assert_contains, assert_false, assert_not_contains, assert_true
from .support import wait_for_url_containing, wait_for_url_equal

logger = logging.getLogger(__name__)

# Expected error fragment per login outcome
LOGIN_RESULT_ERRORS = {
    'locked_out': 'locked out',
    'invalid_credentials': 'do not match',
}


@given('I am on the SauceDemo login page')
async def on_login_page(world: ScenarioWorld):
    login_page = world.page_object(LoginPage, fresh=True)
    await world.navigate()
    await login_page.wait_for_page_load()


@given('I am logged in as {string}')
async def logged_in_as(world: ScenarioWorld, user_type: str):
    """Log in with a user fixture (unknown types use standard_user)"""
    login_page = world.page_object(LoginPage, fresh=True)
    await world.navigate()
    await login_page.wait_for_page_load()

    user = get_user(user_type)
    logger.info(f"Logging in as {user['username']}")
    await login_page.login(user['username'], user['password'])

    inventory_page = world.page_object(InventoryPage, fresh=True)
    await inventory_page.wait_for_page_load()


@when('I enter username {string} and password {string}')
async def enter_credentials(world: ScenarioWorld, username: str, password: str):
    login_page = world.page_object(LoginPage)
    await login_page.enter_username(username)
    await login_page.enter_password(password)


@when('I click the login button')
async def click_login(world: ScenarioWorld):
    await world.page_object(LoginPage).click_login_button()


@when('I login with username {string} and password {string}')
async def login_with(world: ScenarioWorld, username: str, password: str):
    await world.page_object(LoginPage).login(username, password)


@when('I click the menu button')
async def click_menu(world: ScenarioWorld):
    await world.page_object(InventoryPage, fresh=True).open_menu()


@when('I click the logout button')
async def click_logout(world: ScenarioWorld):
    await world.page_object(InventoryPage, fresh=True).logout()


@when('I click the error dismiss button')
async def dismiss_error(world: ScenarioWorld):
    await world.page_object(LoginPage).close_error_message()


@then('I should be redirected to the inventory page')
async def redirected_to_inventory(world: ScenarioWorld):
    await wait_for_url_containing(world, '/inventory.html')
    assert_contains(world.current_url, '/inventory.html')


@then('I should see the products page title')
async def products_page_title(world: ScenarioWorld):
    inventory_page = world.page_object(InventoryPage, fresh=True)
    assert_true(
        await inventory_page.is_visible(inventory_page.locators['app_logo']),
        "Products page header is not visible"
    )


@then('I should see an error message {string}')
async def error_message_text(world: ScenarioWorld, expected_message: str):
    assert_contains(await world.page_object(LoginPage).get_error_message(), expected_message)


@then('I should remain on the login page')
async def remain_on_login_page(world: ScenarioWorld):
    assert_not_contains(world.current_url, '/inventory.html')
    assert_true(await world.page_object(LoginPage).is_on_login_page(), "Login form is not visible")


@then('I should see an error message')
async def error_message_visible(world: ScenarioWorld):
    assert_true(await world.page_object(LoginPage).is_error_message_visible(), "No error message shown")


@then('the error message should disappear')
async def error_message_gone(world: ScenarioWorld):
    login_page = world.page_object(LoginPage)
    await login_page.wait_for_element_hidden(
        login_page.locators['error_message'], timeout=get_test_data('timeouts.short')
    )
    assert_false(await login_page.is_error_message_visible(), "Error message is still visible")


@then('I should see the login result {string}')
async def login_result(world: ScenarioWorld, result: str):
    """success, locked_out or invalid_credentials"""
    if result == 'success':
        await wait_for_url_containing(world, '/inventory.html')
        assert_contains(world.current_url, '/inventory.html')
    elif result in LOGIN_RESULT_ERRORS:
        assert_contains(await world.page_object(LoginPage).get_error_message(), LOGIN_RESULT_ERRORS[result])
    else:
        raise ValueError(f"Unknown login result: {result}")


@then('I should be redirected back to the login page')
async def redirected_to_login(world: ScenarioWorld):
    await wait_for_url_equal(world, world.base_url)


@then('I should see the login form')
async def login_form_visible(world: ScenarioWorld):
    assert_true(await world.page_object(LoginPage, fresh=True).is_on_login_page(), "Login form is not visible")
