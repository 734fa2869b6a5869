"""
Generic browser steps that work on raw selectors. Reusable from any feature.
"""

import asyncio

from ..executor.step_definitions import step, when, then
from ..executor.world import ScenarioWorld
from ..utils.assertions import assert_contains, assert_equal, assert_false, assert_true


@step('I wait for {int} seconds')
async def wait_seconds(world: ScenarioWorld, seconds: int):
    """Pause the scenario"""
    await asyncio.sleep(seconds)


@when('I navigate to {string}')
async def navigate_to(world: ScenarioWorld, path: str):
    """Open a path relative to the base URL (or an absolute URL)"""
    await world.navigate(path)


@when('I click on element with selector {string}')
async def click_selector(world: ScenarioWorld, selector: str):
    await world.click_element(selector)


@when('I fill {string} with {string}')
async def fill_selector(world: ScenarioWorld, selector: str, text: str):
    await world.fill_input(selector, text)


@when('I press {string} key')
async def press_key(world: ScenarioWorld, key: str):
    await world.page.keyboard.press(key)


@when('I hover over element {string}')
async def hover_element(world: ScenarioWorld, selector: str):
    await world.page.hover(selector)


@when('I select {string} from dropdown {string}')
async def select_from_dropdown(world: ScenarioWorld, option: str, selector: str):
    await world.page.select_option(selector, option)


@when('I check checkbox {string}')
async def check_checkbox(world: ScenarioWorld, selector: str):
    await world.page.check(selector)


@when('I uncheck checkbox {string}')
async def uncheck_checkbox(world: ScenarioWorld, selector: str):
    await world.page.uncheck(selector)


@when('I upload file {string} to {string}')
async def upload_file(world: ScenarioWorld, file_path: str, selector: str):
    await world.page.set_input_files(selector, file_path)


@when('I switch to frame {string}')
async def switch_to_frame(world: ScenarioWorld, selector: str):
    """Later click, fill, visibility and text steps act inside this frame"""
    world.current_frame = world.page.frame_locator(selector)


@when('I switch to the main frame')
async def switch_to_main_frame(world: ScenarioWorld):
    world.current_frame = None


@then('I should see element {string}')
async def should_see_element(world: ScenarioWorld, selector: str):
    assert_true(await world.is_visible(selector), f"Element {selector} is not visible")


@then('I should not see element {string}')
async def should_not_see_element(world: ScenarioWorld, selector: str):
    assert_false(await world.is_visible(selector), f"Element {selector} should not be visible")


@then('element {string} should contain text {string}')
async def element_contains_text(world: ScenarioWorld, selector: str, expected_text: str):
    assert_contains(await world.get_text(selector), expected_text)


@then('element {string} should have attribute {string} with value {string}')
async def element_has_attribute(world: ScenarioWorld, selector: str, attribute: str, value: str):
    actual = await world.page.get_attribute(selector, attribute)
    assert_equal(actual, value, f"Attribute {attribute} of {selector}: expected {value!r}, got {actual!r}")


@then('the page title should be {string}')
async def page_title_should_be(world: ScenarioWorld, expected_title: str):
    assert_equal(await world.page.title(), expected_title)


@then('the URL should contain {string}')
async def url_should_contain(world: ScenarioWorld, url_part: str):
    assert_contains(world.current_url, url_part)


@step('I take a screenshot with name {string}')
async def take_named_screenshot(world: ScenarioWorld, name: str):
    await world.take_screenshot(name)


@then('element {string} should be enabled')
async def element_enabled(world: ScenarioWorld, selector: str):
    assert_true(await world.page.is_enabled(selector), f"Element {selector} is not enabled")


@then('element {string} should be disabled')
async def element_disabled(world: ScenarioWorld, selector: str):
    assert_true(await world.page.is_disabled(selector), f"Element {selector} is not disabled")


@then('the count of elements {string} should be {int}')
async def element_count(world: ScenarioWorld, selector: str, expected_count: int):
    count = await world.page.locator(selector).count()
    assert_equal(count, expected_count, f"Expected {expected_count} elements matching {selector}, found {count}")
