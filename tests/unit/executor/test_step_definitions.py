import re

import pytest
from behave.model import Table

from swaglabs_bdd.executor.step_definitions import (
    StepDefinitionRegistry,
    compile_expression,
    given,
    step,
    then,
    when,
    table_hashes,
    table_raw,
)


class TestCompileExpression:
    """Test Cucumber expression compilation"""

    def test_string_placeholder(self):
        pattern, converters = compile_expression('I add {string} to cart')

        assert pattern.match('I add "Sauce Labs Backpack" to cart').groups() == ('Sauce Labs Backpack',)
        assert converters == [str]

    def test_expression_is_anchored(self):
        pattern, _ = compile_expression('I remove {string} from cart')

        assert pattern.search('I remove "Sauce Labs Backpack" from cart') is not None
        assert pattern.search('I remove "Sauce Labs Backpack" from cart page') is None

    def test_literal_text_is_escaped(self):
        pattern, _ = compile_expression('I sort (quickly) by {word}')

        assert pattern.match('I sort (quickly) by price') is not None
        assert pattern.match('I sort quickly by price') is None

    def test_empty_string_matches(self):
        pattern, _ = compile_expression('I enter username {string} and password {string}')

        assert pattern.match('I enter username "" and password "secret_sauce"').groups() == ('', 'secret_sauce')

    def test_regex_passthrough(self):
        pattern, converters = compile_expression(r'^I have (\d+) items$')

        assert pattern.match('i have 3 items') is not None
        assert converters == []


class TestStepDefinitionRegistry:
    """Test StepDefinitionRegistry"""

    def test_register_step_definition(self):
        """Test registering step definitions"""
        registry = StepDefinitionRegistry()

        @registry.given('I have {int} items')
        def given_items(context, count):
            """Seed the item count"""
            context.items = count

        definitions = registry.list_definitions()
        assert len(definitions) == 1
        assert definitions[0]['keyword'] == 'given'
        assert definitions[0]['pattern'] == 'I have {int} items'
        assert definitions[0]['description'] == 'Seed the item count'
        assert definitions[0]['function'] == 'given_items'

    def test_typed_parameters(self):
        registry = StepDefinitionRegistry()

        @registry.then('the count of elements {string} should be {int}')
        def count(context, selector, expected):
            pass

        definition = registry.find_step_definition('then', 'the count of elements ".item" should be 6')
        assert definition.extract_params('the count of elements ".item" should be 6') == ['.item', 6]

    def test_and_resolves_to_any_keyword(self):
        registry = StepDefinitionRegistry()

        @registry.when('I click the login button')
        def click_login(context):
            pass

        assert registry.find_step_definition('and', 'I click the login button') is not None

    def test_keyword_agnostic_fallback(self):
        registry = StepDefinitionRegistry()

        @registry.when('I am on the inventory page')
        def on_inventory(context):
            pass

        definition = registry.find_step_definition('given', 'I am on the inventory page')
        assert definition is not None
        assert definition.function is on_inventory

    def test_own_keyword_preferred(self):
        registry = StepDefinitionRegistry()

        @registry.then('the page loads')
        def as_then(context):
            pass

        @registry.given('the page loads')
        def as_given(context):
            pass

        assert registry.find_step_definition('given', 'the page loads').function is as_given

    @pytest.mark.parametrize('keyword', ['given', 'when', 'then', 'and'])
    def test_step_decorator_matches_any_keyword(self, keyword):
        registry = StepDefinitionRegistry()

        @registry.step('I wait for {int} seconds')
        def wait(context, seconds):
            pass

        assert [d['keyword'] for d in registry.list_definitions()] == ['step']
        assert registry.find_step_definition(keyword, 'I wait for 2 seconds').function is wait

    def test_step_decorator_beats_other_keyword(self):
        registry = StepDefinitionRegistry()

        @registry.then('the page loads')
        def as_then(context):
            pass

        @registry.step('the page loads')
        def as_step(context):
            pass

        assert registry.find_step_definition('given', 'the page loads').function is as_step
        assert registry.find_step_definition('then', 'the page loads').function is as_then

    def test_no_match(self):
        registry = StepDefinitionRegistry()

        @registry.when('I click the login button')
        def click_login(context):
            pass

        assert registry.find_step_definition('when', 'I click the logout button') is None

    @pytest.mark.asyncio
    async def test_execute_sync_and_async(self):
        registry = StepDefinitionRegistry()
        seen = []

        @registry.when('I add {string}')
        async def add(context, name):
            seen.append(name)

        @registry.then('I have {int}')
        def count(context, n):
            return n

        await registry.find_step_definition('when', 'I add "a"').execute(None, 'I add "a"')
        result = await registry.find_step_definition('then', 'I have 2').execute(None, 'I have 2')

        assert seen == ['a']
        assert result == 2

    def test_register_from_module_keeps_source_order(self):
        import types

        module = types.ModuleType('fake_steps')

        @given('first step')
        def first(context):
            pass

        @when('second step')
        @then('second step again')
        def second(context):
            pass

        @step('third step')
        def third(context):
            pass

        module.first = first
        module.second = second
        module.third = third

        registry = StepDefinitionRegistry()
        registry.register_from_module(module)

        patterns = [d['pattern'] for d in registry.list_definitions()]
        assert patterns[0] == 'first step'
        assert set(patterns[1:3]) == {'second step', 'second step again'}
        assert registry.list_definitions()[3]['keyword'] == 'step'

    def test_clear(self):
        registry = StepDefinitionRegistry()
        registry.add_definition('given', 'anything', lambda context: None)

        registry.clear()

        assert registry.definitions == []

    def test_compiled_pattern_accepted(self):
        registry = StepDefinitionRegistry()
        registry.add_definition('then', re.compile(r'I see (\w+)'), lambda context, word: word)

        assert registry.find_step_definition('then', 'I see products') is not None


class TestTables:
    """Test data table helpers"""

    @pytest.fixture
    def table(self):
        table = Table(['firstName', 'lastName', 'postalCode'])
        table.add_row(['John', 'Doe', '12345'])
        return table

    def test_hashes(self, table):
        assert table_hashes(table) == [{'firstName': 'John', 'lastName': 'Doe', 'postalCode': '12345'}]

    def test_raw_includes_header(self, table):
        assert table_raw(table) == [['firstName', 'lastName', 'postalCode'], ['John', 'Doe', '12345']]

    def test_missing_table(self):
        assert table_hashes(None) == []
        assert table_raw(None) == []
