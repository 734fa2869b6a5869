from typing import List, Optional

from playwright.async_api import Locator

from .base_page import BasePage
from .selectors import add_to_cart_selector, remove_selector


class InventoryPage(BasePage):
    """
    Products page.
    URL: https://www.saucedemo.com/inventory.html
    """

    locators = {
        # Header
        'app_logo': '.app_logo',
        'shopping_cart_badge': '.shopping_cart_badge',
        'shopping_cart_link': '.shopping_cart_link',
        'burger_menu_button': '#react-burger-menu-btn',

        # Products
        'inventory_container': '.inventory_container',
        'inventory_list': '.inventory_list',
        'inventory_item': '.inventory_item',
        'inventory_item_name': '.inventory_item_name',
        'inventory_item_desc': '.inventory_item_desc',
        'inventory_item_price': '.inventory_item_price',
        'add_to_cart_button': '[data-test^="add-to-cart"]',
        'remove_button': '[data-test^="remove"]',

        # Sorting
        'product_sort_container': '.product_sort_container',

        # Menu
        'logout_link': '#logout_sidebar_link',
        'all_items_link': '#inventory_sidebar_link',
        'about_link': '#about_sidebar_link',
        'reset_link': '#reset_sidebar_link',
        'close_menu_button': '#react-burger-cross-btn',
    }

    async def wait_for_page_load(self):
        await super().wait_for_page_load()
        await self.wait_for_element(self.locators['inventory_container'])

    async def get_all_product_names(self) -> List[str]:
        return await self.get_all_texts(self.locators['inventory_item_name'])

    async def get_all_product_prices(self) -> List[str]:
        return await self.get_all_texts(self.locators['inventory_item_price'])

    async def get_all_product_descriptions(self) -> List[str]:
        return await self.get_all_texts(self.locators['inventory_item_desc'])

    async def get_product_count(self) -> int:
        return await self.get_count(self.locators['inventory_item'])

    async def add_product_to_cart(self, product_name: str):
        await self.click(add_to_cart_selector(product_name))
        await self.wait_for_element(remove_selector(product_name))

    async def remove_product_from_cart(self, product_name: str):
        await self.click(remove_selector(product_name))
        await self.wait_for_element(add_to_cart_selector(product_name))

    async def get_cart_item_count(self) -> int:
        """Badge number, 0 when the badge is absent"""
        lookup = await self.lookup_visible(self.locators['shopping_cart_badge'])
        if not lookup.found:
            return 0
        text = await self.get_text_or_default(self.locators['shopping_cart_badge'])
        try:
            return int(text.strip())
        except ValueError:
            return 0

    async def is_cart_badge_visible(self) -> bool:
        return await self.is_visible(self.locators['shopping_cart_badge'])

    async def click_shopping_cart(self):
        await self.click(self.locators['shopping_cart_link'])

    async def sort_products(self, sort_option: str):
        """Sort by option code (az, za, lohi, hilo)"""
        select = self.locators['product_sort_container']
        await self.select_option(select, sort_option)

        async def applied() -> bool:
            return await self.page.input_value(select) == sort_option

        await self.wait_until(applied, f"sort option '{sort_option}' applied")

    async def open_menu(self):
        await self.click(self.locators['burger_menu_button'])
        await self.wait_for_element(self.locators['logout_link'])

    async def close_menu(self):
        await self.click(self.locators['close_menu_button'])
        await self.wait_for_element_hidden(self.locators['logout_link'])

    async def logout(self):
        await self.open_menu()
        await self.click(self.locators['logout_link'])

    async def reset_app_state(self):
        await self.open_menu()
        await self.click(self.locators['reset_link'])
        await self.close_menu()

    async def is_menu_item_visible(self, item_text: str) -> bool:
        return await self.is_visible(f"text={item_text}")

    async def click_menu_item(self, item_text: str):
        await self.click(f"text={item_text}")

    async def get_product_price(self, product_name: str) -> str:
        item = await self._find_item(product_name)
        if item is None:
            return ''
        return await item.locator(self.locators['inventory_item_price']).text_content() or ''

    async def is_product_in_cart(self, product_name: str) -> bool:
        return await self.is_visible(remove_selector(product_name))

    async def has_add_to_cart_button(self, product_name: str) -> bool:
        return await self.is_visible(add_to_cart_selector(product_name))

    async def click_product_name(self, product_name: str):
        item = await self._find_item(product_name)
        if item is not None:
            await item.locator(self.locators['inventory_item_name']).click()

    def product_image(self, product_name: str) -> Locator:
        item = self.page.locator(
            self.locators['inventory_item'],
            has=self.page.locator(self.locators['inventory_item_name'], has_text=product_name)
        )
        return item.locator('img')

    async def _find_item(self, product_name: str) -> Optional[Locator]:
        for item in await self.page.locator(self.locators['inventory_item']).all():
            name = await item.locator(self.locators['inventory_item_name']).text_content()
            if name == product_name:
                return item
        return None
