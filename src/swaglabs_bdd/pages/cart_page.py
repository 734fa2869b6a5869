from typing import List

from .base_page import BasePage
from .selectors import remove_selector


class CartPage(BasePage):
    """
    Cart page.
    URL: https://www.saucedemo.com/cart.html
    """

    locators = {
        'title': '.title',
        'cart_list': '.cart_list',
        'cart_item': '.cart_item',
        'cart_quantity': '.cart_quantity',

        'inventory_item_name': '.inventory_item_name',
        'inventory_item_desc': '.inventory_item_desc',
        'inventory_item_price': '.inventory_item_price',
        'remove_button': '[data-test^="remove"]',

        'continue_shopping_button': '#continue-shopping',
        'checkout_button': '#checkout',

        'shopping_cart_badge': '.shopping_cart_badge',
    }

    async def wait_for_page_load(self):
        await super().wait_for_page_load()
        await self.wait_for_element(self.locators['title'])

    async def get_cart_item_count(self) -> int:
        return await self.get_count(self.locators['cart_item'])

    async def get_cart_product_names(self) -> List[str]:
        if await self.get_cart_item_count() == 0:
            return []
        return await self.get_all_texts(self.locators['inventory_item_name'])

    async def get_cart_product_prices(self) -> List[str]:
        if await self.get_cart_item_count() == 0:
            return []
        return await self.get_all_texts(self.locators['inventory_item_price'])

    async def remove_product_from_cart(self, product_name: str):
        selector = remove_selector(product_name)
        await self.click(selector)
        await self.wait_for_element_hidden(selector)

    async def is_product_in_cart(self, product_name: str) -> bool:
        return product_name in await self.get_cart_product_names()

    async def click_continue_shopping(self):
        await self.click(self.locators['continue_shopping_button'])

    async def click_checkout(self):
        await self.click(self.locators['checkout_button'])

    async def is_cart_empty(self) -> bool:
        return await self.get_cart_item_count() == 0

    async def get_cart_badge_count(self) -> int:
        lookup = await self.lookup_visible(self.locators['shopping_cart_badge'])
        if not lookup.found:
            return 0
        text = await self.get_text_or_default(self.locators['shopping_cart_badge'])
        try:
            return int(text.strip())
        except ValueError:
            return 0

    async def get_page_title(self) -> str:
        return await self.get_text(self.locators['title'])

    async def remove_all_products(self):
        for product_name in await self.get_cart_product_names():
            await self.remove_product_from_cart(product_name)
