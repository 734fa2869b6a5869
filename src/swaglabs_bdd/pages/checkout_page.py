from typing import List

from .base_page import BasePage


class CheckoutPage(BasePage):
    """
    Checkout flow: step one (your information), step two (overview) and
    the order-complete screen.
    """

    locators = {
        # Step 1 - Your Information
        'title': '.title',
        'first_name_input': '#first-name',
        'last_name_input': '#last-name',
        'postal_code_input': '#postal-code',
        'continue_button': '#continue',
        'cancel_button': '#cancel',
        'error_message': '[data-test="error"]',
        'error_button': '.error-button',

        # Step 2 - Overview
        'summary_subtotal': '.summary_subtotal_label',
        'summary_tax': '.summary_tax_label',
        'summary_total': '.summary_total_label',
        'finish_button': '#finish',
        'cart_item': '.cart_item',
        'inventory_item_name': '.inventory_item_name',
        'inventory_item_price': '.inventory_item_price',
        'cart_quantity': '.cart_quantity',
        'payment_info': '.summary_value_label',

        # Complete
        'complete_header': '.complete-header',
        'complete_text': '.complete-text',
        'back_home_button': '#back-to-products',
    }

    async def wait_for_page_load(self):
        await super().wait_for_page_load()
        await self.wait_for_element(self.locators['title'])

    async def fill_checkout_information(self, first_name: str, last_name: str, postal_code: str):
        await self.enter_first_name(first_name)
        await self.enter_last_name(last_name)
        await self.enter_postal_code(postal_code)

    async def enter_first_name(self, first_name: str):
        await self.fill(self.locators['first_name_input'], first_name)

    async def enter_last_name(self, last_name: str):
        await self.fill(self.locators['last_name_input'], last_name)

    async def enter_postal_code(self, postal_code: str):
        await self.fill(self.locators['postal_code_input'], postal_code)

    async def click_continue(self):
        """Submit step one; settles on the overview or on a validation error"""
        await self.click(self.locators['continue_button'])

        async def settled() -> bool:
            if 'checkout-step-two' in self.page.url:
                return True
            return await self.is_visible(self.locators['error_message'])

        await self.wait_until(settled, "checkout overview or validation error")

    async def click_cancel(self):
        await self.click(self.locators['cancel_button'])
        await self.wait_for_page_load()

    async def get_error_message(self) -> str:
        return await self.get_text_or_default(self.locators['error_message'])

    async def is_error_message_visible(self) -> bool:
        return await self.is_visible(self.locators['error_message'])

    async def get_subtotal(self) -> str:
        return await self.get_text(self.locators['summary_subtotal'])

    async def get_tax(self) -> str:
        return await self.get_text(self.locators['summary_tax'])

    async def get_total(self) -> str:
        return await self.get_text(self.locators['summary_total'])

    async def get_overview_product_names(self) -> List[str]:
        return await self.get_all_texts(self.locators['inventory_item_name'])

    async def get_overview_product_count(self) -> int:
        return await self.get_count(self.locators['cart_item'])

    async def click_finish(self):
        await self.click(self.locators['finish_button'])
        await self.wait_for_element(self.locators['complete_header'])

    async def get_complete_header(self) -> str:
        return await self.get_text(self.locators['complete_header'])

    async def get_complete_text(self) -> str:
        return await self.get_text(self.locators['complete_text'])

    async def is_order_complete(self) -> bool:
        return await self.is_visible(self.locators['complete_header'])

    async def click_back_home(self):
        await self.click(self.locators['back_home_button'])

    async def get_page_title(self) -> str:
        return await self.get_text(self.locators['title'])

    async def complete_checkout(self, first_name: str, last_name: str, postal_code: str):
        await self.fill_checkout_information(first_name, last_name, postal_code)
        await self.click_continue()
        await self.click_finish()
