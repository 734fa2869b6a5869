from .base_page import BasePage


class LoginPage(BasePage):
    """
    Login screen of the store.
    URL: https://www.saucedemo.com/
    """

    locators = {
        'username_input': '#user-name',
        'password_input': '#password',
        'login_button': '#login-button',
        'error_message': '[data-test="error"]',
        'error_button': '.error-button',
        'login_logo': '.login_logo',
        'login_credentials': '#login_credentials',
        'login_password': '.login_password',
    }

    async def wait_for_page_load(self):
        await super().wait_for_page_load()
        await self.wait_for_element(self.locators['login_logo'])
        await self.wait_for_element(self.locators['username_input'])

    async def enter_username(self, username: str):
        await self.fill(self.locators['username_input'], username)

    async def enter_password(self, password: str):
        await self.fill(self.locators['password_input'], password)

    async def click_login_button(self):
        """Submit the form and wait until the inventory opens or an error shows"""
        await self.click(self.locators['login_button'])

        async def settled() -> bool:
            if '/inventory.html' in self.page.url:
                return True
            return await self.is_visible(self.locators['error_message'])

        await self.wait_until(settled, "inventory page or login error")

    async def get_error_message(self) -> str:
        return await self.get_text_or_default(self.locators['error_message'])

    async def is_error_message_visible(self) -> bool:
        return await self.is_visible(self.locators['error_message'])

    async def close_error_message(self):
        if await self.is_visible(self.locators['error_button']):
            await self.click(self.locators['error_button'])

    async def get_available_usernames(self) -> str:
        return await self.get_text(self.locators['login_credentials'])

    async def get_password_info(self) -> str:
        return await self.get_text(self.locators['login_password'])

    async def login(self, username: str, password: str):
        await self.enter_username(username)
        await self.enter_password(password)
        await self.click_login_button()

    async def is_login_button_enabled(self) -> bool:
        return await self.is_enabled(self.locators['login_button'])

    async def clear_username(self):
        await self.fill(self.locators['username_input'], '')

    async def clear_password(self):
        await self.fill(self.locators['password_input'], '')

    async def clear_form(self):
        await self.clear_username()
        await self.clear_password()

    async def is_on_login_page(self) -> bool:
        return await self.is_visible(self.locators['login_logo'])
