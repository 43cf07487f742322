"""Page object for the site's main navigation header."""
from typing import Optional

from playwright.async_api import Locator, Page
from playwright.async_api import Error as PlaywrightError

from ..models import (
    EmployersSubmenuVisibility,
    FormsPublicationsSubmenuVisibility,
    MainMenuVisibility,
    MembersSubmenuVisibility,
    NavigationHeaderInfo,
    NavigationHeaderVisibility,
    RetireesSubmenuVisibility,
    SubmenuVisibility,
    ToolbarVisibility,
)
from .base_page import BasePage

# Pause before probing a submenu, in ms.
SUBMENU_SETTLE_MS = 500


class NavigationHeaderPage(BasePage):
    """Page object for the navigation header.

    Covers branding, menu toggle, member login, the main menu with its four
    submenus, and the toolbar (translate and search). Probes never raise on
    timeout; they report False instead.

    Single-element locators are pinned to their first match, so a second
    logo or search icon elsewhere on the page cannot trip strict mode.
    """

    # Centralized selectors
    SELECTORS = {
        # Containers
        "header_container": "header.header-clean",
        "branding_section": ".branding",
        "button_with_menu_section": ".button-with-menu",
        # Branding
        "logo": ".logo a",
        "logo_image": '.logo img[alt="Colorado Song Library"]',
        "menu_toggle": ".menu-toggle",
        "menu_icon": ".menu-icon",
        # Account
        "member_login_button": "a.btn.btn-primary.btn-lg.btn-contrast",
        # Main navigation
        "navigation_menu": ".primary-navigation.sl-menu",
        "menu_item": 'li[role="none"] > a[role="menuitem"]',
        "menu_entry": 'li[role="none"]',
        "submenu_item": '#{submenu_id} a[role="menuitem"]',
        # Toolbar
        "toolbar": ".toolbar",
        "translate_button": ".translate.translate-icon",
        "search_section": ".search",
        "search_input": "#site-search",
        "search_button": '.search button[role="button"]',
        "search_icon": ".search-icon",
        "close_icon": ".close-icon",
    }

    MEMBER_LOGIN_TEXT = "Member Login/Registration"

    # Main menu entries by visible text
    MENU_ITEMS = {
        "members": "Members",
        "retirees": "Retirees",
        "employers": "Employers",
        "forms_publications": "Forms & Publications",
        "contact_us": "Contact Us",
    }

    # Submenu container id -> {field: visible text}
    SUBMENUS = {
        "sl-menu__submenu_1": {
            "my_account": "My Account",
            "new_to": "New to",
            "mid_career": "Mid-Career",
            "ready_to_retire": "Ready to Retire",
            "benefit_basics": "Benefit Basics",
            "life_job_changes": "Life and Job Changes",
            "plan_401k": "401(k)/457 Plan",
            "webinars": "Webinars",
        },
        "sl-menu__submenu_6": {
            "benefit_basics_retiree": "Benefit Basics for Retirees",
            "health_benefits": "Health Benefits",
            "life_job_changes_retiree": "Life and Job Changes",
            "taxes_on_benefits": "Taxes on Benefits",
            "plan_401k_retiree": "401(k)/457",
        },
        "sl-menu__submenu_8": {
            "training": "Training",
            "employer_toolkit": "Employer Toolkit",
            "resources": "Resources",
            "affiliating": "Affiliating with",
        },
        "sl-menu__submenu_12": {
            "member_retiree_forms": "Member and Retiree Forms",
            "booklets_fact_sheets": "Booklets and Fact Sheets",
            "financial_reports": "Financial Reports and Studies",
        },
    }

    def __init__(self, page: Page, **kwargs) -> None:
        super().__init__(page, **kwargs)
        sel = self.SELECTORS

        self.header_container = page.locator(sel["header_container"]).first
        self.branding_section = page.locator(sel["branding_section"]).first
        self.button_with_menu_section = page.locator(sel["button_with_menu_section"]).first

        self.logo = page.locator(sel["logo"]).first
        self.logo_image = page.locator(sel["logo_image"]).first
        self.menu_toggle = page.locator(sel["menu_toggle"]).first
        self.menu_icon = page.locator(sel["menu_icon"]).first

        self.member_login_button = (
            page.locator(sel["member_login_button"])
            .filter(has_text=self.MEMBER_LOGIN_TEXT)
            .first
        )

        self.navigation_menu = page.locator(sel["navigation_menu"]).first
        self.menu_items: dict[str, Locator] = {
            key: page.locator(sel["menu_item"]).filter(has_text=text).first
            for key, text in self.MENU_ITEMS.items()
        }
        self.submenu_items: dict[str, dict[str, Locator]] = {
            submenu_id: {
                key: page.locator(sel["submenu_item"].format(submenu_id=submenu_id))
                .filter(has_text=text)
                .first
                for key, text in items.items()
            }
            for submenu_id, items in self.SUBMENUS.items()
        }

        self.toolbar = page.locator(sel["toolbar"]).first
        self.translate_button = page.locator(sel["translate_button"]).first
        self.search_section = page.locator(sel["search_section"]).first
        self.search_input = page.locator(sel["search_input"]).first
        self.search_button = page.locator(sel["search_button"]).first
        self.search_icon = page.locator(sel["search_icon"]).first
        self.close_icon = page.locator(sel["close_icon"]).first

    @property
    def url_pattern(self) -> str:
        """Regex pattern to validate current URL."""
        return r"https?://.+"

    async def wait_for_navigation_header_load(self) -> None:
        """Wait for the header container and logo.

        A slow header is logged and tolerated so the probes can report on
        whatever did render.
        """
        try:
            await self.header_container.wait_for(state="visible", timeout=10000)
            await self.logo.wait_for(state="visible", timeout=5000)
            self.logger.info("navigation_header_loaded")
        except PlaywrightError as e:
            self.logger.warning("navigation_header_not_fully_loaded", error=str(e))

    async def _check(self, locator: Locator, element: str) -> bool:
        visible = await self.is_locator_visible(locator)
        self.logger.info("probe_result", element=element, visible=visible)
        return visible

    def _inert(self, element: str, skipped: str) -> None:
        # No interaction, presence checks only.
        self.logger.info("interaction_skipped", element=element, skipped=skipped)

    # Logo

    async def check_logo_visible(self) -> bool:
        """Check the logo link is visible and log the result."""
        return await self._check(self.logo, "logo")

    async def is_logo_visible(self) -> bool:
        """Check if the logo link is visible."""
        return await self.is_locator_visible(self.logo, timeout=2000)

    async def is_logo_image_loaded(self) -> bool:
        """Check that the logo image finished loading with real pixels."""
        try:
            return await self.logo_image.evaluate(
                "img => img.complete && img.naturalWidth > 0"
            )
        except PlaywrightError:
            return False

    async def get_logo_href(self) -> str:
        """Get the logo link target, or an empty string."""
        return await self.logo.get_attribute("href") or ""

    # Menu toggle

    async def check_menu_toggle_visible(self) -> bool:
        """Check the menu toggle is visible and log the result."""
        return await self._check(self.menu_toggle, "menu_toggle")

    async def check_menu_toggle_visible_no_click(self) -> None:
        """Record that the menu toggle is not clicked."""
        self._inert("menu_toggle", "click")

    async def is_menu_toggle_visible(self) -> bool:
        """Check if the menu toggle is visible."""
        return await self.is_locator_visible(self.menu_toggle, timeout=2000)

    # Member login

    async def check_member_login_visible(self) -> bool:
        """Check the member login button is visible and log the result."""
        return await self._check(self.member_login_button, "member_login")

    async def check_member_login_visible_no_click(self) -> None:
        """Record that the member login button is not clicked."""
        self._inert("member_login", "click")

    async def check_member_login_visible_no_hover(self) -> None:
        """Record that the member login button is not hovered."""
        self._inert("member_login", "hover")

    async def is_member_login_visible(self) -> bool:
        """Check if the member login button is visible."""
        return await self.is_locator_visible(self.member_login_button, timeout=2000)

    # Main navigation

    async def is_navigation_menu_visible(self) -> bool:
        """Check if the primary navigation menu is visible."""
        return await self.is_locator_visible(self.navigation_menu, timeout=2000)

    async def check_members_menu_item_visible(self) -> bool:
        """Check the Members menu item is visible and log the result."""
        return await self._check(self.menu_items["members"], "members_menu_item")

    async def check_retirees_menu_item_visible(self) -> bool:
        """Check the Retirees menu item is visible and log the result."""
        return await self._check(self.menu_items["retirees"], "retirees_menu_item")

    async def check_employers_menu_item_visible(self) -> bool:
        """Check the Employers menu item is visible and log the result."""
        return await self._check(self.menu_items["employers"], "employers_menu_item")

    async def check_forms_publications_menu_item_visible(self) -> bool:
        """Check the Forms & Publications menu item is visible and log the result."""
        return await self._check(
            self.menu_items["forms_publications"], "forms_publications_menu_item"
        )

    async def check_contact_us_menu_item_visible(self) -> bool:
        """Check the Contact Us menu item is visible and log the result."""
        return await self._check(self.menu_items["contact_us"], "contact_us_menu_item")

    async def check_main_menu_items_visibility(self) -> MainMenuVisibility:
        """Probe each main menu entry in order."""
        flags = {}
        for key, locator in self.menu_items.items():
            flags[key] = await self.is_locator_visible(locator)
        return MainMenuVisibility(**flags)

    async def check_members_menu_item_visible_no_hover(self) -> None:
        """Record that the Members menu item is not hovered."""
        self._inert("members_menu_item", "hover")

    async def check_retirees_menu_item_visible_no_hover(self) -> None:
        """Record that the Retirees menu item is not hovered."""
        self._inert("retirees_menu_item", "hover")

    async def check_employers_menu_item_visible_no_hover(self) -> None:
        """Record that the Employers menu item is not hovered."""
        self._inert("employers_menu_item", "hover")

    async def check_forms_publications_menu_item_visible_no_hover(self) -> bool:
        """Read Forms & Publications visibility without hovering it."""
        visible = await self.menu_items["forms_publications"].is_visible()
        self.logger.info(
            "probe_result", element="forms_publications_menu_item", visible=visible, hover=False
        )
        return visible

    # Submenus

    async def _probe_submenu(self, submenu_id: str) -> dict[str, bool]:
        await self._page.wait_for_timeout(SUBMENU_SETTLE_MS)
        flags = {}
        for key, locator in self.submenu_items[submenu_id].items():
            flags[key] = await self.is_locator_visible(locator)
        return flags

    async def check_members_submenu_visibility(self) -> MembersSubmenuVisibility:
        """Probe the eight entries of the Members submenu."""
        await self.check_members_menu_item_visible_no_hover()
        return MembersSubmenuVisibility(**await self._probe_submenu("sl-menu__submenu_1"))

    async def check_retirees_submenu_visibility(self) -> RetireesSubmenuVisibility:
        """Probe the five entries of the Retirees submenu."""
        await self.check_retirees_menu_item_visible_no_hover()
        return RetireesSubmenuVisibility(**await self._probe_submenu("sl-menu__submenu_6"))

    async def check_employers_submenu_visibility(self) -> EmployersSubmenuVisibility:
        """Probe the four entries of the Employers submenu."""
        await self.check_employers_menu_item_visible_no_hover()
        return EmployersSubmenuVisibility(**await self._probe_submenu("sl-menu__submenu_8"))

    async def check_forms_publications_submenu_visibility(
        self,
    ) -> FormsPublicationsSubmenuVisibility:
        """Probe the three entries of the Forms & Publications submenu."""
        await self.check_forms_publications_menu_item_visible_no_hover()
        return FormsPublicationsSubmenuVisibility(
            **await self._probe_submenu("sl-menu__submenu_12")
        )

    async def check_all_submenu_visibility(self) -> SubmenuVisibility:
        """Probe all four submenus sequentially."""
        return SubmenuVisibility(
            members=await self.check_members_submenu_visibility(),
            retirees=await self.check_retirees_submenu_visibility(),
            employers=await self.check_employers_submenu_visibility(),
            forms_publications=await self.check_forms_publications_submenu_visibility(),
        )

    # Search

    async def is_search_visible(self) -> bool:
        """Check if the search section is visible."""
        return await self.is_locator_visible(self.search_section, timeout=2000)

    async def check_search_icon_visible(self) -> bool:
        """Check the search icon is visible and log the result."""
        return await self._check(self.search_icon, "search_icon")

    async def check_search_button_visible(self) -> bool:
        """Check the search button is visible and log the result."""
        return await self._check(self.search_button, "search_button")

    async def is_search_input_visible(self) -> bool:
        """Check if the site search input is visible."""
        return await self.is_locator_visible(self.search_input, timeout=2000)

    async def enter_search_text(self, text: str) -> None:
        """Type into the site search input."""
        await self.search_input.fill(text)
        self.logger.info("search_text_entered", text=text)

    async def perform_search(self, search_text: str) -> None:
        """Fill the search input when the search icon is showing.

        The search button is only probed, never clicked.
        """
        if await self.search_icon.is_visible():
            await self.enter_search_text(search_text)
            await self.check_search_button_visible()
        self.logger.info("search_performed", text=search_text, clicked=False)

    # Translate

    async def check_translate_button_visible(self) -> bool:
        """Check the translate button is visible and log the result."""
        return await self._check(self.translate_button, "translate_button")

    async def is_translate_button_visible(self) -> bool:
        """Check if the translate button is visible."""
        return await self.is_locator_visible(self.translate_button, timeout=2000)

    async def check_translate_button_visible_no_hover(self) -> bool:
        """Read translate button visibility without hovering it."""
        visible = await self.translate_button.is_visible()
        self.logger.info("probe_result", element="translate_button", visible=visible, hover=False)
        return visible

    # Toolbar

    async def is_toolbar_visible(self) -> bool:
        """Check if the toolbar is visible."""
        return await self.is_locator_visible(self.toolbar, timeout=2000)

    async def check_toolbar_elements_visibility(self) -> ToolbarVisibility:
        """Probe translate, search section and search icon."""
        return ToolbarVisibility(
            translate_button=await self.is_translate_button_visible(),
            search_section=await self.is_search_visible(),
            search_icon=await self.is_locator_visible(self.search_icon),
        )

    # Aggregates

    async def check_all_elements_visibility(self) -> NavigationHeaderVisibility:
        """Probe every navigation header element and fold the results."""
        report = NavigationHeaderVisibility(
            logo=await self.is_logo_visible(),
            menu_toggle=await self.is_menu_toggle_visible(),
            member_login=await self.is_member_login_visible(),
            navigation_menu=await self.is_navigation_menu_visible(),
            toolbar=await self.is_toolbar_visible(),
            main_menu_items=await self.check_main_menu_items_visibility(),
            toolbar_elements=await self.check_toolbar_elements_visibility(),
        )
        self.logger.info("navigation_header_checked", all_visible=report.all_visible)
        return report

    async def take_navigation_header_screenshot(self, name: str = "navigation-header") -> str:
        """Screenshot the header container only."""
        return await self.take_element_screenshot(self.header_container, name)

    async def get_navigation_header_info(self) -> NavigationHeaderInfo:
        """Collect descriptive information about the header elements."""
        logo_visible = await self.is_logo_visible()
        logo_href = await self.get_logo_href() if logo_visible else ""
        logo_image_loaded = await self.is_logo_image_loaded()

        member_login_visible = await self.is_member_login_visible()
        member_login_text: Optional[str] = None
        if member_login_visible:
            member_login_text = await self.member_login_button.text_content()

        menu_visible = await self.is_navigation_menu_visible()
        menu_items_count = 0
        if menu_visible:
            menu_items_count = await self.navigation_menu.locator(
                self.SELECTORS["menu_entry"]
            ).count()

        toolbar_visible = await self.is_toolbar_visible()
        toolbar_elements = await self.check_toolbar_elements_visibility()
        menu_toggle_visible = await self.is_menu_toggle_visible()

        visible = [logo_visible, member_login_visible, menu_visible, toolbar_visible, menu_toggle_visible]
        functional = [logo_image_loaded, member_login_visible, menu_visible, toolbar_elements.all_visible]

        return NavigationHeaderInfo(
            logo_visible=logo_visible,
            logo_href=logo_href,
            logo_image_loaded=logo_image_loaded,
            member_login_visible=member_login_visible,
            member_login_text=(member_login_text or "").strip(),
            menu_visible=menu_visible,
            menu_items_count=menu_items_count,
            toolbar_visible=toolbar_visible,
            toolbar_elements=toolbar_elements,
            total_elements=len(visible),
            visible_elements=sum(visible),
            functional_elements=sum(functional),
        )
