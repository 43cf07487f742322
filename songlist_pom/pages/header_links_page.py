"""Page object for the header link bar."""
from playwright.async_api import Locator, Page
from playwright.async_api import Error as PlaywrightError

from ..models import HeaderImagesStatus, HeaderLinksVisibility, LinkInfo
from .base_page import BasePage


class HeaderLinksPage(BasePage):
    """Page object for the Contact Us / Employer Login / Vendor Login bar.

    Each link is matched by its icon's alt text first and by its label text
    as a fallback.
    """

    SELECTORS = {
        "header_container": ".header-link-bar",
        "link": ".header-link-bar a",
        "link_image": 'img[alt="{label}"]',
        "link_by_text": '.header-link-bar a:has-text("{label}")',
    }

    LINKS = {
        "contact_us": "Contact Us",
        "employer_login": "Employer Login",
        "vendor_login": "Vendor Login",
    }

    def __init__(self, page: Page, **kwargs) -> None:
        super().__init__(page, **kwargs)
        self.header_container = page.locator(self.SELECTORS["header_container"]).first
        self.links: dict[str, Locator] = {
            key: self._link_locator(label) for key, label in self.LINKS.items()
        }
        self.link_images: dict[str, Locator] = {
            key: page.locator(self.SELECTORS["link_image"].format(label=label)).first
            for key, label in self.LINKS.items()
        }

    def _link_locator(self, label: str) -> Locator:
        by_image = (
            self._page.locator(self.SELECTORS["link"])
            .filter(has=self._page.locator(self.SELECTORS["link_image"].format(label=label)))
            .first
        )
        by_text = self._page.locator(self.SELECTORS["link_by_text"].format(label=label)).first
        return by_image.or_(by_text).first

    @property
    def url_pattern(self) -> str:
        """Regex pattern to validate current URL."""
        return r"https?://.+"

    async def wait_for_header_load(self) -> None:
        """Wait for the link bar and its first link, tolerating a slow render."""
        try:
            await self.header_container.wait_for(state="visible", timeout=10000)
            await self.links["contact_us"].or_(self.links["employer_login"]).or_(
                self.links["vendor_login"]
            ).first.wait_for(state="visible", timeout=5000)
            self.logger.info("header_links_loaded")
        except PlaywrightError as e:
            self.logger.warning("header_links_not_fully_loaded", error=str(e))

    async def _check(self, key: str) -> bool:
        visible = await self.is_locator_visible(self.links[key], timeout=2000)
        self.logger.info("probe_result", element=key, visible=visible)
        return visible

    async def check_contact_us_visible(self) -> bool:
        """Check the Contact Us link is visible and log the result."""
        return await self._check("contact_us")

    async def check_employer_login_visible(self) -> bool:
        """Check the Employer Login link is visible and log the result."""
        return await self._check("employer_login")

    async def check_vendor_login_visible(self) -> bool:
        """Check the Vendor Login link is visible and log the result."""
        return await self._check("vendor_login")

    async def is_contact_us_visible(self) -> bool:
        """Check if the Contact Us link is visible."""
        return await self.is_locator_visible(self.links["contact_us"], timeout=2000)

    async def is_employer_login_visible(self) -> bool:
        """Check if the Employer Login link is visible."""
        return await self.is_locator_visible(self.links["employer_login"], timeout=2000)

    async def is_vendor_login_visible(self) -> bool:
        """Check if the Vendor Login link is visible."""
        return await self.is_locator_visible(self.links["vendor_login"], timeout=2000)

    async def check_all_links_visibility(self) -> HeaderLinksVisibility:
        """Probe all three links and fold the results."""
        report = HeaderLinksVisibility(
            contact_us=await self.is_contact_us_visible(),
            employer_login=await self.is_employer_login_visible(),
            vendor_login=await self.is_vendor_login_visible(),
        )
        self.logger.info("header_links_checked", all_visible=report.all_visible)
        return report

    async def get_contact_us_href(self) -> str:
        """Get the Contact Us link target, or an empty string."""
        return await self.links["contact_us"].get_attribute("href") or ""

    async def get_employer_login_href(self) -> str:
        """Get the Employer Login link target, or an empty string."""
        return await self.links["employer_login"].get_attribute("href") or ""

    async def get_vendor_login_href(self) -> str:
        """Get the Vendor Login link target, or an empty string."""
        return await self.links["vendor_login"].get_attribute("href") or ""

    async def get_all_links_info(self) -> dict[str, LinkInfo]:
        """Collect text, href and visibility for each link.

        Any Playwright failure degrades the whole result to empty entries.
        """
        try:
            return {
                "contact_us": LinkInfo(
                    text=await self.links["contact_us"].text_content() or "",
                    href=await self.get_contact_us_href(),
                    visible=await self.is_contact_us_visible(),
                ),
                "employer_login": LinkInfo(
                    text=await self.links["employer_login"].text_content() or "",
                    href=await self.get_employer_login_href(),
                    visible=await self.is_employer_login_visible(),
                ),
                "vendor_login": LinkInfo(
                    text=await self.links["vendor_login"].text_content() or "",
                    href=await self.get_vendor_login_href(),
                    visible=await self.is_vendor_login_visible(),
                ),
            }
        except PlaywrightError as e:
            self.logger.error("links_info_failed", error=str(e))
            return {key: LinkInfo() for key in self.LINKS}

    async def check_contact_us_visible_no_hover(self) -> None:
        """Record that the Contact Us link is not hovered."""
        self.logger.info("interaction_skipped", element="contact_us", skipped="hover")

    async def check_employer_login_visible_no_hover(self) -> None:
        """Record that the Employer Login link is not hovered."""
        self.logger.info("interaction_skipped", element="employer_login", skipped="hover")

    async def check_vendor_login_visible_no_hover(self) -> None:
        """Record that the Vendor Login link is not hovered."""
        self.logger.info("interaction_skipped", element="vendor_login", skipped="hover")

    async def verify_images_loaded(self) -> HeaderImagesStatus:
        """Check each link icon finished loading with a non-zero width."""
        script = "img => img.complete && img.naturalWidth > 0"
        return HeaderImagesStatus(
            contact_us_image=await self.link_images["contact_us"].evaluate(script),
            employer_login_image=await self.link_images["employer_login"].evaluate(script),
            vendor_login_image=await self.link_images["vendor_login"].evaluate(script),
        )

    async def take_header_screenshot(self, name: str = "header") -> str:
        """Screenshot the link bar only."""
        return await self.take_element_screenshot(self.header_container, name)
