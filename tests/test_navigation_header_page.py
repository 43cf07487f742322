"""Tests for the navigation header page object."""
from unittest.mock import MagicMock

import pytest
from structlog.testing import capture_logs

from songlist_pom.models import NavigationHeaderVisibility
from songlist_pom.pages import HeaderLinksPage, NavigationHeaderPage
from songlist_pom.pages.navigation_header_page import SUBMENU_SETTLE_MS
from tests.fakes import FakeElement

SEL = NavigationHeaderPage.SELECTORS


def hide_menu_item(page, text):
    for element in page.elements[SEL["menu_item"]]:
        if element.text == text:
            element.visible = False


class TestNavigationHeaderProbes:
    """Tests for single-element probes."""

    @pytest.mark.asyncio
    async def test_logo_visible(self, header_page):
        header = NavigationHeaderPage(header_page)
        assert await header.is_logo_visible() is True
        assert await header.check_logo_visible() is True

    @pytest.mark.asyncio
    async def test_probes_false_on_empty_page(self, empty_page):
        """Test that every probe reports False without raising."""
        header = NavigationHeaderPage(empty_page)

        assert await header.is_logo_visible() is False
        assert await header.is_menu_toggle_visible() is False
        assert await header.is_member_login_visible() is False
        assert await header.is_navigation_menu_visible() is False
        assert await header.is_toolbar_visible() is False
        assert await header.is_search_visible() is False
        assert await header.is_search_input_visible() is False
        assert await header.is_translate_button_visible() is False
        assert await header.check_search_icon_visible() is False
        assert await header.check_search_button_visible() is False
        assert await header.check_contact_us_menu_item_visible() is False

    @pytest.mark.asyncio
    async def test_probe_timeout(self, empty_page):
        """Test that is_* probes wait 2 seconds at most."""
        header = NavigationHeaderPage(empty_page)
        await header.is_logo_visible()
        assert empty_page.calls[-1] == ("wait_for", f"{SEL['logo']} >> nth=0", 2000)

    @pytest.mark.asyncio
    async def test_check_probe_logs_result(self, header_page):
        """Test that check_* probes log their outcome."""
        logger = MagicMock()
        header = NavigationHeaderPage(header_page, logger=logger)

        await header.check_menu_toggle_visible()

        logger.info.assert_called_with("probe_result", element="menu_toggle", visible=True)

    @pytest.mark.asyncio
    async def test_member_login_matched_by_text(self, header_page):
        """Test that a primary button without the login text does not count."""
        header_page.elements[SEL["member_login_button"]][0].text = "Donate"
        header = NavigationHeaderPage(header_page)
        assert await header.is_member_login_visible() is False

    @pytest.mark.asyncio
    async def test_logo_image_loaded(self, header_page):
        header = NavigationHeaderPage(header_page)
        assert await header.is_logo_image_loaded() is True

        header_page.elements[SEL["logo_image"]][0].loaded = False
        assert await header.is_logo_image_loaded() is False

    @pytest.mark.asyncio
    async def test_logo_image_missing_is_not_loaded(self, empty_page):
        header = NavigationHeaderPage(empty_page)
        assert await header.is_logo_image_loaded() is False

    @pytest.mark.asyncio
    async def test_translate_no_hover_returns_visibility(self, header_page):
        header = NavigationHeaderPage(header_page)
        assert await header.check_translate_button_visible_no_hover() is True


class TestNavigationHeaderAggregates:
    """Tests for folded visibility reports."""

    @pytest.mark.asyncio
    async def test_main_menu_all_visible(self, header_page):
        header = NavigationHeaderPage(header_page)
        report = await header.check_main_menu_items_visibility()
        assert report.all_visible is True

    @pytest.mark.asyncio
    async def test_main_menu_one_missing(self, header_page):
        """Test that one hidden entry flips the fold."""
        hide_menu_item(header_page, "Employers")
        header = NavigationHeaderPage(header_page)

        report = await header.check_main_menu_items_visibility()

        assert report.employers is False
        assert report.members is True
        assert report.all_visible is False

    @pytest.mark.asyncio
    async def test_check_all_elements_visible(self, header_page):
        header = NavigationHeaderPage(header_page)
        report = await header.check_all_elements_visibility()

        assert isinstance(report, NavigationHeaderVisibility)
        assert report.all_visible is True

    @pytest.mark.asyncio
    async def test_check_all_elements_missing_search_icon(self, header_page):
        """Test that a missing toolbar child fails the whole header."""
        header_page.remove(SEL["search_icon"])
        header = NavigationHeaderPage(header_page)

        report = await header.check_all_elements_visibility()

        assert report.toolbar is True
        assert report.toolbar_elements.search_icon is False
        assert report.all_visible is False

    @pytest.mark.asyncio
    async def test_check_all_elements_logs_outcome(self, header_page):
        with capture_logs() as logs:
            header = NavigationHeaderPage(header_page)
            await header.check_all_elements_visibility()

        checked = [log for log in logs if log["event"] == "navigation_header_checked"]
        assert len(checked) == 1
        assert checked[0]["all_visible"] is True
        assert checked[0]["log_level"] == "info"
        assert checked[0]["page_object"] == "NavigationHeaderPage"

    @pytest.mark.asyncio
    async def test_toolbar_elements(self, header_page):
        header_page.elements[SEL["translate_button"]][0].visible = False
        header = NavigationHeaderPage(header_page)

        report = await header.check_toolbar_elements_visibility()

        assert report.translate_button is False
        assert report.search_section is True
        assert report.all_visible is False

    @pytest.mark.asyncio
    async def test_empty_page_reports_all_false(self, empty_page):
        header = NavigationHeaderPage(empty_page)
        report = await header.check_all_elements_visibility()

        assert report.all_visible is False
        assert report.main_menu_items.to_dict()["all_visible"] is False


class TestNavigationHeaderSubmenus:
    """Tests for submenu probes."""

    @pytest.mark.asyncio
    async def test_all_submenus_visible(self, header_page):
        header = NavigationHeaderPage(header_page)
        report = await header.check_all_submenu_visibility()

        assert report.members.all_visible is True
        assert report.all_visible is True

    @pytest.mark.asyncio
    async def test_submenu_never_hovers(self, header_page):
        """Test that submenu probes settle without hovering the parent item."""
        header = NavigationHeaderPage(header_page)

        await header.check_members_submenu_visibility()

        assert not any(call[0] == "hover" for call in header_page.calls)
        assert ("wait_for_timeout", SUBMENU_SETTLE_MS) in header_page.calls

    @pytest.mark.asyncio
    async def test_one_submenu_item_missing(self, header_page):
        selector = SEL["submenu_item"].format(submenu_id="sl-menu__submenu_8")
        header_page.elements[selector] = [
            e for e in header_page.elements[selector] if e.text != "Resources"
        ]
        header = NavigationHeaderPage(header_page)

        report = await header.check_all_submenu_visibility()

        assert report.employers.resources is False
        assert report.employers.training is True
        assert report.retirees.all_visible is True
        assert report.all_visible is False

    @pytest.mark.asyncio
    async def test_shared_label_resolved_per_submenu(self, header_page):
        """Test that "Life and Job Changes" is probed inside each submenu."""
        retirees = SEL["submenu_item"].format(submenu_id="sl-menu__submenu_6")
        for element in header_page.elements[retirees]:
            element.visible = element.text != "Life and Job Changes"
        header = NavigationHeaderPage(header_page)

        members = await header.check_members_submenu_visibility()
        retiree_report = await header.check_retirees_submenu_visibility()

        assert members.life_job_changes is True
        assert retiree_report.life_job_changes_retiree is False

    @pytest.mark.asyncio
    async def test_inert_interactions_only_log(self, header_page):
        """Test that no-click/no-hover stand-ins do nothing but log."""
        logger = MagicMock()
        header = NavigationHeaderPage(header_page, logger=logger)

        assert await header.check_menu_toggle_visible_no_click() is None
        assert await header.check_member_login_visible_no_click() is None
        assert await header.check_member_login_visible_no_hover() is None

        assert header_page.calls == []
        logger.info.assert_called_with("interaction_skipped", element="member_login", skipped="hover")


class TestNavigationHeaderSearch:
    """Tests for the search box helpers."""

    @pytest.mark.asyncio
    async def test_perform_search_fills_without_clicking(self, header_page):
        header = NavigationHeaderPage(header_page)

        await header.perform_search("retirement")

        assert header_page.elements[SEL["search_input"]][0].value == "retirement"
        assert not any(call[0] == "click" for call in header_page.calls)

    @pytest.mark.asyncio
    async def test_perform_search_skips_when_icon_hidden(self, header_page):
        header_page.elements[SEL["search_icon"]][0].visible = False
        header = NavigationHeaderPage(header_page)

        await header.perform_search("retirement")

        assert header_page.elements[SEL["search_input"]][0].value == ""


class TestNavigationHeaderInfo:
    """Tests for the descriptive header summary."""

    @pytest.mark.asyncio
    async def test_info_complete_header(self, header_page):
        header = NavigationHeaderPage(header_page)
        info = await header.get_navigation_header_info()

        assert info.logo_href == "/song-list2/"
        assert info.member_login_text == "Member Login/Registration"
        assert info.menu_items_count == len(NavigationHeaderPage.MENU_ITEMS)
        assert info.total_elements == 5
        assert info.visible_elements == 5
        assert info.functional_elements == 4

    @pytest.mark.asyncio
    async def test_info_empty_page(self, empty_page):
        header = NavigationHeaderPage(empty_page)
        info = await header.get_navigation_header_info()

        assert info.logo_href == ""
        assert info.menu_items_count == 0
        assert info.visible_elements == 0
        assert info.to_dict()["toolbar_elements"]["all_visible"] is False

    @pytest.mark.asyncio
    async def test_header_screenshot(self, header_page, tmp_path):
        header = NavigationHeaderPage(header_page, screenshot_dir=tmp_path)
        filename = await header.take_navigation_header_screenshot()

        assert filename.startswith("navigation-header-")
        assert (tmp_path / filename).exists()


class TestNavigationHeaderDuplicateNodes:
    """Tests for selectors that match more than one node."""

    @pytest.mark.asyncio
    async def test_second_logo_and_icon_do_not_raise(self, header_page):
        """Test that visibility checks resolve to the first match when a selector repeats."""
        header_page.elements[SEL["logo"]].append(FakeElement(attributes={"href": "/footer"}))
        header_page.elements[SEL["search_icon"]].append(FakeElement(visible=False))
        header_page.elements[SEL["toolbar"]].append(FakeElement())
        header = NavigationHeaderPage(header_page)

        assert await header.is_logo_visible() is True
        assert await header.get_logo_href() == "/song-list2/"
        assert await header.check_search_icon_visible() is True
        assert (await header.check_all_elements_visibility()).all_visible is True

    @pytest.mark.asyncio
    async def test_hidden_first_match_reports_false(self, header_page):
        """Test that only the first matching node decides visibility."""
        header_page.elements[SEL["menu_toggle"]].insert(0, FakeElement(visible=False))
        header = NavigationHeaderPage(header_page)

        assert await header.is_menu_toggle_visible() is False

    @pytest.mark.asyncio
    async def test_repeated_search_input_still_fills(self, header_page):
        header_page.elements[SEL["search_input"]].append(FakeElement())
        header = NavigationHeaderPage(header_page)

        await header.enter_search_text("pension")

        assert header_page.elements[SEL["search_input"]][0].value == "pension"
        assert header_page.elements[SEL["search_input"]][1].value == ""


class TestPageObjectDocstrings:
    """Tests that the public page-object API is documented."""

    @pytest.mark.parametrize("page_class", [NavigationHeaderPage, HeaderLinksPage])
    def test_public_methods_have_docstrings(self, page_class):
        undocumented = [
            name
            for name, member in vars(page_class).items()
            if not name.startswith("_") and callable(member) and not member.__doc__
        ]
        assert undocumented == []
