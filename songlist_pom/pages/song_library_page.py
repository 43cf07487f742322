"""Page object for the song library CRUD table."""
from typing import Optional

from playwright.async_api import Locator, Page
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..models import (
    ActionButtonsVisibility,
    ButtonState,
    ButtonStates,
    FieldValidation,
    FilterButtonsVisibility,
    FormInputsVisibility,
    ImageLoadStatus,
    SongLibraryVisibility,
    SongRecord,
    SortInfo,
    TableHeadersVisibility,
    TableSortingInfo,
)
from .base_page import BasePage

# Number of songs the library ships with before any edits.
INITIAL_SONG_COUNT = 5

# Record field -> label used in validation issues
REQUIRED_FIELDS = {
    "title": "title",
    "artist": "artist",
    "release_date": "release date",
    "price": "price",
}


def validate_song_records(songs: list[SongRecord]) -> FieldValidation:
    """Flag every blank field in already-fetched song records.

    A field is blank when it is empty or only whitespace. Rows are reported
    by their position in ``songs``.

    Args:
        songs: Records in table order.

    Returns:
        FieldValidation with one issue per blank field.
    """
    issues: list[str] = []
    for index, song in enumerate(songs):
        for attr, label in REQUIRED_FIELDS.items():
            value = getattr(song, attr)
            if not value or not value.strip():
                issues.append(f"Row {index}: Missing {label}")
    return FieldValidation(valid=not issues, issues=issues)


class SongLibraryPage(BasePage):
    """Page object for the song library.

    Encapsulates the filter bar, the add button, the song table and its
    per-row inputs and action buttons. Every method reads the live DOM;
    nothing is cached between calls.
    """

    # Centralized selectors
    SELECTORS = {
        # Header
        "page_header": "app-header header",
        "song_library_title": "app-header header h2",
        # Filter section
        "date_filter_section": "#date-filter",
        "date_filter_input": '#date-filter input[type="date"]',
        "date_filter_label": '#date-filter mat-label:has-text("Released before:")',
        "filter_button": '#date-filter button:has-text("Filter")',
        "cancel_filter_button": '#date-filter button:has-text("Cancel")',
        # Add song section
        "add_song_section": ".table-header",
        "add_new_song_button": 'button:has-text("Add New Song")',
        # Table structure
        "song_table": "#song-table",
        "table_header": "#song-table .theader",
        "any_column_header": ".table_header",
        "column_header": '.table_header[data-name="{name}"]',
        # Rows and inputs
        "song_rows": ".table_row",
        "title_inputs": 'input[name="title"]',
        "artist_inputs": 'input[name="artist"]',
        "release_date_inputs": 'input[name="releaseDay"]',
        "price_inputs": 'input[name="price"]',
        # Action buttons
        "edit_buttons": 'button:has-text("Edit")',
        "delete_buttons": 'button:has-text("Delete")',
        "save_buttons": 'button:has-text("Save")',
        # Media
        "images": "img",
    }

    # Record field -> data-name on the column header
    COLUMN_NAMES = {
        "title": "title",
        "artist": "artist",
        "release_date": "releaseDay",
        "price": "price",
    }

    def __init__(
        self, page: Page, expected_song_count: int = INITIAL_SONG_COUNT, **kwargs
    ) -> None:
        super().__init__(page, **kwargs)
        self.expected_song_count = expected_song_count
        sel = self.SELECTORS

        self.page_header = page.locator(sel["page_header"]).first
        self.song_library_title = page.locator(sel["song_library_title"]).first

        self.date_filter_section = page.locator(sel["date_filter_section"]).first
        self.date_filter_input = page.locator(sel["date_filter_input"]).first
        self.date_filter_label = page.locator(sel["date_filter_label"]).first
        self.filter_button = page.locator(sel["filter_button"]).first
        self.cancel_filter_button = page.locator(sel["cancel_filter_button"]).first

        self.add_song_section = page.locator(sel["add_song_section"]).first
        self.add_new_song_button = page.locator(sel["add_new_song_button"]).first

        self.song_table = page.locator(sel["song_table"]).first
        self.table_header = page.locator(sel["table_header"]).first
        self.column_headers: dict[str, Locator] = {
            field: page.locator(sel["column_header"].format(name=name)).first
            for field, name in self.COLUMN_NAMES.items()
        }

        self.song_rows = page.locator(sel["song_rows"])
        self.first_song_row = self.song_rows.first

        self.title_inputs = page.locator(sel["title_inputs"])
        self.artist_inputs = page.locator(sel["artist_inputs"])
        self.release_date_inputs = page.locator(sel["release_date_inputs"])
        self.price_inputs = page.locator(sel["price_inputs"])

        self.edit_buttons = page.locator(sel["edit_buttons"])
        self.delete_buttons = page.locator(sel["delete_buttons"])
        self.save_buttons = page.locator(sel["save_buttons"])

    @property
    def url_pattern(self) -> str:
        """Regex pattern to validate current URL."""
        return r"https?://.*song-list2.*"

    async def _probe(self, locator: Locator, element: str) -> bool:
        visible = await self.is_locator_visible(locator, timeout=2000)
        self.logger.info("probe_result", element=element, visible=visible)
        return visible

    async def _all_visible(self, locator: Locator, element: str) -> bool:
        """AND the visibility of every match; no matches counts as visible."""
        count = await locator.count()
        all_visible = True
        for i in range(count):
            visible = await locator.nth(i).is_visible()
            if not visible:
                all_visible = False
            self.logger.debug("probe_result", element=element, index=i, visible=visible)
        self.logger.info("probe_result", element=element, count=count, visible=all_visible)
        return all_visible

    # Header and filter

    async def is_page_header_visible(self) -> bool:
        return await self._probe(self.page_header, "page_header")

    async def is_song_library_title_visible(self) -> bool:
        visible = await self.is_locator_visible(self.song_library_title, timeout=2000)
        title: Optional[str] = None
        if visible:
            title = await self.song_library_title.text_content()
        self.logger.info("probe_result", element="song_library_title", visible=visible, text=title)
        return visible

    async def is_date_filter_section_visible(self) -> bool:
        return await self._probe(self.date_filter_section, "date_filter_section")

    async def is_date_filter_input_visible(self) -> bool:
        return await self._probe(self.date_filter_input, "date_filter_input")

    async def are_filter_buttons_visible(self) -> FilterButtonsVisibility:
        return FilterButtonsVisibility(
            filter=await self._probe(self.filter_button, "filter_button"),
            cancel=await self._probe(self.cancel_filter_button, "cancel_filter_button"),
        )

    async def is_add_new_song_button_visible(self) -> bool:
        return await self._probe(self.add_new_song_button, "add_new_song_button")

    # Table

    async def is_song_table_visible(self) -> bool:
        return await self._probe(self.song_table, "song_table")

    async def are_table_headers_visible(self) -> TableHeadersVisibility:
        """Probe the four column headers.

        Gives the table up to 5s to render its headers, then checks each one
        without waiting further.
        """
        try:
            await self._page.wait_for_selector(
                self.SELECTORS["any_column_header"], state="visible", timeout=5000
            )
        except PlaywrightTimeoutError:
            self.logger.warning("table_header_timeout")

        flags = {}
        for field, locator in self.column_headers.items():
            try:
                flags[field] = await locator.is_visible()
            except PlaywrightError:
                flags[field] = False
        self.logger.info("probe_result", element="table_headers", **flags)
        return TableHeadersVisibility(**flags)

    async def get_song_row_count(self) -> int:
        count = await self.song_rows.count()
        self.logger.info("song_rows_counted", count=count)
        return count

    async def is_song_row_visible(self, index: int) -> bool:
        return await self._probe(self.song_rows.nth(index), f"song_row_{index}")

    async def is_first_song_row_visible(self) -> bool:
        return await self._probe(self.first_song_row, "first_song_row")

    # Per-row inputs and buttons

    async def are_title_inputs_visible(self) -> bool:
        return await self._all_visible(self.title_inputs, "title_inputs")

    async def are_artist_inputs_visible(self) -> bool:
        return await self._all_visible(self.artist_inputs, "artist_inputs")

    async def are_release_date_inputs_visible(self) -> bool:
        return await self._all_visible(self.release_date_inputs, "release_date_inputs")

    async def are_price_inputs_visible(self) -> bool:
        return await self._all_visible(self.price_inputs, "price_inputs")

    async def are_edit_buttons_visible(self) -> bool:
        return await self._all_visible(self.edit_buttons, "edit_buttons")

    async def are_delete_buttons_visible(self) -> bool:
        return await self._all_visible(self.delete_buttons, "delete_buttons")

    async def are_save_buttons_visible(self) -> bool:
        return await self._all_visible(self.save_buttons, "save_buttons")

    # Song data

    async def get_song_data_from_row(self, index: int) -> SongRecord:
        """Read one song from the row inputs at ``index``.

        Rows are matched by position only; a reflow between calls can shift
        which song sits at an index.

        Args:
            index: Zero-based row index.

        Returns:
            SongRecord with the raw input values.
        """
        song = SongRecord(
            title=await self.title_inputs.nth(index).input_value(),
            artist=await self.artist_inputs.nth(index).input_value(),
            release_date=await self.release_date_inputs.nth(index).input_value(),
            price=await self.price_inputs.nth(index).input_value(),
        )
        self.logger.debug("song_row_read", index=index, **song.to_dict())
        return song

    async def get_all_song_data(self) -> list[SongRecord]:
        """Read every song row currently in the table."""
        row_count = await self.get_song_row_count()
        songs = [await self.get_song_data_from_row(i) for i in range(row_count)]
        self.logger.info("song_data_read", count=len(songs))
        return songs

    async def are_initial_songs_loaded(self) -> bool:
        """Check the table holds exactly the initial song set."""
        count = await self.get_song_row_count()
        loaded = count == self.expected_song_count
        self.logger.info(
            "initial_songs_checked", expected=self.expected_song_count, actual=count, loaded=loaded
        )
        return loaded

    async def verify_all_songs_have_required_fields(
        self, songs: Optional[list[SongRecord]] = None
    ) -> FieldValidation:
        """Check that every song has a title, artist, release date and price.

        Args:
            songs: Records to validate. Read from the table when omitted.

        Returns:
            FieldValidation listing each blank field.
        """
        if songs is None:
            songs = await self.get_all_song_data()
        result = validate_song_records(songs)
        if result.valid:
            self.logger.info("required_fields_valid", count=len(songs))
        else:
            self.logger.warning("required_fields_missing", issues=result.issues)
        return result

    async def get_table_header_sorting_info(self) -> TableSortingInfo:
        """Read the ``data-order``/``data-name`` attributes of each column header."""
        info = {}
        for field, locator in self.column_headers.items():
            info[field] = SortInfo(
                order=await locator.get_attribute("data-order"),
                name=await locator.get_attribute("data-name"),
            )
        sorting = TableSortingInfo(**info)
        self.logger.info("table_sorting_read", **sorting.to_dict())
        return sorting

    # Aggregates

    async def check_all_elements_visibility(self) -> SongLibraryVisibility:
        """Run every probe on the page and fold them into one report."""
        report = SongLibraryVisibility(
            header=await self.is_page_header_visible(),
            title=await self.is_song_library_title_visible(),
            date_filter=await self.is_date_filter_section_visible(),
            filter_buttons=await self.are_filter_buttons_visible(),
            add_button=await self.is_add_new_song_button_visible(),
            table=await self.is_song_table_visible(),
            table_headers=await self.are_table_headers_visible(),
            song_rows=await self.get_song_row_count(),
            form_inputs=FormInputsVisibility(
                titles=await self.are_title_inputs_visible(),
                artists=await self.are_artist_inputs_visible(),
                dates=await self.are_release_date_inputs_visible(),
                prices=await self.are_price_inputs_visible(),
            ),
            action_buttons=ActionButtonsVisibility(
                edit=await self.are_edit_buttons_visible(),
                delete=await self.are_delete_buttons_visible(),
                save=await self.are_save_buttons_visible(),
            ),
        )
        self.logger.info("song_library_checked", all_visible=report.all_visible)
        return report

    async def _button_state(self, locator: Locator) -> ButtonState:
        return ButtonState(
            visible=await locator.is_visible(),
            enabled=await locator.is_enabled(),
        )

    async def _button_states(self, locator: Locator) -> list[ButtonState]:
        count = await locator.count()
        return [await self._button_state(locator.nth(i)) for i in range(count)]

    async def get_button_states(self) -> ButtonStates:
        """Collect visible/enabled state for every button on the page."""
        states = ButtonStates(
            add_button=await self._button_state(self.add_new_song_button),
            filter_button=await self._button_state(self.filter_button),
            cancel_button=await self._button_state(self.cancel_filter_button),
            edit_buttons=await self._button_states(self.edit_buttons),
            delete_buttons=await self._button_states(self.delete_buttons),
            save_buttons=await self._button_states(self.save_buttons),
        )
        self.logger.info("button_states_read", **states.to_dict())
        return states

    async def verify_images_loaded(self) -> ImageLoadStatus:
        """Count images that finished loading with a non-zero height."""
        images = await self._page.locator(self.SELECTORS["images"]).all()
        loaded = 0
        failed = 0
        for image in images:
            try:
                ok = await image.evaluate("img => img.complete && img.naturalHeight !== 0")
            except PlaywrightError as e:
                self.logger.warning("image_check_failed", error=str(e))
                ok = False
            if ok:
                loaded += 1
            else:
                failed += 1
        status = ImageLoadStatus(image_count=len(images), loaded_images=loaded, failed_images=failed)
        self.logger.info(
            "images_checked",
            image_count=status.image_count,
            loaded=loaded,
            failed=failed,
        )
        return status
