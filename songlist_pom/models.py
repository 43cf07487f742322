"""Data contracts returned by the page objects and the smoke runner."""
from dataclasses import asdict, dataclass, field
from datetime import datetime
from enum import StrEnum
from pathlib import Path
from typing import Optional


class PageName(StrEnum):
    """Page objects the smoke runner knows how to check."""

    HEADER = "header"
    LINKS = "links"
    LIBRARY = "library"


@dataclass(frozen=True)
class SuiteSettings:
    """Resolved settings for a smoke run."""

    base_url: str
    output_dir: Path
    screenshot_dir: Path
    log_dir: Path
    headless: bool = True
    action_timeout_ms: int = 10000
    navigation_timeout_ms: int = 30000
    viewport_width: int = 1280
    viewport_height: int = 720
    expected_song_count: int = 5


class _Report:
    """Mixin giving visibility snapshots a uniform export shape."""

    def to_dict(self) -> dict:
        """Convert to a plain dictionary including the ``all_visible`` fold."""
        data = asdict(self)
        for name, value in vars(self).items():
            if isinstance(value, _Report):
                data[name] = value.to_dict()
        if hasattr(self, "all_visible"):
            data["all_visible"] = self.all_visible
        return data


# Navigation header -------------------------------------------------------


@dataclass(frozen=True)
class MainMenuVisibility(_Report):
    members: bool
    retirees: bool
    employers: bool
    forms_publications: bool
    contact_us: bool

    @property
    def all_visible(self) -> bool:
        return (
            self.members
            and self.retirees
            and self.employers
            and self.forms_publications
            and self.contact_us
        )


@dataclass(frozen=True)
class MembersSubmenuVisibility(_Report):
    my_account: bool
    new_to: bool
    mid_career: bool
    ready_to_retire: bool
    benefit_basics: bool
    life_job_changes: bool
    plan_401k: bool
    webinars: bool

    @property
    def all_visible(self) -> bool:
        return all(asdict(self).values())


@dataclass(frozen=True)
class RetireesSubmenuVisibility(_Report):
    benefit_basics_retiree: bool
    health_benefits: bool
    life_job_changes_retiree: bool
    taxes_on_benefits: bool
    plan_401k_retiree: bool

    @property
    def all_visible(self) -> bool:
        return all(asdict(self).values())


@dataclass(frozen=True)
class EmployersSubmenuVisibility(_Report):
    training: bool
    employer_toolkit: bool
    resources: bool
    affiliating: bool

    @property
    def all_visible(self) -> bool:
        return all(asdict(self).values())


@dataclass(frozen=True)
class FormsPublicationsSubmenuVisibility(_Report):
    member_retiree_forms: bool
    booklets_fact_sheets: bool
    financial_reports: bool

    @property
    def all_visible(self) -> bool:
        return all(asdict(self).values())


@dataclass(frozen=True)
class SubmenuVisibility(_Report):
    """All four submenu snapshots of the main navigation."""

    members: MembersSubmenuVisibility
    retirees: RetireesSubmenuVisibility
    employers: EmployersSubmenuVisibility
    forms_publications: FormsPublicationsSubmenuVisibility

    @property
    def all_visible(self) -> bool:
        return (
            self.members.all_visible
            and self.retirees.all_visible
            and self.employers.all_visible
            and self.forms_publications.all_visible
        )


@dataclass(frozen=True)
class ToolbarVisibility(_Report):
    translate_button: bool
    search_section: bool
    search_icon: bool

    @property
    def all_visible(self) -> bool:
        return self.translate_button and self.search_section and self.search_icon


@dataclass(frozen=True)
class NavigationHeaderVisibility(_Report):
    """Comprehensive snapshot of the navigation header."""

    logo: bool
    menu_toggle: bool
    member_login: bool
    navigation_menu: bool
    toolbar: bool
    main_menu_items: MainMenuVisibility
    toolbar_elements: ToolbarVisibility

    @property
    def all_visible(self) -> bool:
        return (
            self.logo
            and self.menu_toggle
            and self.member_login
            and self.navigation_menu
            and self.toolbar
            and self.main_menu_items.all_visible
            and self.toolbar_elements.all_visible
        )


@dataclass(frozen=True)
class NavigationHeaderInfo:
    """Descriptive summary of the navigation header."""

    logo_visible: bool
    logo_href: str
    logo_image_loaded: bool
    member_login_visible: bool
    member_login_text: str
    menu_visible: bool
    menu_items_count: int
    toolbar_visible: bool
    toolbar_elements: ToolbarVisibility
    total_elements: int
    visible_elements: int
    functional_elements: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["toolbar_elements"] = self.toolbar_elements.to_dict()
        return data


# Header link bar ---------------------------------------------------------


@dataclass(frozen=True)
class HeaderLinksVisibility(_Report):
    contact_us: bool
    employer_login: bool
    vendor_login: bool

    @property
    def all_visible(self) -> bool:
        return self.contact_us and self.employer_login and self.vendor_login


@dataclass(frozen=True)
class LinkInfo:
    text: str = ""
    href: str = ""
    visible: bool = False


@dataclass(frozen=True)
class HeaderImagesStatus(_Report):
    contact_us_image: bool
    employer_login_image: bool
    vendor_login_image: bool

    @property
    def all_visible(self) -> bool:
        return self.contact_us_image and self.employer_login_image and self.vendor_login_image


# Song library ------------------------------------------------------------


@dataclass(frozen=True)
class SongRecord:
    """One song row as read from the table's form inputs."""

    title: str
    artist: str
    release_date: str
    price: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class FieldValidation:
    """Outcome of the required-field pass over song records."""

    valid: bool
    issues: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class FilterButtonsVisibility(_Report):
    filter: bool
    cancel: bool

    @property
    def all_visible(self) -> bool:
        return self.filter and self.cancel


@dataclass(frozen=True)
class TableHeadersVisibility(_Report):
    title: bool
    artist: bool
    release_date: bool
    price: bool

    @property
    def all_visible(self) -> bool:
        return self.title and self.artist and self.release_date and self.price


@dataclass(frozen=True)
class FormInputsVisibility(_Report):
    titles: bool
    artists: bool
    dates: bool
    prices: bool

    @property
    def all_visible(self) -> bool:
        return self.titles and self.artists and self.dates and self.prices


@dataclass(frozen=True)
class ActionButtonsVisibility(_Report):
    edit: bool
    delete: bool
    save: bool

    @property
    def all_visible(self) -> bool:
        return self.edit and self.delete and self.save


@dataclass(frozen=True)
class SongLibraryVisibility(_Report):
    """Comprehensive snapshot of the song library page."""

    header: bool
    title: bool
    date_filter: bool
    filter_buttons: FilterButtonsVisibility
    add_button: bool
    table: bool
    table_headers: TableHeadersVisibility
    song_rows: int
    form_inputs: FormInputsVisibility
    action_buttons: ActionButtonsVisibility

    @property
    def all_visible(self) -> bool:
        return (
            self.header
            and self.title
            and self.date_filter
            and self.filter_buttons.all_visible
            and self.add_button
            and self.table
            and self.table_headers.all_visible
            and self.song_rows > 0
            and self.form_inputs.all_visible
            and self.action_buttons.all_visible
        )


@dataclass(frozen=True)
class SortInfo:
    order: Optional[str]
    name: Optional[str]


@dataclass(frozen=True)
class TableSortingInfo:
    title: SortInfo
    artist: SortInfo
    release_date: SortInfo
    price: SortInfo

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ButtonState:
    visible: bool
    enabled: bool


@dataclass(frozen=True)
class ButtonStates:
    add_button: ButtonState
    filter_button: ButtonState
    cancel_button: ButtonState
    edit_buttons: list[ButtonState]
    delete_buttons: list[ButtonState]
    save_buttons: list[ButtonState]

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ImageLoadStatus:
    image_count: int
    loaded_images: int
    failed_images: int

    @property
    def all_images_loaded(self) -> bool:
        return self.failed_images == 0


# Smoke run ---------------------------------------------------------------


@dataclass(frozen=True)
class ScreenshotResult:
    """A saved screenshot: the generated filename and where it was written."""

    filename: str
    path: str

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class PageLoadMetrics:
    """Navigation timing read from the browser after the first load.

    Durations are in milliseconds. Paint times are measured from the start of
    navigation and are 0 when the browser reported no paint entry.
    """

    dom_content_loaded_ms: float
    load_complete_ms: float
    first_paint_ms: float
    first_contentful_paint_ms: float
    total_requests: int
    total_bytes: int

    @classmethod
    def from_timing(cls, timing: dict) -> "PageLoadMetrics":
        """Build metrics from the camelCase dict the timing script returns."""
        return cls(
            dom_content_loaded_ms=float(timing.get("domContentLoaded") or 0),
            load_complete_ms=float(timing.get("loadComplete") or 0),
            first_paint_ms=float(timing.get("firstPaint") or 0),
            first_contentful_paint_ms=float(timing.get("firstContentfulPaint") or 0),
            total_requests=int(timing.get("totalRequests") or 0),
            total_bytes=int(timing.get("totalBytes") or 0),
        )

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class SmokeRunResult:
    """Everything collected by one smoke run against the site."""

    url: str
    started_at: datetime = field(default_factory=datetime.now)
    ended_at: Optional[datetime] = None
    navigation_header: Optional[NavigationHeaderVisibility] = None
    submenus: Optional[SubmenuVisibility] = None
    header_links: Optional[HeaderLinksVisibility] = None
    song_library: Optional[SongLibraryVisibility] = None
    songs: list[SongRecord] = field(default_factory=list)
    validation: Optional[FieldValidation] = None
    initial_songs_loaded: Optional[bool] = None
    screenshots: list[ScreenshotResult] = field(default_factory=list)
    console_errors: list[str] = field(default_factory=list)
    page_load: Optional[PageLoadMetrics] = None

    @property
    def elapsed_seconds(self) -> float:
        if self.ended_at is None:
            return 0.0
        return (self.ended_at - self.started_at).total_seconds()

    @property
    def passed(self) -> bool:
        """True when every collected aggregate is clean.

        Console errors and load timing are reported but never fail a run.
        """
        reports = [
            self.navigation_header,
            self.submenus,
            self.header_links,
            self.song_library,
        ]
        if any(report is not None and not report.all_visible for report in reports):
            return False
        if self.validation is not None and not self.validation.valid:
            return False
        return self.initial_songs_loaded is not False
