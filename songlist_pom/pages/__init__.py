"""Page Object Model for the song library site."""
from .base_page import BasePage
from .header_links_page import HeaderLinksPage
from .navigation_header_page import NavigationHeaderPage
from .song_library_page import SongLibraryPage

__all__ = ['BasePage', 'HeaderLinksPage', 'NavigationHeaderPage', 'SongLibraryPage']
