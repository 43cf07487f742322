"""Shared fixtures for page object tests."""
import pytest

from tests.fakes import (
    SITE_URL,
    FakePage,
    full_site_dom,
    header_links_dom,
    navigation_header_dom,
    song_library_dom,
)


@pytest.fixture
def header_page():
    """Fake page showing a complete navigation header."""
    return FakePage(navigation_header_dom(), url=SITE_URL)


@pytest.fixture
def links_page():
    """Fake page showing the header link bar."""
    return FakePage(header_links_dom(), url=SITE_URL)


@pytest.fixture
def library_page():
    """Fake page showing the song table with the five initial songs."""
    return FakePage(song_library_dom(), url=SITE_URL)


@pytest.fixture
def site_page():
    """Fake page with every section rendered."""
    return FakePage(full_site_dom(), url=SITE_URL)


@pytest.fixture
def empty_page():
    """Fake page with nothing rendered."""
    return FakePage(url="about:blank")
