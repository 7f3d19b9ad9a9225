import pytest
from pydantic import ValidationError

from app.config.settings import ContentSettings, GeocoderSettings, MapSettings, Settings


def test_defaults_match_public_services():
    settings = Settings()

    assert settings.geocoder.api_url == "https://nominatim.openstreetmap.org/search"
    assert settings.content.search_radius_m == 10000
    assert settings.content.page_size == 50
    assert settings.map.default_latitude == 51.505
    assert settings.map.default_longitude == -0.09
    assert settings.map.focus_zoom == 13


@pytest.mark.parametrize("settings_class", [GeocoderSettings, ContentSettings])
@pytest.mark.parametrize("user_agent", ["", "   "])
def test_upstream_clients_require_identifier(settings_class, user_agent):
    with pytest.raises(ValidationError):
        settings_class(user_agent=user_agent)


def test_client_identifier_is_trimmed():
    assert ContentSettings(user_agent="  Explorer/1.0  ").user_agent == "Explorer/1.0"


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("GEOCODER_USER_AGENT", "ExplorerTest/2.0 (ops@example.org)")
    monkeypatch.setenv("CONTENT_PAGE_SIZE", "20")
    monkeypatch.setenv("MAP_FOCUS_ZOOM", "15")

    assert GeocoderSettings().user_agent == "ExplorerTest/2.0 (ops@example.org)"
    assert ContentSettings().page_size == 20
    assert MapSettings().focus_zoom == 15


def test_search_radius_is_capped():
    with pytest.raises(ValidationError):
        ContentSettings(search_radius_m=20000)


def test_environment_name_is_normalized():
    assert Settings(environment="PRODUCTION").is_production()
