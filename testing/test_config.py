"""Tests for environment-driven configuration."""

from enrichment.config import get_log_dir, is_dev_mode
from enrichment.images import ImageConfig


class TestImageConfig:
    """Tests for ImageConfig environment loading."""

    def test_reads_credentials(self, monkeypatch):
        monkeypatch.setenv("TMDB_API_KEY", "tmdb")
        monkeypatch.setenv("IGDB_CLIENT_ID", "cid")
        monkeypatch.setenv("IGDB_CLIENT_SECRET", "secret")

        config = ImageConfig()

        assert config.tmdb_api_key == "tmdb"
        assert config.tmdb_available
        assert config.igdb_available

    def test_blank_values_unset(self, monkeypatch):
        monkeypatch.setenv("UNSPLASH_ACCESS_KEY", "   ")
        monkeypatch.setenv("SPOTIFY_CLIENT_ID", "id")
        monkeypatch.setenv("SPOTIFY_CLIENT_SECRET", "")

        config = ImageConfig()

        assert config.unsplash_access_key is None
        assert not config.unsplash_available
        assert not config.spotify_available

    def test_books_available_without_key(self, monkeypatch):
        monkeypatch.delenv("GOOGLE_BOOKS_API_KEY", raising=False)
        assert ImageConfig().google_books_available

    def test_numeric_settings(self, monkeypatch):
        monkeypatch.setenv("IMAGE_TIMEOUT", "3.5")
        monkeypatch.setenv("GOOGLE_PLACES_PHOTO_MAX_WIDTH", "1200")
        monkeypatch.delenv("IMAGE_VALIDATION_TIMEOUT", raising=False)

        config = ImageConfig()

        assert config.timeout == 3.5
        assert config.places_photo_max_width == 1200
        assert config.validation_timeout == 5.0

    def test_blank_numeric_settings_use_defaults(self, monkeypatch):
        monkeypatch.setenv("IMAGE_TIMEOUT", "")
        monkeypatch.setenv("IMAGE_VALIDATION_TIMEOUT", "  ")
        monkeypatch.setenv("GOOGLE_PLACES_PHOTO_MAX_WIDTH", "")

        config = ImageConfig()

        assert config.timeout == 10.0
        assert config.validation_timeout == 5.0
        assert config.places_photo_max_width == 800

    def test_explicit_values_win(self, monkeypatch):
        monkeypatch.setenv("TMDB_API_KEY", "from-env")
        assert ImageConfig(tmdb_api_key="explicit").tmdb_api_key == "explicit"


class TestServiceConfig:
    """Tests for enrichment.config helpers."""

    def test_dev_mode(self, monkeypatch):
        monkeypatch.setenv("ENRICHMENT_MODE", "DEV")
        assert is_dev_mode()
        monkeypatch.setenv("ENRICHMENT_MODE", "prod")
        assert not is_dev_mode()

    def test_log_dir_created(self, monkeypatch, tmp_path):
        target = tmp_path / "nested" / "logs"
        monkeypatch.setenv("ENRICHMENT_LOG_DIR", str(target))

        assert get_log_dir() == target
        assert target.is_dir()
