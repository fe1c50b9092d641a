"""
Service Layer Tests
"""

import json

import pytest

from conftest import StaticCatalogSource


class TestConfigService:
    """Configuration Service Tests"""

    @pytest.fixture(autouse=True)
    def _config_path(self, tmp_path):
        self._config_path = str(tmp_path / "config.yaml")

    def test_singleton(self):
        """Test singleton pattern."""
        from services.config_service import ConfigService

        config1 = ConfigService(self._config_path)
        config2 = ConfigService(self._config_path)
        assert config1 is config2

    def test_get_default(self):
        """Test getting default configuration."""
        from services.config_service import ConfigService

        config = ConfigService(self._config_path)

        assert config.get("queue.target_length") == 10
        assert config.get("queue.history_limit") == 10
        assert config.get("catalog.source") == "songs.json"
        assert config.get("missing.key", "fallback") == "fallback"

    def test_set_and_get(self):
        """Test set and get operations."""
        from services.config_service import ConfigService

        config = ConfigService(self._config_path)
        config.set("test.value", 123)

        assert config.get("test.value") == 123

    def test_user_file_overrides_defaults(self):
        """Values from the YAML file are deep-merged over the defaults."""
        from services.config_service import ConfigService

        with open(self._config_path, "w", encoding="utf-8") as f:
            f.write("queue:\n  target_length: 5\n")

        config = ConfigService(self._config_path)

        assert config.get("queue.target_length") == 5
        assert config.get("queue.history_limit") == 10

    def test_invalid_yaml_falls_back_to_defaults(self):
        from services.config_service import ConfigService

        with open(self._config_path, "w", encoding="utf-8") as f:
            f.write("queue: [unterminated\n")

        config = ConfigService(self._config_path)

        assert config.get("queue.target_length") == 10

    def test_save_and_reload(self):
        from services.config_service import ConfigService

        config = ConfigService(self._config_path)
        config.set("catalog.source", "https://example.com/songs.json")
        assert config.save() is True

        ConfigService.reset_instance()
        reloaded = ConfigService(self._config_path)
        assert reloaded.get("catalog.source") == "https://example.com/songs.json"

    def test_reset(self):
        from services.config_service import ConfigService

        config = ConfigService(self._config_path)
        config.set("queue.target_length", 3)
        config.reset()

        assert config.get("queue.target_length") == 10


class TestCatalogService:
    """Catalog Service Tests"""

    def _records(self):
        return [
            {"id": 1, "title": "A", "artist": "X", "album": "L", "genre": "rock", "coverImage": "a.jpg"},
            {"id": 2, "title": "B", "artist": "Y", "album": "M", "genre": "jazz", "coverImage": "b.jpg"},
        ]

    def test_load(self):
        from services.catalog_service import CatalogService

        songs = CatalogService(StaticCatalogSource(self._records())).load()

        assert isinstance(songs, tuple)
        assert [s.id for s in songs] == [1, 2]
        assert songs[1].genre == "jazz"

    def test_duplicate_ids_rejected(self):
        from core.errors import CatalogFormatError
        from services.catalog_service import CatalogService

        records = self._records() + [dict(self._records()[0])]

        with pytest.raises(CatalogFormatError, match="Duplicate song id 1"):
            CatalogService(StaticCatalogSource(records)).load()

    def test_malformed_record_reports_index(self):
        from core.errors import CatalogFormatError
        from services.catalog_service import CatalogService

        records = self._records() + [{"id": "three"}]

        with pytest.raises(CatalogFormatError, match="index 2"):
            CatalogService(StaticCatalogSource(records)).load()

    def test_source_error_propagates(self):
        from core.errors import CatalogLoadError
        from services.catalog_service import CatalogService

        source = StaticCatalogSource(error=CatalogLoadError("Failed to fetch songs"))

        with pytest.raises(CatalogLoadError, match="Failed to fetch songs"):
            CatalogService(source).load()

    def test_from_config(self, tmp_path):
        from core.catalog_source import JsonFileCatalogSource
        from services.catalog_service import CatalogService
        from services.config_service import ConfigService

        catalog_path = tmp_path / "songs.json"
        catalog_path.write_text(json.dumps(self._records()), encoding="utf-8")

        config = ConfigService(str(tmp_path / "config.yaml"))
        config.set("catalog.source", str(catalog_path))

        service = CatalogService.from_config(config)

        assert isinstance(service.source, JsonFileCatalogSource)
        assert len(service.load()) == 2
