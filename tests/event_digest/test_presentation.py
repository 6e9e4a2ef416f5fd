import pytest
from unittest.mock import Mock
from datetime import datetime, timezone

from src.event_digest.config import DigestConfig
from src.event_digest.domain.entities import Digest, DigestRunReport, UsernameSet
from src.event_digest.presentation.controllers import DigestController


class TestDigestController:
    def test_run_digest_delegates_to_use_case(self):
        service = Mock()
        logger = Mock()
        report = DigestRunReport()
        report.record("MISS", Digest(count=10, date=datetime(2024, 1, 1, tzinfo=timezone.utc)))
        report.new_users = UsernameSet(["alice"])
        service.run.return_value = report

        result = DigestController(service, logger).run_digest()

        assert result is report
        service.run.assert_called_once_with()
        assert logger.info.call_count == 2

    def test_show_info_without_summary(self):
        service = Mock()
        logger = Mock()
        service.get_dataset_info.return_value = {
            "path": "/data/events", "archives": 0, "cached": 0, "known_users": 0, "size_mb": 0.0, "summary": None,
        }

        DigestController(service, logger).show_info()

        service.run.assert_not_called()
        messages = [call.args[0] for call in logger.info.call_args_list]
        assert any("Nessun riepilogo" in message for message in messages)
        assert any("/data/events" in message for message in messages)

    def test_show_info_with_summary(self):
        service = Mock()
        logger = Mock()
        service.get_dataset_info.return_value = {
            "path": "/data/events", "archives": 2, "cached": 2, "known_users": 7, "size_mb": 0.1,
            "summary": {
                "first_hour": datetime(2024, 1, 1, 0, tzinfo=timezone.utc),
                "last_hour": datetime(2024, 1, 1, 1, tzinfo=timezone.utc),
                "hours": 2,
                "events": 30,
            },
        }

        DigestController(service, logger).show_info()

        messages = [call.args[0] for call in logger.info.call_args_list]
        assert any("2024-01-01-00 -> 2024-01-01-01" in message for message in messages)


class TestDigestConfig:
    def test_from_env_defaults(self, monkeypatch):
        monkeypatch.delenv("GHC_EVENTS_PATH", raising=False)
        monkeypatch.delenv("GHC_CATALOG_PATH", raising=False)
        monkeypatch.delenv("GHC_DIGEST_BUFFER_SIZE", raising=False)

        config = DigestConfig.from_env()

        assert config.events_directory == "data/events"
        assert config.catalog_directory is None
        assert config.buffer_size == 1024 * 1024

    def test_arguments_override_env(self, monkeypatch):
        monkeypatch.setenv("GHC_EVENTS_PATH", "/env/events")
        monkeypatch.setenv("GHC_CATALOG_PATH", "/env/catalog")

        config = DigestConfig.from_env(events_directory="/cli/events")

        assert config.events_directory == "/cli/events"
        assert config.catalog_directory == "/env/catalog"
        assert config.summary_file == "/cli/events/summary.json"
        assert config.users_file == "/cli/events/users.txt"
        assert config.digest_path_for("/cli/events/2024-01-01-0.json.gz") == "/cli/events/2024-01-01-0.json.gz.digest.json"

    def test_invalid_buffer_size(self, monkeypatch):
        monkeypatch.setenv("GHC_DIGEST_BUFFER_SIZE", "0")
        with pytest.raises(ValueError):
            DigestConfig.from_env()
