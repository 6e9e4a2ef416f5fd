import pytest
from unittest.mock import Mock
from datetime import datetime, timezone

from src.event_digest.application.use_cases import DigestService
from src.event_digest.domain.entities import Digest, UsernameSet
from src.event_digest.domain.errors import ArchiveDecodeError
from src.event_digest.domain.interfaces import (
    IArchiveCatalog,
    IArchiveDigester,
    ICatalogExporter,
    IDigestCache,
    IKnownUsersStore,
    ISummaryWriter,
)

JAN_1 = datetime(2024, 1, 1, 0, tzinfo=timezone.utc)
JAN_2 = datetime(2024, 1, 2, 0, tzinfo=timezone.utc)


@pytest.fixture
def mock_deps():
    catalog = Mock(spec=IArchiveCatalog)
    cache = Mock(spec=IDigestCache)
    digester = Mock(spec=IArchiveDigester)
    users_store = Mock(spec=IKnownUsersStore)
    writer = Mock(spec=ISummaryWriter)

    catalog.list_archives.return_value = []
    cache.claim.return_value = ("MISS", None)
    users_store.load.return_value = UsernameSet()

    return catalog, cache, digester, users_store, writer


def make_service(deps, exporter=None):
    catalog, cache, digester, users_store, writer = deps
    return DigestService(catalog, cache, digester, users_store, writer, catalog_exporter=exporter)


class TestDigestArchive:
    def test_cache_hit_skips_extraction(self, mock_deps):
        _, cache, digester, _, _ = mock_deps
        cached = Digest(count=10, date=JAN_1)
        cache.claim.return_value = ("HIT", cached)

        status, digest = make_service(mock_deps).digest_archive("/ev/2024-01-01-0.json.gz", UsernameSet())

        assert status == "HIT"
        assert digest is cached
        digester.digest.assert_not_called()
        cache.store.assert_not_called()

    def test_cache_miss_computes_and_stores(self, mock_deps):
        _, cache, digester, _, _ = mock_deps
        computed = Digest(count=4, date=JAN_1)
        digester.digest.return_value = computed
        users = UsernameSet()

        status, digest = make_service(mock_deps).digest_archive("/ev/2024-01-01-0.json.gz", users)

        assert status == "MISS"
        assert digest == computed
        digester.digest.assert_called_once_with("/ev/2024-01-01-0.json.gz", users)
        cache.store.assert_called_once_with("/ev/2024-01-01-0.json.gz", computed)

    def test_incomplete_artifact_is_recomputed(self, mock_deps):
        """Un artefatto lasciato vuoto da un crash viene ricalcolato e sovrascritto."""
        _, cache, digester, _, _ = mock_deps
        cache.claim.return_value = ("INCOMPLETE", None)
        digester.digest.return_value = Digest(count=2, date=JAN_1)

        status, _ = make_service(mock_deps).digest_archive("/ev/2024-01-01-0.json.gz", UsernameSet())

        assert status == "INCOMPLETE"
        digester.digest.assert_called_once()
        cache.store.assert_called_once()


class TestRun:
    def test_new_users_are_diff_against_snapshot(self, mock_deps):
        catalog, _, digester, users_store, writer = mock_deps
        catalog.list_archives.return_value = ["/ev/2024-01-02-0.json.gz", "/ev/2024-01-01-0.json.gz"]
        users_store.load.return_value = UsernameSet(["alice", "bob"])

        def fake_digest(path, users):
            if "01-02" in path:
                users.add("Carol")
                return Digest(count=20, date=JAN_2)
            users.add("alice")
            users.add("dave")
            return Digest(count=10, date=JAN_1)

        digester.digest.side_effect = fake_digest

        report = make_service(mock_deps).run()

        assert set(report.new_users) == {"carol", "dave"}
        assert report.total_events == 30
        assert report.status_counts["MISS"] == 2

        written = writer.write_summary.call_args[0][0]
        assert [d.date for d in written] == [JAN_1, JAN_2]

        appended = users_store.append.call_args[0][0]
        assert set(appended) == {"carol", "dave"}

    def test_cached_archives_contribute_no_users(self, mock_deps):
        catalog, cache, digester, users_store, _ = mock_deps
        catalog.list_archives.return_value = ["/ev/2024-01-01-0.json.gz"]
        cache.claim.return_value = ("HIT", Digest(count=10, date=JAN_1))

        report = make_service(mock_deps).run()

        digester.digest.assert_not_called()
        assert len(report.new_users) == 0
        assert report.status_counts["HIT"] == 1
        users_store.append.assert_called_once()

    def test_fatal_error_aborts_before_summary(self, mock_deps):
        catalog, _, digester, users_store, writer = mock_deps
        catalog.list_archives.return_value = ["/ev/2024-01-01-0.json.gz", "/ev/2024-01-01-1.json.gz"]
        digester.digest.side_effect = ArchiveDecodeError("JSON non valido", path="/ev/2024-01-01-0.json.gz")

        with pytest.raises(ArchiveDecodeError) as exc_info:
            make_service(mock_deps).run()

        assert exc_info.value.path == "/ev/2024-01-01-0.json.gz"
        assert digester.digest.call_count == 1
        writer.write_summary.assert_not_called()
        users_store.append.assert_not_called()

    def test_catalog_export_when_configured(self, mock_deps):
        catalog, _, digester, users_store, _ = mock_deps
        catalog.list_archives.return_value = ["/ev/2024-01-01-0.json.gz"]
        digester.digest.return_value = Digest(count=1, date=JAN_1)
        exporter = Mock(spec=ICatalogExporter)

        make_service(mock_deps, exporter=exporter).run()

        exporter.export.assert_called_once()
        exported_digests = exporter.export.call_args[0][0]
        assert exported_digests == [Digest(count=1, date=JAN_1)]
        # Gli utenti esportati sono quelli riletti dopo l'append.
        assert users_store.load.call_count == 2


class TestDatasetInfo:
    def test_info_with_summary(self, mock_deps):
        catalog, cache, _, users_store, writer = mock_deps
        catalog.list_archives.return_value = ["a", "b", "c"]
        catalog.location.return_value = "/data/events"
        catalog.size_mb.return_value = 1.5
        cache.count_cached.return_value = 2
        users_store.load.return_value = UsernameSet(["x", "y"])
        writer.read_summary.return_value = [Digest(count=5, date=JAN_2), Digest(count=7, date=JAN_1)]

        info = make_service(mock_deps).get_dataset_info()

        assert info["path"] == "/data/events"
        assert info["archives"] == 3
        assert info["cached"] == 2
        assert info["known_users"] == 2
        assert info["summary"] == {"first_hour": JAN_1, "last_hour": JAN_2, "hours": 2, "events": 12}

    def test_info_without_summary(self, mock_deps):
        _, _, _, _, writer = mock_deps
        writer.read_summary.return_value = None

        info = make_service(mock_deps).get_dataset_info()

        assert info["summary"] is None
        assert info["archives"] == 0
