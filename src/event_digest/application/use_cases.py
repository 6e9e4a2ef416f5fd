import logging
import os
from typing import Tuple, Dict, Any, List, Optional, Union

from .interfaces import IDigestUseCase
from ..domain.entities import Digest, DigestRunReport, UsernameSet
from ..domain.interfaces import (
    IArchiveCatalog,
    IArchiveDigester,
    ICatalogExporter,
    IDigestCache,
    IKnownUsersStore,
    ISummaryWriter,
)
from ..domain.services import sort_digests
from ..domain.types import DigestCacheStatus


class DigestService(IDigestUseCase):
    """
    Orchestrazione sequenziale della pipeline: un archivio alla volta,
    un unico UsernameSet condiviso per riferimento tra tutti i passi.
    """

    def __init__(
        self,
        archive_catalog: IArchiveCatalog,
        digest_cache: IDigestCache,
        digester: IArchiveDigester,
        users_store: IKnownUsersStore,
        summary_writer: ISummaryWriter,
        catalog_exporter: Optional[ICatalogExporter] = None,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None
    ):
        self.archives = archive_catalog
        self.cache = digest_cache
        self.digester = digester
        self.users_store = users_store
        self.summary_writer = summary_writer
        self.catalog_exporter = catalog_exporter
        self.logger = logger or logging.getLogger(__name__)

    def digest_archive(self, archive_path: str, users: UsernameSet) -> Tuple[DigestCacheStatus, Digest]:
        status, cached = self.cache.claim(archive_path)

        if status == "HIT" and cached is not None:
            # Un archivio già digerito non contribuisce più username.
            self.logger.info(f"Digest in cache per {os.path.basename(archive_path)}: {cached.count}")
            return status, cached

        digest = self.digester.digest(archive_path, users)
        self.cache.store(archive_path, digest)
        self.logger.info(f"Digest calcolato per {digest.date.isoformat()}: {digest.count} righe")
        return status, digest

    def run(self) -> DigestRunReport:
        self.logger.info("Lettura degli utenti noti...")
        users = self.users_store.load()
        existing_users = users.clone()
        self.logger.info(f"Trovati {len(existing_users)} utenti esistenti.")

        archive_paths = self.archives.list_archives()
        self.logger.info(f"Archivi da elaborare: {len(archive_paths)}")

        report = DigestRunReport()
        for archive_path in archive_paths:
            status, digest = self.digest_archive(archive_path, users)
            report.record(status, digest)
            self.logger.info(f"Utenti attuali: {len(users)} (eventi totali: {report.total_events})")

        self.logger.info("Calcolo dei nuovi utenti...")
        report.new_users = users.difference(existing_users)
        self.logger.info(f"Completato (trovati {len(report.new_users)}).")

        self._make_summary(report.digests, report.new_users)

        if self.catalog_exporter is not None:
            self.logger.info("Export del catalogo Parquet...")
            self.catalog_exporter.export(report.digests, self.users_store.load())

        self.logger.info(
            f"Esecuzione completata: archivi={len(report.digests)}, "
            f"cache={report.status_counts['HIT']}, calcolati={report.status_counts['MISS']}, "
            f"ricalcolati={report.status_counts['INCOMPLETE']}, nuovi utenti={len(report.new_users)}"
        )
        return report

    def _make_summary(self, digests: List[Digest], new_users: UsernameSet) -> None:
        self.summary_writer.write_summary(sort_digests(digests))
        self.logger.info(f"Scrittura di {len(new_users)} utenti.")
        self.users_store.append(new_users)

    def get_dataset_info(self) -> Dict[str, Any]:
        archive_paths = self.archives.list_archives()
        info: Dict[str, Any] = {
            "path": self.archives.location(),
            "archives": len(archive_paths),
            "cached": self.cache.count_cached(archive_paths),
            "known_users": len(self.users_store.load()),
            "size_mb": self.archives.size_mb(),
            "summary": None,
        }

        digests = self.summary_writer.read_summary()
        if digests:
            ordered = sort_digests(digests)
            info["summary"] = {
                "first_hour": ordered[0].date,
                "last_hour": ordered[-1].date,
                "hours": len(ordered),
                "events": sum(digest.count for digest in ordered),
            }
        return info
