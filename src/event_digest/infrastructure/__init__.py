from .archive_catalog import LocalArchiveCatalog
from .catalog_exporter import ParquetCatalogExporter
from .digest_cache import SidecarDigestCache
from .gzip_digester import GzipArchiveDigester
from .known_users_store import TextKnownUsersStore
from .summary_writer import JsonSummaryWriter
from .logging_config import configure_logging, LayerLoggerAdapter

__all__ = [
    "LocalArchiveCatalog",
    "ParquetCatalogExporter",
    "SidecarDigestCache",
    "GzipArchiveDigester",
    "TextKnownUsersStore",
    "JsonSummaryWriter",
    "configure_logging",
    "LayerLoggerAdapter",
]
