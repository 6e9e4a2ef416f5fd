from .entities import Digest, UsernameSet, DigestRunReport
from .errors import (
    DigestPipelineError,
    FilenameParseError,
    ArchiveReadError,
    ArchiveDecodeError,
    CacheArtifactError,
    SummaryWriteError,
    KnownUsersError,
    CatalogExportError,
)
from .interfaces import (
    IArchiveDigester,
    IDigestCache,
    IKnownUsersStore,
    ISummaryWriter,
    IArchiveCatalog,
    ICatalogExporter,
)
from .services import count_lines, extract_usernames, sort_digests
from .types import DigestCacheStatus, DigestStage
from .utils import parse_archive_hour

__all__ = [
    "Digest",
    "UsernameSet",
    "DigestRunReport",
    "DigestPipelineError",
    "FilenameParseError",
    "ArchiveReadError",
    "ArchiveDecodeError",
    "CacheArtifactError",
    "SummaryWriteError",
    "KnownUsersError",
    "CatalogExportError",
    "IArchiveDigester",
    "IDigestCache",
    "IKnownUsersStore",
    "ISummaryWriter",
    "IArchiveCatalog",
    "ICatalogExporter",
    "count_lines",
    "extract_usernames",
    "sort_digests",
    "DigestCacheStatus",
    "DigestStage",
    "parse_archive_hour",
]
