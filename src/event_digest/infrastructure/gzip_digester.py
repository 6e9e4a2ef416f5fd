import gzip
import logging
from typing import Optional, Union

from ..domain import services as domain_services
from ..domain.entities import Digest, UsernameSet
from ..domain.errors import ArchiveReadError
from ..domain.interfaces import IArchiveDigester
from ..domain.utils import parse_archive_hour


class GzipArchiveDigester(IArchiveDigester):
    """
    Calcola il Digest di un archivio gzip con due passate indipendenti
    sullo stesso file: conteggio righe, poi (dopo il riavvolgimento e la
    reinizializzazione del decompressore) estrazione degli username.
    """

    def __init__(
        self,
        buffer_size: int = domain_services.DEFAULT_BUFFER_SIZE,
        logger: Optional[Union[logging.Logger, logging.LoggerAdapter]] = None,
    ):
        self.buffer_size = buffer_size
        self.logger = logger or logging.getLogger(self.__class__.__name__)

    def digest(self, archive_path: str, users: UsernameSet) -> Digest:
        file_date = parse_archive_hour(archive_path)

        try:
            raw_file = open(archive_path, "rb")
        except OSError as error:
            raise ArchiveReadError(f"Impossibile aprire l'archivio: {error}", path=archive_path, stage="count") from error

        with raw_file:
            with gzip.GzipFile(fileobj=raw_file, mode="rb") as gz_file:
                count = domain_services.count_lines(gz_file, self.buffer_size, source=archive_path)

            try:
                raw_file.seek(0)
            except OSError as error:
                raise ArchiveReadError(f"Riavvolgimento dell'archivio fallito: {error}", path=archive_path, stage="extract") from error

            with gzip.GzipFile(fileobj=raw_file, mode="rb") as gz_file:
                decoded = domain_services.extract_usernames(gz_file, users, source=archive_path)

        self.logger.debug(f"{archive_path}: {count} righe, {decoded} eventi decodificati")
        return Digest(count=count, date=file_date)
