import os
from typing import List

import polars as pl

from ..domain.entities import Digest, UsernameSet
from ..domain.errors import CatalogExportError
from ..domain.interfaces import ICatalogExporter
from ..domain.services import sort_digests


class ParquetCatalogExporter(ICatalogExporter):
    """
    Esporta riepilogo e utenti noti in Parquet, formato letto dal layer
    web delle statistiche.
    """

    def __init__(self, catalog_dir: str):
        self.catalog_dir = catalog_dir

    @property
    def summary_path(self) -> str:
        return os.path.join(self.catalog_dir, "summary.parquet")

    @property
    def users_path(self) -> str:
        return os.path.join(self.catalog_dir, "users.parquet")

    def export(self, digests: List[Digest], users: UsernameSet) -> None:
        ordered = sort_digests(digests)
        summary_df = pl.DataFrame(
            {
                "date": [digest.date for digest in ordered],
                "count": [digest.count for digest in ordered],
            },
            schema={"date": pl.Datetime(time_unit="us", time_zone="UTC"), "count": pl.Int64},
        )
        users_df = pl.DataFrame({"username": sorted(users)}, schema={"username": pl.Utf8})

        try:
            os.makedirs(self.catalog_dir, exist_ok=True)
            summary_df.write_parquet(self.summary_path, compression="zstd")
            users_df.write_parquet(self.users_path, compression="zstd")
        except (OSError, pl.exceptions.PolarsError) as error:
            raise CatalogExportError(f"Export del catalogo fallito: {error}", path=self.catalog_dir) from error
