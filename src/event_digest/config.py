from dataclasses import dataclass
from typing import Optional
import os

DEFAULT_EVENTS_PATH = "data/events"
DEFAULT_BUFFER_SIZE = 1024 * 1024


@dataclass
class DigestConfig:
    """
    Parametri di configurazione della pipeline di digest e percorsi
    degli artefatti prodotti. Condivisa tra Presentation e Infrastructure.
    """

    # --- Directory principali ---
    events_directory: str                     # Directory con gli archivi orari *.json.gz
    catalog_directory: Optional[str] = None   # Se impostata, destinazione dell'export Parquet

    # --- Lettura degli archivi ---
    buffer_size: int = DEFAULT_BUFFER_SIZE    # Dimensione dei blocchi per il conteggio righe

    ARCHIVE_GLOB = "*.json.gz"
    DIGEST_SUFFIX = ".digest.json"

    @classmethod
    def from_env(cls, events_directory: Optional[str] = None, catalog_directory: Optional[str] = None) -> "DigestConfig":
        """
        Costruisce la configurazione. Gli argomenti espliciti hanno priorità
        sulle variabili d'ambiente GHC_EVENTS_PATH, GHC_CATALOG_PATH e
        GHC_DIGEST_BUFFER_SIZE.
        """
        raw_buffer = os.environ.get("GHC_DIGEST_BUFFER_SIZE")
        buffer_size = int(raw_buffer) if raw_buffer else DEFAULT_BUFFER_SIZE
        if buffer_size <= 0:
            raise ValueError(f"GHC_DIGEST_BUFFER_SIZE deve essere positivo, trovato {buffer_size}.")

        return cls(
            events_directory=events_directory or os.environ.get("GHC_EVENTS_PATH", DEFAULT_EVENTS_PATH),
            catalog_directory=catalog_directory or os.environ.get("GHC_CATALOG_PATH") or None,
            buffer_size=buffer_size,
        )

    # ======================================================
    #                 Percorsi degli artefatti
    # ======================================================

    @property
    def summary_file(self) -> str:
        """Elenco completo dei Digest, ordinato per data e riscritto a ogni esecuzione."""
        return os.path.join(self.events_directory, "summary.json")

    @property
    def users_file(self) -> str:
        """Username già scoperti, uno per riga, in sola aggiunta."""
        return os.path.join(self.events_directory, "users.txt")

    def digest_path_for(self, archive_path: str) -> str:
        return f"{archive_path}{self.DIGEST_SUFFIX}"
