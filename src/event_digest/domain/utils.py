import os
from datetime import datetime, timezone

from .errors import FilenameParseError

_FIELD_WIDTHS = (("anno", 4, 4), ("mese", 2, 2), ("giorno", 2, 2), ("ora", 1, 2))


def parse_archive_hour(archive_path: str) -> datetime:
    """
    Estrae l'ora di riferimento (UTC) dal nome di un archivio orario.

    Il nome base, fino al primo punto, deve essere composto esattamente da
    quattro campi numerici separati da '-' (anno, mese, giorno, ora), ad es.
    `2024-01-05-9.json.gz` -> 2024-01-05T09:00:00Z.

    Raises:
        FilenameParseError: se il nome non rispetta il formato o non
            rappresenta un'ora di calendario valida.
    """
    stem = os.path.basename(archive_path).split(".", 1)[0]
    parts = stem.split("-")

    if len(parts) != len(_FIELD_WIDTHS):
        raise FilenameParseError(
            f"Nome archivio '{stem}' non conforme: attesi 4 campi YYYY-MM-DD-H, trovati {len(parts)}.",
            path=archive_path,
        )

    values = []
    for (label, min_width, max_width), raw in zip(_FIELD_WIDTHS, parts):
        if not raw.isascii() or not raw.isdigit() or not (min_width <= len(raw) <= max_width):
            raise FilenameParseError(
                f"Campo '{label}' non valido nel nome archivio: '{raw}'.",
                path=archive_path,
            )
        values.append(int(raw))

    year, month, day, hour = values
    try:
        return datetime(year, month, day, hour, tzinfo=timezone.utc)
    except ValueError as error:
        raise FilenameParseError(
            f"Il nome archivio '{stem}' non rappresenta un'ora valida: {error}",
            path=archive_path,
        ) from error
