import gzip
import json
import os
import pytest


def build_archive_content(records, total_lines=None, trailing_newline=True) -> bytes:
    """
    Serializza un record JSON per riga e, se richiesto, completa con righe
    vuote fino a `total_lines` righe complessive.
    """
    lines = [json.dumps(record) for record in records]
    if total_lines is not None:
        assert total_lines >= len(lines)
        lines += [""] * (total_lines - len(lines))
    content = "\n".join(lines)
    if trailing_newline and lines:
        content += "\n"
    return content.encode("utf-8")


@pytest.fixture
def make_archive(tmp_path):
    """
    Factory che crea un archivio orario gzip nella directory indicata
    (default: tmp_path) e ne restituisce il percorso.
    """
    def _make(name, records, directory=None, total_lines=None, trailing_newline=True):
        target_dir = directory or tmp_path
        os.makedirs(target_dir, exist_ok=True)
        path = os.path.join(str(target_dir), name)
        with gzip.open(path, "wb") as f:
            f.write(build_archive_content(records, total_lines, trailing_newline))
        return path

    return _make


