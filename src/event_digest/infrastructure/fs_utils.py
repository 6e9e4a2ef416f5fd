import glob
import os
import tempfile

from ..domain.errors import DigestPipelineError


def folder_size_mb(path: str) -> float:
    total_bytes = 0
    if not os.path.exists(path):
        return 0.0
    for root, _, files in os.walk(path):
        for filename in files:
            try:
                total_bytes += os.path.getsize(os.path.join(root, filename))
            except OSError:
                pass
    return total_bytes / (1024 * 1024)


def list_archive_files(base_dir: str, pattern: str) -> list[str]:
    """
    Elenca gli archivi che corrispondono a `pattern` in `base_dir`.
    L'ordine è lessicografico: non coincide necessariamente con quello cronologico.
    """
    if not os.path.isdir(base_dir):
        raise DigestPipelineError(
            "Directory degli eventi inesistente o non accessibile.", path=base_dir, stage="enumerate"
        )
    return sorted(glob.glob(os.path.join(glob.escape(base_dir), pattern)))


def atomic_write_text(target_path: str, content: str) -> None:
    """
    Scrive `content` in un file temporaneo nella stessa directory e lo
    sostituisce atomicamente a `target_path`.
    """
    dir_path = os.path.dirname(os.path.abspath(target_path))
    fd, tmp_path = tempfile.mkstemp(prefix=".tmp-", dir=dir_path)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp_file:
            tmp_file.write(content)
            tmp_file.flush()
            os.fsync(tmp_file.fileno())
        os.chmod(tmp_path, 0o664)
        os.replace(tmp_path, target_path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
