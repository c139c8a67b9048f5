"""Export file writing with write-then-rename."""

from pathlib import Path


def atomic_write_bytes(path: Path | str, data: bytes) -> None:
    """Write an export buffer so readers never see a partial file.

    Missing parent directories are created. On failure the temporary file is
    removed and any existing file at ``path`` is left untouched.

    Example:
        atomic_write_bytes("emails_export.xlsx", export_table(records))
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(path.name + ".tmp")

    try:
        tmp_path.write_bytes(data)
        tmp_path.replace(path)
    except Exception:
        tmp_path.unlink(missing_ok=True)
        raise
