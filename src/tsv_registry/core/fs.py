import os
import tempfile
from pathlib import Path


def ensure_dir(path: Path) -> Path:
    path = Path(path)
    path.mkdir(parents=True, exist_ok=True)
    return path


def relpath_posix(path: Path, base_dir: Path) -> str:
    return Path(path).relative_to(base_dir).as_posix()


def fsync_dir(directory: Path) -> None:
    """
    Flush a directory entry after a rename. No-op where directories can't be opened.
    """
    try:
        dir_fd = os.open(directory, os.O_RDONLY)
    except OSError:
        return
    try:
        os.fsync(dir_fd)
    except OSError:
        pass
    finally:
        os.close(dir_fd)


def atomic_write_bytes(path: Path, data: bytes, *, mode: int = 0o644) -> None:
    """
    Replace `path` with `data`; readers see either the old or the new file.

    The temp file is created beside the target so `os.replace` never crosses
    filesystems.
    """
    target = Path(path)
    ensure_dir(target.parent)

    tmp_path: Path | None = None
    try:
        with tempfile.NamedTemporaryFile(
            "wb",
            dir=target.parent,
            prefix=f".{target.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, target)
    except BaseException:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise

    fsync_dir(target.parent)


def atomic_write_text(path: Path, text: str, *, encoding: str = "utf-8", mode: int = 0o644) -> None:
    atomic_write_bytes(path, text.encode(encoding), mode=mode)
