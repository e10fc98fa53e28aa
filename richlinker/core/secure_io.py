"""Owner-only file helpers for richlinker state files.

The activation cache records which pages were copied, so the state
directory and the files in it are kept private to the user.
"""

import os
import stat
import tempfile
from pathlib import Path

PRIVATE_DIR_MODE: int = stat.S_IRWXU  # 0o700
PRIVATE_FILE_MODE: int = stat.S_IRUSR | stat.S_IWUSR  # 0o600


def secure_mkdir(path: Path) -> None:
    """Ensure path exists as a 0o700 directory.

    Missing parents are created as well. Only the leaf is chmodded, so an
    existing ~ or /tmp keeps its mode.
    """
    path.mkdir(mode=PRIVATE_DIR_MODE, parents=True, exist_ok=True)
    os.chmod(path, PRIVATE_DIR_MODE)


def secure_write_atomic(path: Path, content: str | bytes) -> None:
    """Replace path's content in one step, leaving it 0o600.

    The data goes to a uniquely named sibling first and is then renamed over
    path, so a concurrent reader sees the old file or the new one.
    """
    data = content.encode("utf-8") if isinstance(content, str) else content

    # mkstemp creates the file 0o600
    fd, temp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_name, path)
    except BaseException:
        Path(temp_name).unlink(missing_ok=True)
        raise
    os.chmod(path, PRIVATE_FILE_MODE)
