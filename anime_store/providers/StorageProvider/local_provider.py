import os
import stat
import tempfile
from pathlib import Path

class LocalStorageProvider:
    """Reads and atomically replaces a single text document on local disk."""
    def __init__(self, path: str):
        self.path = Path(path)

    def read_text(self) -> str:
        return self.path.read_text(encoding="utf-8")

    def write_text(self, content: str) -> None:
        # write next to the target then rename, readers see old or new, never half
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            # mkstemp creates 0600, keep the document's own permissions across the rename
            if self.path.exists():
                os.chmod(tmp_name, stat.S_IMODE(os.stat(self.path).st_mode))
            os.replace(tmp_name, self.path)
        except BaseException:
            if os.path.exists(tmp_name):
                os.remove(tmp_name)
            raise

    def exists(self) -> bool:
        return self.path.exists()
