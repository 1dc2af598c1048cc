import base64
from pathlib import Path

from ..exceptions import ReadError


class WorkspaceFiles:
    """Reads changed files out of the working tree."""

    def __init__(self, root: str = "."):
        self.root = Path(root)

    def _resolve(self, path: str) -> Path:
        return self.root / path

    def exists(self, path: str) -> bool:
        """True for anything present on disk, directories and dangling links included."""
        full_path = self._resolve(path)
        return full_path.exists() or full_path.is_symlink()

    def read_base64(self, path: str) -> str:
        """Read the whole file and return it base64 encoded.

        Raises:
            ReadError: If the path cannot be read, e.g. it is a directory such
                as a submodule checkout.
        """
        try:
            data = self._resolve(path).read_bytes()
        except OSError as e:
            raise ReadError(path, detail=str(e)) from e
        return base64.b64encode(data).decode("ascii")
