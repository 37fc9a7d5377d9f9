"""Filesystem blob storage for uploaded recordings."""

from pathlib import Path


class BlobStorage:
    """Flat directory of blobs addressed by storage key (a bare filename)."""

    def __init__(self, root: str | Path) -> None:
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def get_path(self, key: str) -> Path:
        """Get absolute path for a storage key.

        Raises:
            ValueError: If the key is not a plain filename inside the storage root
        """
        if not key or key in (".", "..") or Path(key).name != key or "\\" in key:
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.root / key

    def write(self, key: str, content: bytes) -> Path:
        """Write blob under key, never overwriting an existing one.

        Raises:
            FileExistsError: If a blob with this key already exists
        """
        file_path = self.get_path(key)
        with file_path.open("xb") as f:
            try:
                f.write(content)
            except OSError:
                file_path.unlink(missing_ok=True)
                raise
        return file_path

    def delete(self, key: str) -> bool:
        """Delete blob if present. Returns False when there was nothing to delete."""
        file_path = self.get_path(key)
        try:
            file_path.unlink()
        except FileNotFoundError:
            return False
        return True
