"""Content index over a directory tree.

Resolves file and glob scopes against a workspace root. Symbol lookup is not
supported here and always returns None; plug in an index backed by a real
symbol table for symbol scopes.
"""

from fnmatch import fnmatch
from pathlib import Path

from loguru import logger

from planhound.interfaces.content_index import FileRecord, SymbolRecord

DEFAULT_EXCLUDES = (
    "**/.git/**",
    "**/node_modules/**",
    "**/__pycache__/**",
    "**/.venv/**",
    "**/dist/**",
    "**/build/**",
)


class FileSystemContentIndex:
    """Reads workspace files below ``root``."""

    def __init__(
        self,
        root: Path | str,
        max_file_bytes: int = 2_000_000,
        exclude_patterns: tuple[str, ...] = DEFAULT_EXCLUDES,
    ):
        self._root = Path(root).resolve()
        self._max_file_bytes = max_file_bytes
        self._exclude_patterns = exclude_patterns

    @property
    def root(self) -> Path:
        return self._root

    def find_symbol(self, name: str) -> SymbolRecord | None:
        return None

    def _resolve(self, path: str) -> Path | None:
        """Absolute path inside the root, or None if ``path`` escapes it."""
        candidate = (self._root / path).resolve()
        try:
            candidate.relative_to(self._root)
        except ValueError:
            logger.warning(f"Refusing path outside workspace root: {path}")
            return None
        return candidate

    def _is_excluded(self, rel_path: Path) -> bool:
        for pattern in self._exclude_patterns:
            if pattern.startswith("**/") and pattern.endswith("/**"):
                if pattern[3:-3] in rel_path.parts:
                    return True
            elif fnmatch(rel_path.as_posix(), pattern) or fnmatch(rel_path.name, pattern):
                return True
        return False

    def read_file(self, path: str) -> FileRecord | None:
        file_path = self._resolve(path)
        if file_path is None or not file_path.is_file():
            return None

        try:
            size = file_path.stat().st_size
            if size > self._max_file_bytes:
                logger.warning(
                    f"Skipping {path}: {size:,} bytes exceeds limit of {self._max_file_bytes:,}"
                )
                return None
            text = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            logger.warning(f"Error reading {path}: {e}")
            return None

        return FileRecord(path=file_path.relative_to(self._root).as_posix(), text=text)

    def list_files(self, pattern: str) -> list[str]:
        """Workspace-relative files matching a file path, directory or glob."""
        pattern = pattern.strip().removeprefix("./")
        if not pattern or Path(pattern).is_absolute():
            return []

        if not any(ch in pattern for ch in "*?["):
            target = self._resolve(pattern)
            if target is None:
                return []
            if target.is_file():
                return [target.relative_to(self._root).as_posix()]
            if target.is_dir():
                return self._collect(target.rglob("*"))
            return []

        return self._collect(self._root.glob(pattern))

    def _collect(self, candidates) -> list[str]:
        files = []
        try:
            for candidate in candidates:
                if not candidate.is_file():
                    continue
                try:
                    rel_path = candidate.resolve().relative_to(self._root)
                except ValueError:
                    continue
                if not self._is_excluded(rel_path):
                    files.append(rel_path.as_posix())
        except (PermissionError, OSError) as e:
            logger.warning(f"Error listing files under {self._root}: {e}")
        return sorted(files)
