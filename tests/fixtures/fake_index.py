"""In-memory content index for tests."""

from fnmatch import fnmatch

from planhound.interfaces.content_index import FileRecord, SymbolRecord


def numbered_lines(count: int, prefix: str = "line") -> str:
    return "\n".join(f"{prefix} {i}" for i in range(1, count + 1))


def make_symbol(
    name: str,
    line_count: int,
    start_line: int = 1,
    kind: str = "function",
    file_path: str = "src/auth.ts",
    text: str | None = None,
) -> SymbolRecord:
    if text is None:
        text = numbered_lines(line_count, prefix="  stmt")
    return SymbolRecord(
        name=name,
        kind=kind,
        file_path=file_path,
        start_line=start_line,
        end_line=start_line + line_count - 1,
        text=text,
    )


class FakeContentIndex:
    """Content index backed by dictionaries."""

    def __init__(
        self,
        symbols: dict[str, SymbolRecord] | None = None,
        files: dict[str, str] | None = None,
    ):
        self.symbols = dict(symbols or {})
        self.files = dict(files or {})
        self.lookups: list[str] = []

    def find_symbol(self, name: str) -> SymbolRecord | None:
        self.lookups.append(name)
        return self.symbols.get(name)

    def read_file(self, path: str) -> FileRecord | None:
        text = self.files.get(path)
        return FileRecord(path=path, text=text) if text is not None else None

    def list_files(self, pattern: str) -> list[str]:
        prefix = pattern.rstrip("/") + "/"
        return sorted(
            path
            for path in self.files
            if path == pattern or path.startswith(prefix) or fnmatch(path, pattern)
        )
