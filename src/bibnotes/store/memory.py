from __future__ import annotations

from bibnotes.store.base import DocumentStore, matches_extension, normalize_path


class MemoryStore(DocumentStore):
    name = "memory"

    def __init__(self, files: dict[str, str] | None = None, template_folder: str | None = None) -> None:
        self.files: dict[str, str] = {normalize_path(k): v for k, v in (files or {}).items()}
        self.folders: set[str] = set()
        self._template_folder = template_folder

    def list_files(self, extension: str) -> list[str]:
        return sorted(p for p in self.files if matches_extension(p, extension))

    def read(self, path: str) -> str:
        key = normalize_path(path)
        if key not in self.files:
            raise FileNotFoundError(key)
        return self.files[key]

    def exists(self, path: str) -> bool:
        key = normalize_path(path)
        return key in self.files or key in self.folders

    def create_folder(self, path: str) -> None:
        self.folders.add(normalize_path(path))

    def create(self, path: str, content: str) -> None:
        key = normalize_path(path)
        if key in self.files:
            raise FileExistsError(f"File already exists: {key}")
        self.files[key] = content

    def template_folder(self) -> str | None:
        return self._template_folder
