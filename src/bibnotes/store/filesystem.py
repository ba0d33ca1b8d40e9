from __future__ import annotations

import json
from pathlib import Path

from bibnotes.store.base import DocumentStore, matches_extension, normalize_path

TEMPLATES_SETTINGS = ".obsidian/templates.json"


class FileSystemStore(DocumentStore):
    name = "filesystem"

    def __init__(self, root: Path) -> None:
        self.root = Path(root)

    def _abs(self, path: str) -> Path:
        return self.root / normalize_path(path)

    def list_files(self, extension: str) -> list[str]:
        out: list[str] = []
        for path in self.root.rglob("*"):
            rel = path.relative_to(self.root)
            if any(part.startswith(".") for part in rel.parts):
                continue
            if path.is_file() and matches_extension(path.name, extension):
                out.append(rel.as_posix())
        return sorted(out)

    def read(self, path: str) -> str:
        return self._abs(path).read_text(encoding="utf-8")

    def exists(self, path: str) -> bool:
        return self._abs(path).exists()

    def create_folder(self, path: str) -> None:
        self._abs(path).mkdir(parents=True, exist_ok=True)

    def create(self, path: str, content: str) -> None:
        target = self._abs(path)
        if target.exists():
            raise FileExistsError(f"File already exists: {normalize_path(path)}")
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")

    def template_folder(self) -> str | None:
        settings = self.root / TEMPLATES_SETTINGS
        if not settings.exists():
            return None
        try:
            payload = json.loads(settings.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return None
        folder = payload.get("folder") if isinstance(payload, dict) else None
        if not isinstance(folder, str) or not folder.strip():
            return None
        return normalize_path(folder)
