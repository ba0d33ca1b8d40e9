from __future__ import annotations

from abc import ABC, abstractmethod


class DocumentStore(ABC):
    """Vault storage seen through vault-relative POSIX paths."""

    name: str

    @abstractmethod
    def list_files(self, extension: str) -> list[str]:
        raise NotImplementedError

    @abstractmethod
    def read(self, path: str) -> str:
        raise NotImplementedError

    @abstractmethod
    def exists(self, path: str) -> bool:
        raise NotImplementedError

    @abstractmethod
    def create_folder(self, path: str) -> None:
        raise NotImplementedError

    @abstractmethod
    def create(self, path: str, content: str) -> None:
        raise NotImplementedError

    def get_by_path(self, path: str) -> str | None:
        return path if self.exists(path) else None

    def template_folder(self) -> str | None:
        return None


def normalize_path(path: str) -> str:
    parts = [p for p in path.replace("\\", "/").split("/") if p and p != "."]
    return "/".join(parts)


def matches_extension(path: str, extension: str) -> bool:
    ext = extension.lower().lstrip(".")
    return path.lower().endswith(f".{ext}")
