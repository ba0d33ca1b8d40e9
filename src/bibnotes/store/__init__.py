from bibnotes.store.base import DocumentStore
from bibnotes.store.filesystem import FileSystemStore
from bibnotes.store.memory import MemoryStore

__all__ = [
    "DocumentStore",
    "FileSystemStore",
    "MemoryStore",
]
