"""File and directory metadata and the JSON bodies of file operations."""

from __future__ import annotations

import json
import posixpath
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional, Tuple

REQ_TYPE_PCS = 0
REQ_TYPE_PAN = 1
PATH_SEPARATOR = "/"


class OrderBy(str, Enum):
    """Field a listing is sorted on; directories have no size."""

    NAME = "name"
    TIME = "time"
    SIZE = "size"


class Order(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class OrderOptions:
    """Sort options for listing a directory."""

    by: OrderBy = OrderBy.NAME
    order: Order = Order.ASC


DEFAULT_ORDER_OPTIONS = OrderOptions()


@dataclass
class FileDirectory:
    """Metadata of one file or directory."""

    fs_id: int = 0
    app_id: int = 0
    path: str = ""
    filename: str = ""
    ctime: int = 0
    mtime: int = 0
    md5: str = ""
    block_list: List[str] = field(default_factory=list)
    size: int = 0
    isdir: bool = False
    ifhassubdir: bool = False
    pre_base: str = ""
    parent: Optional["FileDirectory"] = field(default=None, repr=False, compare=False)
    children: Optional[List["FileDirectory"]] = None

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> "FileDirectory":
        """Build an entry from a server JSON object."""
        return cls(
            fs_id=int(data.get("fs_id") or 0),
            app_id=int(data.get("app_id") or 0),
            path=data.get("path") or "",
            filename=data.get("server_filename") or "",
            ctime=int(data.get("ctime") or 0),
            mtime=int(data.get("mtime") or 0),
            md5=data.get("md5") or "",
            block_list=list(data.get("block_list") or []),
            size=int(data.get("size") or 0),
            isdir=bool(data.get("isdir") or 0),
            ifhassubdir=bool(data.get("ifhassubdir") or 0),
        )

    def fix_md5(self) -> None:
        """Use the single block md5 as the file md5 when there is exactly one."""
        if len(self.block_list) == 1:
            self.md5 = self.block_list[0]


def _present(entries: Optional[Iterable[Optional[FileDirectory]]]):
    return (entry for entry in entries or () if entry is not None)


def total_size(entries: Optional[Iterable[Optional[FileDirectory]]]) -> int:
    """Sum of sizes, including all nested children."""
    return sum(e.size + total_size(e.children) for e in _present(entries))


def count(entries: Optional[Iterable[Optional[FileDirectory]]]) -> Tuple[int, int]:
    """Return (number of files, number of directories), recursively."""
    files = dirs = 0
    for entry in _present(entries):
        if entry.isdir:
            dirs += 1
        else:
            files += 1
        sub_files, sub_dirs = count(entry.children)
        files += sub_files
        dirs += sub_dirs
    return files, dirs


def all_file_paths(entries: Optional[Iterable[Optional[FileDirectory]]]) -> List[str]:
    """All paths, each entry followed by those of its children."""
    paths: List[str] = []
    for entry in _present(entries):
        paths.append(entry.path)
        paths.extend(all_file_paths(entry.children))
    return paths


@dataclass(frozen=True)
class CpMv:
    """Source and target of a copy, move or rename."""

    from_path: str
    to_path: str

    def to_json(self) -> dict:
        return {"from": self.from_path, "to": self.to_path}


def _dumps(obj: Any) -> str:
    text = json.dumps(obj, ensure_ascii=False, separators=(",", ":"))
    for ch, esc in (
        ("<", "\\u003c"),
        (">", "\\u003e"),
        ("&", "\\u0026"),
        ("\u2028", "\\u2028"),
        ("\u2029", "\\u2029"),
    ):
        text = text.replace(ch, esc)
    return text


def paths_list_json(paths: Iterable[str]) -> str:
    """JSON body listing paths: {"list":[{"path":...},...]}."""
    return _dumps({"list": [{"path": p} for p in paths]})


def cpmv_list_json(items: Iterable[CpMv]) -> str:
    """JSON body of a copy/move request: {"list":[{"from":...,"to":...}]}."""
    return _dumps({"list": [item.to_json() for item in items]})


def _clean(path: str) -> str:
    cleaned = posixpath.normpath(path) if path else "."
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def _dir(path: str) -> str:
    return _clean(path[: path.rfind("/") + 1])


def all_related_dir(items: Iterable[CpMv]) -> List[str]:
    """Parent directories of all sources and targets, first seen first."""
    dirs: List[str] = []
    for item in items:
        for d in (_dir(item.from_path), _dir(item.to_path)):
            if d not in dirs:
                dirs.append(d)
    return dirs