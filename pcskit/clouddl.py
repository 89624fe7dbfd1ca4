"""Offline (cloud) download task records."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Union

_INT_RE = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(1 << 63)
_INT64_MAX = (1 << 63) - 1

_STATUS_TEXTS = {
    0: "下载成功",
    1: "下载进行中",
    2: "系统错误",
    3: "资源不存在",
    4: "下载超时",
    5: "资源存在但下载失败",
    6: "存储空间不足",
    7: "任务取消",
}


def status_text(status: int) -> str:
    """Return the description of a task status code."""
    return _STATUS_TEXTS.get(status, f"未知状态码: {status}")


def _parse_int(value: Any) -> int:
    """Parse a decimal integer strictly; raise ValueError when it is not one."""
    if isinstance(value, bool):
        raise ValueError(f"not an integer: {value!r}")
    if isinstance(value, int):
        number = value
    else:
        text = str(value)
        if not _INT_RE.fullmatch(text):
            raise ValueError(f"not an integer: {value!r}")
        number = int(text, 10)
    if not _INT64_MIN <= number <= _INT64_MAX:
        raise ValueError(f"integer out of range: {value!r}")
    return number


def _must_int(value: Any) -> int:
    """Parse an integer, falling back to 0 for anything unparsable."""
    if value is None:
        return 0
    try:
        return _parse_int(value)
    except ValueError:
        return 0


@dataclass
class CloudDlFileInfo:
    """A file inside an offline download task."""

    file_name: str = ""
    file_size: int = 0


@dataclass
class CloudDlTaskInfo:
    """State of one offline download task."""

    task_id: int = 0
    status: int = 0
    file_size: int = 0
    finished_size: int = 0
    create_time: int = 0
    start_time: int = 0
    finish_time: int = 0
    save_path: str = ""
    source_url: str = ""
    task_name: str = ""
    od_type: int = 0
    file_list: List[CloudDlFileInfo] = field(default_factory=list)
    result: int = 0

    @property
    def status_text(self) -> str:
        """Description of the task status."""
        return status_text(self.status)

    @classmethod
    def from_json(
        cls,
        data: Mapping[str, Any],
        task_id: Optional[Union[int, str]] = None,
    ) -> "CloudDlTaskInfo":
        """Build a task from a server JSON object.

        Numeric fields arrive as strings; unparsable ones become 0. The task
        id is task_id when given, otherwise the object's "task_id" field.
        Raises ValueError when the task id is not a valid integer.
        """
        raw_id = task_id if task_id is not None else data.get("task_id")
        if raw_id is None:
            raise ValueError("task id is missing")
        parsed_id = _parse_int(raw_id)

        files = [
            CloudDlFileInfo(
                file_name=entry.get("file_name") or "",
                file_size=_must_int(entry.get("file_size")),
            )
            for entry in data.get("file_list") or ()
            if entry is not None
        ]

        return cls(
            task_id=parsed_id,
            status=_must_int(data.get("status")),
            file_size=_must_int(data.get("file_size")),
            finished_size=_must_int(data.get("finished_size")),
            create_time=_must_int(data.get("create_time")),
            start_time=_must_int(data.get("start_time")),
            finish_time=_must_int(data.get("finish_time")),
            save_path=data.get("save_path") or "",
            source_url=data.get("source_url") or "",
            task_name=data.get("task_name") or "",
            od_type=_must_int(data.get("od_type")),
            file_list=files,
            result=_must_int(data.get("result")),
        )