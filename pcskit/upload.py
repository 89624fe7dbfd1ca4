"""Upload replies: rapid-upload info and parsing of precreate responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Sequence

from .errors import ErrType, PanErrorInfo, handle_json_parse

KB = 1 << 10
MB = 1 << 20
GB = 1 << 30

MAX_UPLOAD_BLOCK_SIZE = 16 * MB
MIN_UPLOAD_BLOCK_SIZE = 4 * MB
MAX_RAPID_UPLOAD_SIZE = 20 * GB
SLICE_MD5_SIZE = 256 * KB
EMPTY_CONTENT_MD5 = "d41d8cd98f00b204e9800998ecf8427e"

OPERATION_UPLOAD_PRECREATE = "分片上传—Precreate"

MSG_UPLOAD_MD5_NOT_FOUND = "unknown response data, md5 not found"
MSG_UPLOAD_SAVE_PATH_NOT_FOUND = "unknown response data, file saved path not found"
MSG_UPLOAD_SEQ_NOT_MATCH = "服务器返回的上传队列不匹配"
MSG_UPLOAD_MD5_UNKNOWN = "服务器无匹配文件/秒传未生效"
MSG_UPLOAD_FILE_EXISTS = "文件已存在"

RETURN_TYPE_UPLOAD = 1
RETURN_TYPE_RAPID = 2


class UploadSeqNotMatchError(Exception):
    """The server returned a block sequence that does not fit the request."""

    def __init__(self) -> None:
        super().__init__(MSG_UPLOAD_SEQ_NOT_MATCH)


@dataclass
class RapidUploadInfo:
    """Everything needed to rapid-upload a file by its hashes."""

    filename: str = ""
    content_length: int = 0
    content_md5: str = ""
    slice_md5: str = ""
    content_crc32: str = ""


@dataclass(frozen=True)
class UploadSeq:
    """One block to upload and its sequence number."""

    seq: int
    block: str


@dataclass
class PrecreateInfo:
    """Result of the precreate step of a multi-part upload."""

    is_rapid_upload: bool = False
    upload_id: str = ""
    upload_seq_list: List[UploadSeq] = field(default_factory=list)


def _seq_numbers(value: Any) -> List[int]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"field 'block_list': expected an array, got {value!r}")
    numbers = []
    for item in value:
        if isinstance(item, bool) or not isinstance(item, (int, float)):
            raise TypeError(f"field 'block_list': expected numbers, got {item!r}")
        if isinstance(item, float):
            if not item.is_integer():
                raise TypeError(f"field 'block_list': expected integers, got {item!r}")
            item = int(item)
        numbers.append(item)
    return numbers


def parse_precreate(data: Any, block_list: Sequence[str]) -> PrecreateInfo:
    """Interpret a precreate reply for a request that sent block_list.

    Raises PanErrorInfo when the reply is malformed, reports an error, or
    lists a different number of blocks than were sent; raises ValueError
    for an unknown return type.
    """
    info = PanErrorInfo(OPERATION_UPLOAD_PRECREATE)
    doc = handle_json_parse(data, info)

    try:
        seqs = _seq_numbers(doc.get("block_list"))
        return_type = doc.get("return_type") or 0
        if isinstance(return_type, bool) or not isinstance(return_type, int):
            raise TypeError(f"field 'return_type': expected a number, got {return_type!r}")
        upload_id = doc.get("uploadid") or ""
        if not isinstance(upload_id, str):
            raise TypeError(f"field 'uploadid': expected a string, got {upload_id!r}")
    except TypeError as exc:
        info.set_json_error(exc)
        raise info from exc

    if return_type == RETURN_TYPE_UPLOAD:
        if len(seqs) != len(block_list):
            info.err_type = ErrType.REMOTE
            info.err = UploadSeqNotMatchError()
            raise info
        return PrecreateInfo(
            upload_id=upload_id,
            upload_seq_list=[
                UploadSeq(seq=seq, block=block) for seq, block in zip(seqs, block_list)
            ],
        )
    if return_type == RETURN_TYPE_RAPID:
        return PrecreateInfo(is_rapid_upload=True)
    raise ValueError(f"unknown returntype: {return_type}")