"""Error types for the storage, web-disk and download-link APIs."""

from __future__ import annotations

import json
from enum import IntEnum
from typing import Any, ClassVar, Dict, Mapping, Optional, Tuple

STR_SUCCESS = "操作成功"
STR_INTERNAL_ERROR = "内部错误"
STR_REMOTE_ERROR = "远端服务器返回错误"
STR_NET_ERROR = "网络错误"
STR_JSON_PARSE_ERROR = "json 数据解析失败"


class ErrType(IntEnum):
    """Kind of failure an error describes."""

    NO_ERROR = 0
    INTERNAL = 1
    REMOTE = 2
    NET = 3
    JSON_PARSE = 4
    OTHERS = 5


class PCSError(Exception):
    """Base for all API errors.

    Subclasses declare which JSON keys they read from a server reply in
    ``_FIELDS`` (json key -> (attribute, type)).
    """

    _FIELDS: ClassVar[Dict[str, Tuple[str, type]]] = {}

    def __init__(
        self,
        operation: str = "",
        err_type: ErrType = ErrType.NO_ERROR,
        err: Optional[BaseException] = None,
    ) -> None:
        super().__init__(operation)
        self.operation = operation
        self.err_type = ErrType(err_type)
        self.err = err
        for attr, kind in self._FIELDS.values():
            setattr(self, attr, kind())

    def set_json_error(self, err: BaseException) -> None:
        """Mark this as a reply that could not be decoded."""
        self.err_type = ErrType.JSON_PARSE
        self.err = err

    def set_net_error(self, err: BaseException) -> None:
        """Mark this as a network failure."""
        self.err_type = ErrType.NET
        self.err = err

    def set_remote_error(self) -> None:
        """Mark this as an error reported by the server."""
        self.err_type = ErrType.REMOTE

    def load_json(self, data: Mapping[str, Any]) -> None:
        """Fill the remote fields from a decoded JSON object.

        Raises TypeError when a field has the wrong JSON type.
        """
        if not isinstance(data, Mapping):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        for key, (attr, kind) in self._FIELDS.items():
            if key not in data or data[key] is None:
                continue
            value = data[key]
            if kind is int:
                if isinstance(value, bool) or not isinstance(value, int):
                    if isinstance(value, float) and value.is_integer():
                        value = int(value)
                    else:
                        raise TypeError(f"field {key!r}: expected a number, got {value!r}")
            elif not isinstance(value, kind):
                raise TypeError(f"field {key!r}: expected {kind.__name__}, got {value!r}")
            setattr(self, attr, value)

    @property
    def remote_err_code(self) -> int:
        """Error code reported by the server, 0 when none."""
        return 0

    @property
    def remote_err_msg(self) -> str:
        """Human readable message for the server's error code."""
        return ""

    def _is_remote_success(self) -> bool:
        return self.remote_err_code == 0

    def _remote_description(self) -> Tuple[int, str]:
        return self.remote_err_code, self.remote_err_msg

    def __str__(self) -> str:
        if not self.operation:
            return str(self.err) if self.err is not None else STR_SUCCESS

        op = self.operation
        if self.err_type is ErrType.INTERNAL:
            return f"{op}: {STR_INTERNAL_ERROR}, {self.err}"
        if self.err_type is ErrType.JSON_PARSE:
            return f"{op}: {STR_JSON_PARSE_ERROR}, {self.err}"
        if self.err_type is ErrType.NET:
            return f"{op}: {STR_NET_ERROR}, {self.err}"
        if self.err_type is ErrType.REMOTE:
            if self._is_remote_success():
                return f"{op}: {STR_SUCCESS}"
            code, msg = self._remote_description()
            return f"{op}: 遇到错误, {STR_REMOTE_ERROR}, 代码: {code}, 消息: {msg}"
        if self.err_type is ErrType.OTHERS:
            if self.err is None:
                return f"{op}: {STR_SUCCESS}"
            return f"{op}, 遇到错误, {self.err}"
        # No error recorded yet.
        return f"{op}: {STR_SUCCESS}"


def _find_pcs_err(err_code: int, err_msg: str) -> Tuple[int, str]:
    if err_code == 0:
        return err_code, ""
    if err_code == 31045:
        return err_code, "操作失败, 可能百度帐号登录状态过期, 请尝试重新登录, 消息: " + err_msg
    known = {
        31061: "文件已存在",
        31066: "文件或目录不存在",
        31079: "秒传文件失败",
    }
    return err_code, known.get(err_code, err_msg)


class PCSErrInfo(PCSError):
    """Error from the storage (PCS) API."""

    _FIELDS = {"error_code": ("err_code", int), "error_msg": ("err_msg", str)}

    err_code: int
    err_msg: str

    @property
    def remote_err_code(self) -> int:
        return self.err_code

    @property
    def remote_err_msg(self) -> str:
        return _find_pcs_err(self.err_code, self.err_msg)[1]

    def _remote_description(self) -> Tuple[int, str]:
        return _find_pcs_err(self.err_code, self.err_msg)


_PAN_ERRORS: Dict[int, str] = {
    0: STR_SUCCESS,
    -1: "由于您分享了违反相关法律法规的文件，分享功能已被禁用，之前分享出去的文件不受影响。",
    -2: "用户不存在,请刷新页面后重试",
    -3: "文件不存在,请刷新页面后重试",
    -4: "登录信息有误，请重新登录试试",
    -5: "host_key和user_key无效",
    -6: "请重新登录",
    -7: "该分享已删除或已取消",
    -8: "已存在同名文件",
    -9: "文件不存在",
    -10: "分享外链已经达到最大上限100000条，不能再次分享",
    -11: "验证cookie无效",
    -12: "访问密码错误",
    -14: "对不起，短信分享每天限制20条，你今天已经分享完，请明天再来分享吧！",
    -15: "对不起，邮件分享每天限制20封，你今天已经分享完，请明天再来分享吧！",
    -16: "对不起，该文件已经限制分享！",
    -17: "文件分享超过限制",
    -19: "需要输入验证码",
    -21: "分享已取消或分享信息无效",
    -30: "文件已存在",
    -31: "文件保存失败",
    -33: "一次支持操作999个，减点试试吧",
    -62: "可能需要输入验证码",
    -70: "你分享的文件中包含病毒或疑似病毒，为了你和他人的数据安全，换个文件分享吧",
    2: "请稍后再试, 或更换保存路径",
    3: "未登录或帐号无效",
    4: "存储好像出问题了，请稍候再试",
    105: "啊哦，链接错误没找到文件，请打开正确的分享链接",
    108: "文件名有敏感词，优化一下吧",
    110: "分享次数超出限制，可以到“我的分享”中查看已分享的文件链接",
    112: "页面已过期，请刷新后重试",
    113: "签名错误",
    114: "当前任务不存在，保存失败",
    115: "该文件禁止分享",
    132: "您的帐号可能存在安全风险，为了确保为您本人操作，请先进行安全验证。",
    9019: "accesstoken未设置或过期, 请使用setastoken命令设置`",
}


def find_pan_err(errno: int) -> str:
    """Return the message for a web-disk API error number."""
    return _PAN_ERRORS.get(errno, "未知错误")


def find_xpan_err(errno: int, return_type: int) -> str:
    """Return the message for an open-API error number and return type."""
    if errno == 0 and return_type == 2:
        return STR_SUCCESS
    return f"错误类型: {return_type}"


class PanErrorInfo(PCSError):
    """Error from the web-disk API."""

    _FIELDS = {"errno": ("errno", int)}

    errno: int

    @property
    def remote_err_code(self) -> int:
        return self.errno

    @property
    def remote_err_msg(self) -> str:
        return find_pan_err(self.errno)


class XPanErrorInfo(PCSError):
    """Error from the open API, where success is errno 0 with return_type 2."""

    _FIELDS = {"errno": ("errno", int), "return_type": ("return_type", int)}

    errno: int
    return_type: int

    @property
    def remote_err_code(self) -> int:
        return self.errno + self.return_type - 2

    @property
    def remote_err_msg(self) -> str:
        return find_xpan_err(self.errno, self.return_type)

    def _is_remote_success(self) -> bool:
        return self.errno == 0 and self.return_type == 2

    def _remote_description(self) -> Tuple[int, str]:
        return self.errno, find_xpan_err(self.errno, self.return_type)


class DlinkErrInfo(PCSError):
    """Error from the download-link server."""

    _FIELDS = {"errno": ("errno", int), "msg": ("msg", str)}

    errno: int
    msg: str

    @property
    def remote_err_code(self) -> int:
        return self.errno

    @property
    def remote_err_msg(self) -> str:
        return self.msg


def _decode(data: Any) -> Any:
    if isinstance(data, Mapping):
        return data
    if hasattr(data, "read"):
        data = data.read()
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    doc = json.loads(data)
    return {} if doc is None else doc


def handle_json_parse(data: Any, info: PCSError) -> Dict[str, Any]:
    """Decode a reply into info and return the decoded JSON object.

    data may be bytes, str, a file-like object or an already decoded mapping.
    Raises info, marked as a JSON error when decoding fails or as a remote
    error when the reply carries a non-zero error code.
    """
    try:
        doc = _decode(data)
        info.load_json(doc)
    except (ValueError, TypeError, UnicodeDecodeError) as exc:
        info.set_json_error(exc)
        raise info from exc

    if info.remote_err_code != 0:
        info.set_remote_error()
        raise info
    return dict(doc)


def decode_pcs_json_error(operation: str, data: Any) -> Dict[str, Any]:
    """Check a storage API reply; raise PCSErrInfo on error."""
    return handle_json_parse(data, PCSErrInfo(operation))


def decode_pan_json_error(operation: str, data: Any) -> Dict[str, Any]:
    """Check a web-disk API reply; raise PanErrorInfo on error."""
    return handle_json_parse(data, PanErrorInfo(operation))


def decode_xpan_json_error(operation: str, data: Any) -> Dict[str, Any]:
    """Check an open-API reply; raise XPanErrorInfo on error."""
    return handle_json_parse(data, XPanErrorInfo(operation))