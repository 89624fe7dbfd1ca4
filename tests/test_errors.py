import io
import json

import pytest

from pcskit.errors import (
    STR_NET_ERROR,
    STR_REMOTE_ERROR,
    STR_SUCCESS,
    DlinkErrInfo,
    ErrType,
    PanErrorInfo,
    PCSErrInfo,
    PCSError,
    XPanErrorInfo,
    decode_pan_json_error,
    decode_pcs_json_error,
    decode_xpan_json_error,
    find_pan_err,
    find_xpan_err,
    handle_json_parse,
)


def test_find_pan_err_known_and_unknown():
    assert find_pan_err(0) == "操作成功"
    assert find_pan_err(-9) == "文件不存在"
    assert find_pan_err(113) == "签名错误"
    assert find_pan_err(123456) == "未知错误"


def test_find_xpan_err():
    assert find_xpan_err(0, 2) == STR_SUCCESS
    assert find_xpan_err(0, 1) == "错误类型: 1"
    assert find_xpan_err(7, 2) == "错误类型: 2"


def test_pcs_remote_error_raised_with_known_message():
    body = json.dumps({"error_code": 31066, "error_msg": "file does not exist"})
    with pytest.raises(PCSErrInfo) as info:
        decode_pcs_json_error("list", body)
    err = info.value
    assert err.err_type is ErrType.REMOTE
    assert err.remote_err_code == 31066
    assert err.remote_err_msg == "文件或目录不存在"
    assert str(err) == f"list: 遇到错误, {STR_REMOTE_ERROR}, 代码: 31066, 消息: 文件或目录不存在"


def test_pcs_unknown_code_keeps_server_message():
    with pytest.raises(PCSErrInfo) as info:
        decode_pcs_json_error("op", b'{"error_code": 99, "error_msg": "weird"}')
    assert info.value.remote_err_msg == "weird"


def test_pcs_success_returns_document():
    doc = decode_pcs_json_error("quota", io.BytesIO(b'{"quota": 10, "used": 3}'))
    assert doc == {"quota": 10, "used": 3}


def test_invalid_json_is_json_error():
    with pytest.raises(PanErrorInfo) as info:
        decode_pan_json_error("op", "not json")
    assert info.value.err_type is ErrType.JSON_PARSE
    assert isinstance(info.value.err, ValueError)


def test_wrong_field_type_is_json_error():
    with pytest.raises(PCSErrInfo) as info:
        decode_pcs_json_error("op", '{"error_code": "abc"}')
    assert info.value.err_type is ErrType.JSON_PARSE


def test_non_object_is_json_error():
    with pytest.raises(PanErrorInfo) as info:
        decode_pan_json_error("op", "[1, 2]")
    assert info.value.err_type is ErrType.JSON_PARSE


def test_pan_remote_error_message():
    with pytest.raises(PanErrorInfo) as info:
        decode_pan_json_error("download", {"errno": 112})
    err = info.value
    assert err.remote_err_code == 112
    assert str(err) == f"download: 遇到错误, {STR_REMOTE_ERROR}, 代码: 112, 消息: {find_pan_err(112)}"


def test_xpan_success_requires_return_type_two():
    assert decode_xpan_json_error("rapid", {"errno": 0, "return_type": 2}) == {
        "errno": 0,
        "return_type": 2,
    }
    with pytest.raises(XPanErrorInfo) as info:
        decode_xpan_json_error("rapid", {"errno": 0, "return_type": 1})
    assert info.value.remote_err_code == -1
    assert info.value.remote_err_msg == find_xpan_err(0, 1)


def test_dlink_remote_error():
    info = DlinkErrInfo("dlink")
    with pytest.raises(DlinkErrInfo) as raised:
        handle_json_parse('{"errno": 5, "msg": "bad"}', info)
    assert raised.value is info
    assert info.remote_err_msg == "bad"
    assert str(info) == f"dlink: 遇到错误, {STR_REMOTE_ERROR}, 代码: 5, 消息: bad"


def test_net_error_string():
    err = PCSErrInfo("upload")
    err.set_net_error(OSError("boom"))
    assert err.err_type is ErrType.NET
    assert str(err) == f"upload: {STR_NET_ERROR}, boom"


def test_empty_operation_string():
    assert str(PanErrorInfo()) == STR_SUCCESS
    assert str(PanErrorInfo("", ErrType.OTHERS, ValueError("inner"))) == "inner"


def test_others_error_strings():
    assert str(PCSErrInfo("fix", ErrType.OTHERS)) == f"fix: {STR_SUCCESS}"
    err = PCSErrInfo("fix", ErrType.OTHERS, ValueError("nope"))
    assert str(err) == "fix, 遇到错误, nope"


@pytest.mark.parametrize("cls", [PCSErrInfo, PanErrorInfo, XPanErrorInfo, DlinkErrInfo])
def test_errors_are_exceptions_of_common_base(cls):
    err = cls("op", ErrType.INTERNAL, RuntimeError("x"))
    assert isinstance(err, PCSError)
    assert str(err) == "op: 内部错误, x"


def test_remote_errors_caught_by_common_base():
    with pytest.raises(PCSError) as info:
        decode_pan_json_error("op", {"errno": -9})
    assert info.value.remote_err_code == -9


def test_load_json_sets_fields():
    err = PCSErrInfo("op")
    err.load_json({"error_code": 31061, "error_msg": "exists"})
    assert err.err_code == 31061
    assert err.remote_err_msg == "文件已存在"