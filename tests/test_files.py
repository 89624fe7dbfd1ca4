import json

from pcskit.files import (
    CpMv,
    FileDirectory,
    Order,
    OrderBy,
    OrderOptions,
    all_file_paths,
    all_related_dir,
    count,
    cpmv_list_json,
    paths_list_json,
    total_size,
)


def _tree():
    inner_file = FileDirectory(path="/d/sub/c.txt", size=5)
    sub = FileDirectory(path="/d/sub", isdir=True, children=[inner_file])
    top_file = FileDirectory(path="/d/a.txt", size=10)
    top_dir = FileDirectory(path="/d", isdir=True, children=[top_file, None, sub])
    return [top_dir, FileDirectory(path="/b.txt", size=7)]


def test_from_json_reads_fields():
    data = {
        "fs_id": 11,
        "app_id": 250528,
        "path": "/docs/readme.md",
        "server_filename": "readme.md",
        "ctime": 100,
        "mtime": 200,
        "md5": "abc",
        "block_list": ["def"],
        "size": 64,
        "isdir": 0,
        "ifhassubdir": 0,
    }
    fd = FileDirectory.from_json(data)
    assert fd.fs_id == 11
    assert fd.app_id == 250528
    assert fd.filename == "readme.md"
    assert fd.path == "/docs/readme.md"
    assert (fd.ctime, fd.mtime, fd.size) == (100, 200, 64)
    assert fd.block_list == ["def"]
    assert fd.isdir is False


def test_from_json_directory_flags():
    fd = FileDirectory.from_json({"path": "/x", "isdir": 1, "ifhassubdir": 1})
    assert fd.isdir is True
    assert fd.ifhassubdir is True
    assert fd.block_list == []


def test_fix_md5_single_block():
    fd = FileDirectory(md5="old", block_list=["new"])
    fd.fix_md5()
    assert fd.md5 == "new"


def test_fix_md5_multiple_blocks_unchanged():
    fd = FileDirectory(md5="old", block_list=["one", "two"])
    fd.fix_md5()
    assert fd.md5 == "old"


def test_total_size_recursive():
    assert total_size(_tree()) == 10 + 5 + 7


def test_count_recursive():
    assert count(_tree()) == (3, 2)


def test_all_file_paths_preorder():
    assert all_file_paths(_tree()) == ["/d", "/d/a.txt", "/d/sub", "/d/sub/c.txt", "/b.txt"]


def test_all_file_paths_length_matches_count():
    files, dirs = count(_tree())
    assert len(all_file_paths(_tree())) == files + dirs


def test_empty_inputs():
    assert total_size([]) == 0
    assert count(None) == (0, 0)
    assert all_file_paths([]) == []


def test_paths_list_json_round_trip():
    paths = ["/a", "/中文/b c"]
    doc = json.loads(paths_list_json(paths))
    assert doc == {"list": [{"path": "/a"}, {"path": "/中文/b c"}]}


def test_paths_list_json_escapes_html():
    text = paths_list_json(["/a&b"])
    assert "&" not in text
    assert "\\u0026" in text
    assert json.loads(text)["list"][0]["path"] == "/a&b"


def test_cpmv_list_json_round_trip():
    items = [CpMv("/a/x", "/b/y"), CpMv("/c", "/d")]
    doc = json.loads(cpmv_list_json(items))
    assert doc["list"] == [{"from": "/a/x", "to": "/b/y"}, {"from": "/c", "to": "/d"}]


def test_all_related_dir_dedupes_in_order():
    items = [CpMv("/a/x", "/b/y"), CpMv("/a/z", "/c/w"), CpMv("/b/q", "/a/r")]
    assert all_related_dir(items) == ["/a", "/b", "/c"]


def test_all_related_dir_root_and_relative():
    assert all_related_dir([CpMv("/top", "name")]) == ["/", "."]


def test_order_options_accept_enums():
    opts = OrderOptions(by=OrderBy.SIZE, order=Order.DESC)
    assert opts.by.value == "size"
    assert opts.order.value == "desc"
    assert OrderOptions() == OrderOptions(by=OrderBy("name"), order=Order("asc"))