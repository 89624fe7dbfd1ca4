# pcskit

pcskit holds building blocks for a Baidu netdisk (PCS) client. It is a
library with no command of its own. Import the modules you need:

- `pcskit.expires`: `Expires` is a deadline that can also be expired by hand
  with `set_expired`. `expires_at` builds one for an absolute moment.
  `DataExpires` is an `Expires` that carries a `data` value.
- `pcskit.cachemap`: `CacheUnit` is a thread-safe mapping whose entries drop
  out once they expire. `CacheOpMap` holds one `CacheUnit` for each operation
  name. `CacheOpMap.cache_operation` computes a value for a key only once,
  even when many threads ask for it together. A `None` result is not stored.
  `GLOBAL_CACHE_OP_MAP` is a shared instance.
- `pcskit.netdisksign`: request signatures. It provides `dev_uid`,
  `LocateDownloadSign` (`create`, `sign`, `url_param`),
  `share_surl_info_sign` and the `sign2` stream cipher.
- `pcskit.errors`: the exception classes `PCSErrInfo`, `PanErrorInfo`,
  `XPanErrorInfo` and `DlinkErrInfo`, all based on `PCSError`, plus the
  `ErrType` enum. The message lookups are `find_pan_err` and
  `find_xpan_err`. `handle_json_parse` and the `decode_*_json_error`
  helpers decode a reply (bytes, str, a file-like object or a mapping). They
  return the decoded object, or raise the error marked as a JSON or remote
  error.
- `pcskit.panhome`: `PanHome` fetches the pan home page with a `requests`
  session, parses its signing material (`parse_sign_info`,
  `check_location`) and computes a `SignRes` (`sign_from_info`).
  `cache_signature` keeps the result for an hour. `set_sign_expires` forces
  a refresh. Failures raise `CookieInvalidError`, `UnknownLocationError` or
  `MatchPanHomeError`.
- `pcskit.files`: the `FileDirectory` metadata model (`from_json`,
  `fix_md5`) and the sort options `OrderBy`, `Order`, `OrderOptions` and
  `DEFAULT_ORDER_OPTIONS`. `total_size`, `count` and `all_file_paths` walk
  a tree of entries. `CpMv`, `paths_list_json`, `cpmv_list_json` and
  `all_related_dir` build the JSON bodies of delete, copy and move requests
  and find the directories those requests affect.
- `pcskit.clouddl`: the offline-download task models `CloudDlTaskInfo`
  (`from_json`, `status_text`) and `CloudDlFileInfo`, plus `status_text`.
- `pcskit.upload`: `RapidUploadInfo`, `UploadSeq`, `PrecreateInfo` and
  `parse_precreate`, which reads a precreate reply. The size limits are
  `MAX_RAPID_UPLOAD_SIZE`, `SLICE_MD5_SIZE` and the other constants.
- `pcskit.publicsuffix`: `public_suffix`, a cookie public-suffix rule that
  treats every `*.baidu.com` host as one site.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Examples

Signing a locate-download request:

```python
from pcskit.netdisksign import LocateDownloadSign

sign = LocateDownloadSign.create(10086, "token")
query = sign.url_param()  # "time=...&rand=...&devuid=...&cuid=..."
```

Caching an expensive lookup for one minute:

```python
from pcskit.cachemap import CacheOpMap
from pcskit.expires import DataExpires

cache = CacheOpMap()
entry = cache.cache_operation(
    "list", "/photos", lambda: DataExpires(["a.jpg", "b.jpg"], 60)
)
print(entry.data)
```

Decoding an error reply:

```python
from pcskit.errors import decode_pan_json_error, PanErrorInfo

try:
    decode_pan_json_error("delete", '{"errno": -9}')
except PanErrorInfo as exc:
    print(exc)  # names the operation, the code and its message
```

Summing up a directory tree:

```python
from pcskit.files import FileDirectory, total_size, count

entries = [FileDirectory.from_json({"path": "/a.txt", "size": 10})]
print(total_size(entries), count(entries))  # 10 (1, 0)
```

## What pcskit does not do

pcskit is not a complete netdisk client. The only request it sends is the
home-page fetch in `PanHome`. It does not list, search, upload, download,
share or delete files on the server, it does not log in, and it has no
command-line interface. Use its models, signatures and error decoding
inside your own HTTP code.