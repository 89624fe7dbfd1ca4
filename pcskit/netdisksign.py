"""Request signatures used by the netdisk web and client APIs."""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from time import time as _now

_LOCATE_DOWNLOAD_SALT = b"ebrcUYiuxaZv2XGu7KIYKxUrqfnOfpDF"
_SHARE_SURL_INFO_SALT = b"_sharesurlinfo!@#"


def dev_uid(feature: str) -> str:
    """Derive a device id: upper-case md5 hex of feature followed by '|0'."""
    digest = hashlib.md5(feature.encode("utf-8")).hexdigest()
    return (digest + "|0").upper()


def share_surl_info_sign(share_id: int) -> str:
    """Return the signature for a share-record detail query."""
    m = hashlib.md5(str(share_id).encode("ascii"))
    m.update(_SHARE_SURL_INFO_SALT)
    return m.hexdigest()


def sign2(key: str, data: str) -> bytes:
    """Stream-cipher signature over the code points of key and data."""
    if not key:
        return bytes(len(data))
    key_points = [ord(c) for c in key]
    state = list(range(256))
    u = 0
    for q in range(256):
        u = (u + state[q] + key_points[q % len(key_points)]) % 256
        state[q], state[u] = state[u], state[q]

    out = bytearray()
    i = u = 0
    for ch in data:
        i = (i + 1) % 256
        u = (u + state[i]) % 256
        state[i], state[u] = state[u], state[i]
        k = state[(state[i] + state[u]) % 256]
        out.append((ord(ch) ^ k) & 0xFF)
    return bytes(out)


@dataclass
class LocateDownloadSign:
    """Signature parameters for the locatedownload request."""

    time: int
    dev_uid: str
    rand: str = ""

    @classmethod
    def create(cls, uid: int, bduss: str) -> "LocateDownloadSign":
        """Build a signature for now, with the device id derived from bduss."""
        sign = cls(time=int(_now()), dev_uid=dev_uid(bduss))
        sign.sign(uid, bduss)
        return sign

    def sign(self, uid: int, bduss: str) -> None:
        """Compute rand from uid, bduss, time and the device id."""
        bduss_hex = hashlib.sha1(bduss.encode("utf-8")).hexdigest()
        h = hashlib.sha1(bduss_hex.encode("ascii"))
        h.update(str(uid).encode("ascii"))
        h.update(_LOCATE_DOWNLOAD_SALT)
        h.update(str(self.time).encode("ascii"))
        h.update(self.dev_uid.encode("utf-8"))
        self.rand = h.hexdigest()

    def url_param(self) -> str:
        """Render the query-string fragment carrying the signature."""
        return (
            f"time={self.time}&rand={self.rand}"
            f"&devuid={self.dev_uid}&cuid={self.dev_uid}"
        )