"""Signature data scraped from the netdisk home page."""

from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Any, Optional, Union
from urllib.parse import urlsplit

import requests

from .expires import Expires
from .netdisksign import sign2

OPERATION_SIGNATURE = "signature"
PAN_HOME_URL = "https://pan.baidu.com/disk/home"
PAN_HOME_USER_AGENT = "Mozilla/5.0"
SIGN_LIFETIME_SECONDS = 3600

_SIGN_INFO_RE = re.compile(
    r'"sign1":"(.*?)"[\s\S]*"sign3":"(.*?)","timestamp":(\d*?),'
)


class PanHomeError(Exception):
    """Failure while reading the netdisk home page."""

    default_message = "pan home error"

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class CookieInvalidError(PanHomeError):
    """The login cookie was rejected."""

    default_message = "cookie is invalid"


class UnknownLocationError(PanHomeError):
    """The home page redirected somewhere unexpected."""

    default_message = "unknown location"


class MatchPanHomeError(PanHomeError):
    """The signature fields were not found in the home page."""

    default_message = "网盘首页数据匹配出错"


@dataclass(frozen=True)
class SignInfo:
    """Raw signing material found in the home page."""

    sign1: str
    sign3: str
    timestamp: str


@dataclass(frozen=True)
class SignRes:
    """A computed request signature and its timestamp."""

    sign: str
    timestamp: str


def parse_sign_info(body: Union[str, bytes]) -> SignInfo:
    """Extract sign1, sign3 and timestamp from the home page body."""
    if isinstance(body, (bytes, bytearray)):
        body = bytes(body).decode("utf-8", errors="replace")
    match = _SIGN_INFO_RE.search(body)
    if match is None:
        raise MatchPanHomeError()
    return SignInfo(sign1=match.group(1), sign3=match.group(2), timestamp=match.group(3))


def check_location(location: Optional[str]) -> None:
    """Raise if a redirect target means the login is not usable."""
    if not location:
        return
    if location == "/":
        raise CookieInvalidError()
    try:
        netloc = urlsplit(location).netloc
    except ValueError as exc:
        raise UnknownLocationError() from exc
    if netloc == "passport.baidu.com":
        raise CookieInvalidError()
    raise UnknownLocationError()


def sign_from_info(info: SignInfo) -> SignRes:
    """Compute the request signature from scraped signing material."""
    raw = sign2(info.sign3, info.sign1)
    return SignRes(sign=base64.b64encode(raw).decode("ascii"), timestamp=info.timestamp)


class PanHome:
    """Fetches and caches the signature needed by the web download API."""

    def __init__(self, session: Optional[Any] = None) -> None:
        self._session = session if session is not None else requests.Session()
        self._sign_res: Optional[SignRes] = None
        self._sign_expires: Optional[Expires] = None

    def fetch_sign_info(self) -> SignInfo:
        """Request the home page and parse its signing material."""
        resp = self._session.get(
            PAN_HOME_URL,
            headers={"User-Agent": PAN_HOME_USER_AGENT},
            allow_redirects=False,
        )
        try:
            check_location(resp.headers.get("Location", ""))
            return parse_sign_info(resp.content)
        finally:
            close = getattr(resp, "close", None)
            if close is not None:
                close()

    def signature(self) -> SignRes:
        """Fetch fresh signing material and compute a signature."""
        return sign_from_info(self.fetch_sign_info())

    def cache_signature(self) -> SignRes:
        """Return the cached signature, refreshing it once it has expired."""
        if self._sign_res is None or self._sign_expires is None or self._sign_expires.is_expired():
            self._sign_res = self.signature()
            self._sign_expires = Expires(SIGN_LIFETIME_SECONDS)
        return self._sign_res

    def set_sign_expires(self) -> None:
        """Mark the cached signature as stale."""
        if self._sign_expires is not None:
            self._sign_expires.set_expired(True)