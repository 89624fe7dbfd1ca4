"""Request signing, error decoding, expiring caches and data models for a Baidu netdisk client."""

__version__ = "0.1.0"

__all__ = [
    "cachemap",
    "clouddl",
    "errors",
    "expires",
    "files",
    "netdisksign",
    "panhome",
    "publicsuffix",
    "upload",
]