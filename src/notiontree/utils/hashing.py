"""Content-independent names for snapshotted assets."""

from __future__ import annotations

import hashlib
from urllib.parse import urlsplit


def url_path_digest(url: str) -> str:
    """MD5 hex digest of the path component of *url*.

    Scheme, host, query and fragment are ignored, so every signed variant
    Notion hands out for one stored file shares a digest.

    Examples
    --------
    >>> url_path_digest("https://s3.example.com/a.png?sig=1") == url_path_digest("/a.png")
    True

    Raises :class:`ValueError` for URLs :func:`urllib.parse.urlsplit`
    rejects.  The digest names files; it is not a security primitive.
    """
    path = urlsplit(url).path
    return hashlib.md5(path.encode("utf-8"), usedforsecurity=False).hexdigest()
