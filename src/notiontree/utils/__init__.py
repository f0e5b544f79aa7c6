from .hashing import url_path_digest
from .timestamps import parse_timestamp

__all__ = [
    "parse_timestamp",
    "url_path_digest",
]
