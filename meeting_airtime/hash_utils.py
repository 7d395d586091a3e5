# Meeting Airtime
# © 2026 Dennis Schulmeister-Zimolong <dennis@wpvs.de>
#
# This source code is licensed under the BSD 3-Clause License found in the
# LICENSE file in the root directory of this source tree.

from __future__ import annotations

"""Hash utilities.

MD5 is used only for change detection of result work files (transcript bytes
and analysis settings). It is not used for cryptographic security.
"""

from pathlib import Path
import hashlib
import json
from typing import Any


def _md5():
    # Some environments run in FIPS mode and reject MD5 unless it is flagged
    # as not security relevant.
    return hashlib.md5(usedforsecurity=False)


def md5_file(path: Path) -> str:
    """Compute an MD5 hash for a file.

    Args:
        path:
            File path.

    Returns:
        Lowercase hex MD5 digest.
    """

    hasher = _md5()
    with path.open("rb") as handle:
        for chunk in iter(lambda: handle.read(1024 * 1024), b""):
            hasher.update(chunk)

    return hasher.hexdigest()


def md5_text(text: str) -> str:
    """Compute an MD5 hash for a text string (UTF-8 encoded)."""

    hasher = _md5()
    hasher.update(text.encode("utf-8"))
    return hasher.hexdigest()


def md5_json(value: Any) -> str:
    """Return a stable hash of a JSON-serializable value.

    Keys are sorted so that logically equal mappings hash the same.
    """

    canonical = json.dumps(value, sort_keys=True, ensure_ascii=False, separators=(",", ":"))
    return md5_text(canonical)
