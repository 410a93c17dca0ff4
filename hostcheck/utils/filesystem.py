# Author : Eshan Roy <eshanized@proton.me>
# SPDX-License-Identifier: MIT

"""
File output helpers.

The JSON report is often picked up by deploy tooling that polls for it, so it
is staged next to its destination and moved into place in one rename.
"""

import tempfile
from pathlib import Path

_TEMP_PREFIX = ".hostcheck_tmp_"


def atomic_write(target_path: Path, content: str, encoding: str = "utf-8") -> None:
    """
    Replace target_path with content, never leaving a partial file behind.

    The staging file lives in the target's directory so the final rename
    stays on one filesystem. On any failure the staging file is removed and
    whatever was at target_path before is left alone.

    Raises:
        OSError: If the staging file can't be written or moved into place.
    """
    directory = target_path.parent
    directory.mkdir(parents=True, exist_ok=True)

    with tempfile.NamedTemporaryFile(
        mode="w",
        encoding=encoding,
        dir=str(directory),
        prefix=_TEMP_PREFIX,
        suffix=".tmp",
        delete=False,
    ) as staging:
        staged_path = Path(staging.name)
        try:
            staging.write(content)
        except BaseException:
            staging.close()
            staged_path.unlink(missing_ok=True)
            raise

    try:
        staged_path.replace(target_path)
    except BaseException:
        staged_path.unlink(missing_ok=True)
        raise
