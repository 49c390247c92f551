"""Download and unpack the front-end framework source.

The previous local copy is always removed first, so every install builds
from a fresh archive. GitHub-style archives wrap their content in a single
``<repo>-<branch>/`` directory; that level is stripped on extraction.

Examples
--------
>>> import asyncio
>>> from tenant_installer import config
>>> asyncio.run(fetch_framework(config.FRAMEWORK_ARCHIVE_URL, config.FRAMEWORK_DIR))  # doctest: +SKIP
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path, PurePosixPath

import aiohttp

from tenant_installer.exceptions import ExternalServiceError
from tenant_installer.fs_utils import safe_rmtree

logger = logging.getLogger(__name__)


def _common_root(names: list[str]) -> str | None:
    tops = {PurePosixPath(name).parts[0] for name in names if PurePosixPath(name).parts}
    if len(tops) != 1:
        return None
    top = tops.pop()
    # A lone top-level file is not a wrapper directory.
    if all(name == top for name in names):
        return None
    return top


def extract_archive(payload: bytes, dest: Path) -> int:
    r"""Extract a zip ``payload`` into ``dest``.

    Parameters
    ----------
    payload : bytes
        Raw zip archive.
    dest : Path
        Target directory (created if missing).

    Returns
    -------
    int
        Number of files written.

    Raises
    ------
    ExternalServiceError
        If the payload is not a zip archive or an entry escapes ``dest``.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(payload))
    except zipfile.BadZipFile as exc:
        raise ExternalServiceError(
            "Downloaded framework is not a zip archive.", transient=False
        ) from exc

    dest = Path(dest)
    dest.mkdir(parents=True, exist_ok=True)
    root = dest.resolve()
    written = 0
    with archive:
        infos = archive.infolist()
        prefix = _common_root([info.filename for info in infos])
        for info in infos:
            parts = PurePosixPath(info.filename).parts
            if prefix is not None:
                parts = parts[1:]
            if not parts:
                continue
            target = dest.joinpath(*parts)
            if not target.resolve().is_relative_to(root):
                raise ExternalServiceError(
                    f"Archive entry escapes the target directory: {info.filename}",
                    transient=False,
                )
            if info.is_dir():
                target.mkdir(parents=True, exist_ok=True)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            with archive.open(info) as source, target.open("wb") as sink:
                sink.write(source.read())
            written += 1
    return written


async def download_archive(url: str) -> bytes:
    """GET ``url`` and return the body; anything but HTTP 200 is an error."""
    try:
        async with aiohttp.ClientSession() as session:
            async with session.get(url) as response:
                if response.status != 200:
                    raise ExternalServiceError(
                        f"Framework download failed with HTTP {response.status}.",
                        context={"url": url, "status_code": response.status},
                        transient=response.status >= 500,
                    )
                return await response.read()
    except aiohttp.ClientError as exc:
        raise ExternalServiceError(
            f"Framework download failed: {exc}", context={"url": url}
        ) from exc


async def fetch_framework(url: str, dest: Path) -> int:
    r"""Replace ``dest`` with a fresh copy of the framework archive at ``url``.

    Returns
    -------
    int
        Number of files extracted.

    Raises
    ------
    ExternalServiceError
        If the download or the extraction fails.
    PermissionError
        If ``dest`` is not a removable installer directory.
    """
    safe_rmtree(dest)
    logger.info("Downloading framework from %s", url)
    payload = await download_archive(url)
    count = extract_archive(payload, dest)
    logger.info("Extracted %d framework files to %s", count, dest)
    return count


__all__ = ["download_archive", "extract_archive", "fetch_framework"]
