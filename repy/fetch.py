"""
Getting the raw REPY file.

The Technion publishes REPY inside REPFILE.zip. This module downloads the
archive, extracts the report from it, and can recode the report from DOS
Hebrew (CP862) to ISO Hebrew (ISO-8859-8) for a human-readable mirror.
"""

from __future__ import annotations

import io
import logging
import zipfile
from pathlib import Path
from typing import Optional

import requests

from repy.config import HTTP_TIMEOUT_SECONDS, MIRROR_ENCODING, REPFILE_URL, REPY_ENCODING, REPY_MEMBER_NAME
from repy.errors import ArchiveError

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Download & extract
# ---------------------------------------------------------------------------


def download_repfile(url: str = REPFILE_URL, timeout: float = HTTP_TIMEOUT_SECONDS) -> bytes:
    """
    Download the REPFILE.zip archive and return its bytes.
    """
    log.info("Downloading %s", url)
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as exc:
        raise ArchiveError(f"failed to download {url!r}: {exc}") from exc
    return resp.content


def extract_from_zip(data: bytes, name: str = REPY_MEMBER_NAME) -> bytes:
    """
    Return the bytes of the file called `name` inside the zip archive `data`.
    """
    try:
        with zipfile.ZipFile(io.BytesIO(data)) as archive:
            if name not in archive.namelist():
                raise ArchiveError(f"didn't find a file called {name!r} in zip archive")
            return archive.read(name)
    except zipfile.BadZipFile as exc:
        raise ArchiveError(f"error parsing zip archive: {exc}") from exc


def fetch_repy(
    url: str = REPFILE_URL,
    name: str = REPY_MEMBER_NAME,
    timeout: float = HTTP_TIMEOUT_SECONDS,
) -> bytes:
    """
    Download REPFILE.zip and return the raw (CP862) REPY bytes.
    """
    return extract_from_zip(download_repfile(url, timeout=timeout), name=name)


# ---------------------------------------------------------------------------
# Recoding
# ---------------------------------------------------------------------------


def recode(data: bytes, from_charset: str = REPY_ENCODING, to_charset: str = MIRROR_ENCODING) -> bytes:
    """
    Convert `data` between two 8-bit charsets. Characters missing in
    `to_charset` (box drawing, mostly) are replaced.
    """
    return data.decode(from_charset).encode(to_charset, errors="replace")


def save_repy(data: bytes, out_path: str | Path, mirror_path: Optional[str | Path] = None) -> None:
    """
    Write the raw report to `out_path`, and an ISO-8859-8 copy to
    `mirror_path` if given.
    """
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(data)

    if mirror_path is not None:
        mirror = Path(mirror_path)
        mirror.parent.mkdir(parents=True, exist_ok=True)
        mirror.write_bytes(recode(data))
