"""
Configuration.

Defaults live here as module constants. A few of them can be overridden from
the environment (or a .env file), see get_settings().
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv


# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

# Official Technion archive containing the REPY file
REPFILE_URL = "http://ug.technion.ac.il/rep/REPFILE.zip"

# Name of the report inside REPFILE.zip
REPY_MEMBER_NAME = "REPY"

# The report is written in DOS Hebrew
REPY_ENCODING = "cp862"

# Human-readable mirrors are written in ISO Hebrew
MIRROR_ENCODING = "iso8859_8"

# How many times end-of-input may be hit before giving up
MAX_EOF_HITS = 10

HTTP_TIMEOUT_SECONDS = 30.0


@dataclass
class Settings:
    repfile_url: str
    member_name: str
    http_timeout: float
    log_level: str


def _get_timeout() -> float:
    raw = os.getenv("REPY_HTTP_TIMEOUT", "")
    if not raw:
        return HTTP_TIMEOUT_SECONDS
    try:
        return float(raw)
    except ValueError:
        logging.warning("Invalid REPY_HTTP_TIMEOUT %r, falling back to %s", raw, HTTP_TIMEOUT_SECONDS)
        return HTTP_TIMEOUT_SECONDS


def get_settings() -> Settings:
    """
    Build Settings from the environment. Values from a .env file in the
    working directory are loaded first (existing variables win).
    """
    load_dotenv()
    return Settings(
        repfile_url=os.getenv("REPY_URL", REPFILE_URL),
        member_name=os.getenv("REPY_MEMBER_NAME", REPY_MEMBER_NAME),
        http_timeout=_get_timeout(),
        log_level=os.getenv("REPY_LOG_LEVEL", "WARNING").upper(),
    )
