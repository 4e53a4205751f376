"""Configuration management for ple-export.

This module centralizes file-system paths, environment variables, and the
JSON configuration that describes where book parameters live inside each
header sheet and how PDT 710 extracts are assembled.

Configuration file
------------------
* ``config/config.json``: header-sheet cell coordinates per book family,
  the PDT 710 field table, and the UIT multiplier used for consolidation.

Environment variables
---------------------
``PLE_OUTPUT_DIR`` overrides the default output directory used by the CLI;
``LOGS_DIR`` overrides where run logs are written. The logs directory is
created eagerly on import so the file handler can rely on its existence.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import UTC, datetime
from pathlib import Path
from typing import Any, cast

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
OUTPUT_DIR = Path(os.getenv("PLE_OUTPUT_DIR", PROJECT_ROOT / "data" / "output"))
LOGS_DIR = Path(os.getenv("LOGS_DIR", PROJECT_ROOT / "logs"))

LOGS_DIR.mkdir(parents=True, exist_ok=True)


def get_config() -> dict[str, Any]:
    """Load the primary project configuration.

    Returns
    -------
    dict[str, Any]
        Parsed contents of ``config/config.json``.

    Raises
    ------
    FileNotFoundError
        If ``config/config.json`` is missing.
    json.JSONDecodeError
        If the file exists but is not valid JSON.
    """
    config_path = CONFIG_DIR / "config.json"
    if not config_path.exists():
        msg = f"Configuration file not found: {config_path}"
        raise FileNotFoundError(msg)

    with Path(config_path).open(encoding="utf-8") as f:
        return json.load(f)  # type: ignore[no-any-return]


def setup_logging(name: str = "ple_export") -> logging.Logger:
    """Configure a console+file logger if not already present.

    Parameters
    ----------
    name : str, optional
        Logger namespace; reused to avoid duplicate handlers.

    Returns
    -------
    logging.Logger
        Logger with INFO-level console handler and DEBUG-level file handler
        under ``LOGS_DIR``.
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        # Console handler
        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)
        console_format = logging.Formatter("%(asctime)s - %(levelname)s - %(message)s")
        console_handler.setFormatter(console_format)
        logger.addHandler(console_handler)

        # File handler
        log_filename = f"{datetime.now(UTC).strftime('%Y-%m-%d')}_export.log"
        file_handler = logging.FileHandler(LOGS_DIR / log_filename, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_format = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger


# =============================================================================
# Header Sheet Configuration
# =============================================================================


def get_header_config(family: str, config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the header-sheet definition for a book family.

    Parameters
    ----------
    family : str
        Family key: ``"balances"``, ``"costs"``, or ``"assets"``.
    config : dict[str, Any], optional
        Preloaded configuration; loaded from disk when ``None``.

    Returns
    -------
    dict[str, Any]
        Mapping with ``sheet`` (header sheet name) and ``cells`` (parameter
        name to ``[row, column]`` coordinates).

    Raises
    ------
    KeyError
        If the family is not configured.
    """
    if config is None:
        config = get_config()

    families = config.get("header_sheets", {})
    if family not in families:
        msg = f"Header sheet for family '{family}' not found in config.json"
        raise KeyError(msg)
    return cast("dict[str, Any]", families[family])


def get_header_cells(family: str, config: dict[str, Any] | None = None) -> dict[str, tuple[int, int]]:
    """Return parameter cell coordinates for a book family.

    Parameters
    ----------
    family : str
        Family key (see :func:`get_header_config`).
    config : dict[str, Any], optional
        Preloaded configuration.

    Returns
    -------
    dict[str, tuple[int, int]]
        Parameter name to zero-based ``(row, column)``.
    """
    cells = get_header_config(family, config).get("cells", {})
    return {name: (int(pos[0]), int(pos[1])) for name, pos in cells.items()}


# =============================================================================
# PDT 710 Configuration
# =============================================================================


def get_pdt710_config(config: dict[str, Any] | None = None) -> dict[str, Any]:
    """Return the ``pdt710`` configuration block."""
    if config is None:
        config = get_config()
    return cast("dict[str, Any]", config.get("pdt710", {}))


def get_uit_multiplier(config: dict[str, Any] | None = None) -> int:
    """Return how many UIT make up the consolidation threshold.

    Returns
    -------
    int
        Multiplier applied to the UIT rate (default ``2``).
    """
    return int(get_pdt710_config(config).get("uit_multiplier", 2))


def get_pdt_header_skip(config: dict[str, Any] | None = None) -> int:
    """Return the header rows skipped on PDT source sheets (default ``5``)."""
    return int(get_pdt710_config(config).get("header_skip", 5))


def get_pdt_fields(config: dict[str, Any] | None = None) -> list[dict[str, Any]]:
    """Return the PDT 710 field table.

    Each entry contains ``field`` (form field code), ``sheet`` (source book
    sheet), ``flag_column`` and ``flag`` (row discriminator, ``-1``/``null``
    when absent), ``name_column``, ``amount_column``, ``check_absolute`` and
    ``require_info``.

    Returns
    -------
    list[dict[str, Any]]
        Field definitions in export order.
    """
    return cast("list[dict[str, Any]]", get_pdt710_config(config).get("fields", []))
