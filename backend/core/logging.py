from __future__ import annotations

import logging
import logging.handlers
from pathlib import Path

from core.config import BACKEND_DIR


_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"
_DATEFMT = "%Y-%m-%dT%H:%M:%S%z"


def _level_for(environment: str, override: str | None) -> int:
    if override:
        named = logging.getLevelName(override.strip().upper())
        if isinstance(named, int):
            return named
    env = (environment or "development").lower().strip()
    return logging.INFO if env == "production" else logging.DEBUG


def setup_logging(*, environment: str, level_override: str | None = None, log_dir: Path | None = None) -> None:
    """Configure application logging once per process.

    Development logs to the console at DEBUG. Production adds a rotating
    ``logs/planner.log`` and defaults to INFO. ``level_override`` (e.g.
    ``"WARNING"``) wins over both.
    """

    root = logging.getLogger()
    if root.handlers:
        return

    level = _level_for(environment, level_override)
    formatter = logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]

    if (environment or "").lower().strip() == "production":
        target = Path(log_dir) if log_dir is not None else Path(BACKEND_DIR) / "logs"
        target.mkdir(parents=True, exist_ok=True)
        rotating = logging.handlers.RotatingFileHandler(
            target / "planner.log",
            maxBytes=10 * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        rotating.setFormatter(formatter)
        handlers.append(rotating)

    for handler in handlers:
        handler.setLevel(level)
    logging.basicConfig(level=level, handlers=handlers)

    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)
