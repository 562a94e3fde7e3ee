"""Logging utilities for the application."""

from __future__ import annotations
import logging
from datetime import datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Dict, List, Optional

from .config.settings import Settings, settings as default_settings

PACKAGE_LOGGER = "razorinv"
API_LOGGER = "razorinv.api"

_MAX_BYTES = 10 * 1024 * 1024  # 10MB
_BACKUPS = 5


def logs_dir(cfg: Optional[Settings] = None) -> Path:
    """Get the logs directory path."""
    cfg = cfg or default_settings
    log_dir = Path(cfg.log_dir or "logs")
    log_dir.mkdir(parents=True, exist_ok=True)
    return log_dir


def _file_handler(path: Path, fmt: str, level: int = logging.NOTSET) -> RotatingFileHandler:
    handler = RotatingFileHandler(path, maxBytes=_MAX_BYTES, backupCount=_BACKUPS, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt))
    handler.setLevel(level)
    return handler


class LogManager:
    """Attach file handlers to the package loggers and read them back."""

    def __init__(self, cfg: Optional[Settings] = None):
        self.cfg = cfg or default_settings
        self.log_dir = logs_dir(self.cfg)
        self.loggers: Dict[str, logging.Logger] = {}
        self._setup_loggers()

    def _setup_loggers(self):
        level = logging.getLevelName(str(self.cfg.log_level).upper())
        if not isinstance(level, int):
            level = logging.INFO

        error_handler = _file_handler(
            self.log_dir / "error.log",
            '%(asctime)s - %(levelname)s - %(name)s - %(message)s\n%(pathname)s:%(lineno)d',
            logging.ERROR,
        )

        # Package logger: resources, normalizer, CLI
        system_logger = logging.getLogger(PACKAGE_LOGGER)
        system_logger.setLevel(level)
        system_logger.addHandler(
            _file_handler(self.log_dir / "system.log", '%(asctime)s - %(levelname)s - %(name)s - %(message)s')
        )
        system_logger.addHandler(error_handler)
        self.loggers["system"] = system_logger

        # HTTP logger
        api_logger = logging.getLogger(API_LOGGER)
        api_logger.propagate = False  # Keep request traffic out of system.log
        api_logger.setLevel(level)
        api_logger.addHandler(
            _file_handler(self.log_dir / "api.log", '%(asctime)s - %(levelname)s - %(message)s')
        )
        api_logger.addHandler(error_handler)
        self.loggers["api"] = api_logger

    def close(self) -> None:
        for logger in self.loggers.values():
            for handler in list(logger.handlers):
                if isinstance(handler, RotatingFileHandler):
                    logger.removeHandler(handler)
                    handler.close()

    def read_logs(self, log_type: str, max_lines: int = 1000, search_text: str = None, level_filter: str = None) -> List[Dict]:
        """Read logs from the specified log file with optional filtering."""
        log_file = self.log_dir / f"{log_type}.log"

        if not log_file.exists():
            return []

        try:
            with open(log_file, "r", encoding="utf-8") as f:
                lines = f.readlines()
        except OSError as e:
            return [{
                "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
                "level": "ERROR",
                "message": f"Failed to read log file: {str(e)}"
            }]

        # Get the last N lines (most recent logs first)
        lines = lines[-max_lines:]

        processed_logs = []
        for line in lines:
            # Expected format: '2025-09-10 12:34:56,789 - INFO - message'
            # or '2025-09-10 12:34:56,789 - INFO - logger.name - message'
            parts = line.split(" - ", 3)
            if len(parts) >= 3:
                timestamp = parts[0]
                level = parts[1]
                message = parts[-1]  # Last part is always the message

                if search_text and search_text.lower() not in line.lower():
                    continue
                if level_filter and level.strip() != level_filter:
                    continue

                processed_logs.append({
                    "timestamp": timestamp.strip(),
                    "level": level.strip(),
                    "message": message.strip()
                })
            elif processed_logs:
                # Continuation line (traceback, pathname)
                processed_logs[-1]["message"] += "\n" + line.strip()

        # Reverse to show newest at the top
        return list(reversed(processed_logs))


_log_manager: Optional[LogManager] = None


def get_log_manager(cfg: Optional[Settings] = None) -> LogManager:
    """Get the log manager instance, creating it on first use."""
    global _log_manager
    if _log_manager is None:
        _log_manager = LogManager(cfg)
    return _log_manager


def read_logs(log_type: str, max_lines: int = 1000, search_text: str = None, level_filter: str = None) -> List[Dict]:
    """Read logs from the specified log file with optional filtering."""
    return get_log_manager().read_logs(log_type, max_lines, search_text, level_filter)
