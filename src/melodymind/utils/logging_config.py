"""
MelodyMind Logging Configuration

structlog rendered through stdlib logging. Besides the main and error logs,
tier fallthroughs and hosted API traffic get their own rotating files so a
silent fallback to the local heuristic can be traced after the fact.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Dict, Optional

import structlog


class MelodyMindLogger:
    """
    Process-wide logging setup for the mood engine.

    Writes to:
    - melodymind.log (everything at the configured level)
    - errors.log (ERROR and above)
    - inference.log (tier chains, performance metrics)
    - api.log (hosted model requests)
    """

    # logger name prefix -> component log file
    COMPONENT_LOGS: Dict[str, str] = {
        "melodymind.services.tiered_inference": "inference.log",
        "performance": "inference.log",
        "melodymind.api": "api.log",
        "api": "api.log",
    }

    QUIET_MODULES = ["aiohttp", "aiohttp.access", "aiohttp.client", "urllib3", "asyncio"]

    def __init__(
        self,
        log_dir: Optional[str] = "logs",
        log_level: str = "INFO",
        enable_console: bool = True,
        max_file_size: int = 5 * 1024 * 1024,
        backup_count: int = 3
    ):
        """
        Args:
            log_dir: Directory for log files; None logs to the console only
            log_level: Level name for the root logger and console
            enable_console: Attach a colored stdout handler
            max_file_size: Bytes per file before it is rotated
            backup_count: Rotated files kept per log
        """
        self.log_dir = Path(log_dir) if log_dir else None
        self.log_level = getattr(logging, log_level.upper())
        self.enable_console = enable_console
        self.max_file_size = max_file_size
        self.backup_count = backup_count

        if self.log_dir is not None:
            self.log_dir.mkdir(parents=True, exist_ok=True)

        self._configure()

    def _configure(self):
        root_logger = logging.getLogger()
        root_logger.handlers.clear()
        for prefix in self.COMPONENT_LOGS:
            logging.getLogger(prefix).handlers.clear()

        self._configure_structlog()

        if self.log_dir is not None:
            root_logger.addHandler(self._rotating_handler("melodymind.log", self.log_level))
            root_logger.addHandler(self._rotating_handler("errors.log", logging.ERROR))
            self._attach_component_handlers()

        if self.enable_console:
            root_logger.addHandler(self._console_handler())

        for module in self.QUIET_MODULES:
            logging.getLogger(module).setLevel(logging.WARNING)

        root_logger.setLevel(self.log_level)

    def _configure_structlog(self):
        """Route structlog events through stdlib handlers."""
        structlog.configure(
            processors=[
                structlog.stdlib.filter_by_level,
                structlog.stdlib.add_logger_name,
                structlog.stdlib.add_log_level,
                structlog.processors.TimeStamper(fmt="iso"),
                structlog.processors.StackInfoRenderer(),
                structlog.processors.format_exc_info,
                structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

    def _attach_component_handlers(self):
        handlers: Dict[str, logging.Handler] = {}
        for prefix, filename in self.COMPONENT_LOGS.items():
            if filename not in handlers:
                handlers[filename] = self._rotating_handler(filename, logging.DEBUG)
            logging.getLogger(prefix).addHandler(handlers[filename])

    def _rotating_handler(self, filename: str, level: int) -> logging.handlers.RotatingFileHandler:
        handler = logging.handlers.RotatingFileHandler(
            filename=self.log_dir / filename,
            maxBytes=self.max_file_size,
            backupCount=self.backup_count,
            encoding="utf-8"
        )
        handler.setLevel(level)
        handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.processors.JSONRenderer(),
            ],
        ))
        return handler

    def _console_handler(self) -> logging.Handler:
        handler = logging.StreamHandler(sys.stdout)
        handler.setLevel(self.log_level)
        handler.setFormatter(structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()),
            ],
        ))
        return handler

    def get_logger(self, name: str) -> structlog.BoundLogger:
        return structlog.get_logger(name)

    def log_performance(self, operation: str, duration: float, **kwargs):
        """Emit a timing event for one chain run or request."""
        self.get_logger("performance").info(
            "performance_metric",
            operation=operation,
            duration_ms=round(duration * 1000, 2),
            **kwargs
        )

    def log_api_request(
        self,
        method: str,
        url: str,
        status_code: int,
        duration: float,
        **kwargs
    ):
        """Emit one hosted model request; 4xx/5xx are logged at WARNING."""
        log = self.get_logger("api")
        emit = log.warning if status_code >= 400 else log.info
        emit(
            "api_request",
            method=method,
            url=url,
            status_code=status_code,
            duration_ms=round(duration * 1000, 2),
            **kwargs
        )


_logger_instance: Optional[MelodyMindLogger] = None


def setup_logging(
    log_dir: Optional[str] = "logs",
    log_level: str = "INFO",
    enable_console: bool = True,
    **kwargs
) -> MelodyMindLogger:
    """
    Configure process-wide logging. Calling it again replaces the setup.

    Args:
        log_dir: Directory for log files; None logs to the console only
        log_level: Level name, e.g. ``"DEBUG"``
        enable_console: Attach a stdout handler
        **kwargs: Passed through to MelodyMindLogger

    Returns:
        The active MelodyMindLogger
    """
    global _logger_instance

    _logger_instance = MelodyMindLogger(
        log_dir=log_dir,
        log_level=log_level,
        enable_console=enable_console,
        **kwargs
    )
    return _logger_instance


def get_logger(name: str) -> structlog.BoundLogger:
    """
    Logger for ``name`` once logging is configured.

    Raises:
        RuntimeError: If setup_logging() has not been called
    """
    if _logger_instance is None:
        raise RuntimeError("Logging not setup. Call setup_logging() first.")

    return _logger_instance.get_logger(name)


def log_performance(operation: str, duration: float, **kwargs):
    """Timing event; no-op until logging is configured."""
    if _logger_instance:
        _logger_instance.log_performance(operation, duration, **kwargs)


def log_api_request(method: str, url: str, status_code: int, duration: float, **kwargs):
    """Request event; no-op until logging is configured."""
    if _logger_instance:
        _logger_instance.log_api_request(method, url, status_code, duration, **kwargs)
