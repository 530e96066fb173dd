import logging
import sys
from pathlib import Path

from loguru import logger

from src.mirror.runtime.config import LoggingConfig
from src.mirror.runtime.context import get_config

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> <level>{level: <8}</level> "
    "[<cyan>{extra[request_id]}</cyan>] {name}:{line} - <level>{message}</level>"
)

# Libraries whose INFO output is per-operation noise for a mirror service
QUIET_LOGGERS = ("pymongo", "motor", "httpx", "httpcore")


class InterceptHandler(logging.Handler):
    """Forward stdlib records (uvicorn, pymongo, httpx) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # The request middleware writes the access log
        if record.name == "uvicorn.access":
            return
        try:
            level: str | int = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        logger.opt(depth=6, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _add_file_sink(cfg: LoggingConfig, verbose_tracebacks: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    logger.add(
        path,
        level=cfg.level,
        format="{message}" if as_json else CONSOLE_FORMAT,
        serialize=as_json,
        colorize=False,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        backtrace=verbose_tracebacks,
        diagnose=verbose_tracebacks,
    )


def configure_logging() -> None:
    """Install the loguru sinks described by ``config.logging``.

    The console sink is always present; the file sink only when
    ``logging.file`` is set. Log records outside a request carry ``-`` as
    their request id.
    """
    config = get_config()
    cfg = config.logging
    # Variable values in tracebacks can include document contents
    verbose_tracebacks = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"})
    logger.add(
        sys.stderr,
        level=cfg.level,
        format=CONSOLE_FORMAT,
        colorize=True,
        backtrace=verbose_tracebacks,
        diagnose=verbose_tracebacks,
    )
    if cfg.file:
        _add_file_sink(cfg, verbose_tracebacks)

    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    logger.bind(environment=config.app.environment).info(
        "Logging configured at {} ({} file sink: {})",
        cfg.level,
        cfg.format,
        cfg.file or "none",
    )
