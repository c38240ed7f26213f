import logging
import sys
from pathlib import Path

from loguru import logger

from src.bookstore.runtime.config.config_data import LoggingConfig
from src.bookstore.runtime.context import get_config

PLAIN_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "[<cyan>{extra[request_id]}</cyan>] | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

# Driver chatter is only interesting when something goes wrong
_QUIET_LOGGERS = ("pymongo", "pymongo.command", "pymongo.connection", "pymongo.serverSelection")


class InterceptHandler(logging.Handler):
    """Forward stdlib records (uvicorn, pymongo) into loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        # log_requests already writes one line per request
        if record.name == "uvicorn.access":
            return
        # and logs unhandled errors with the request bound
        if record.name == "uvicorn.error" and record.levelno >= logging.ERROR:
            return

        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def _with_request_id(record) -> None:
    record["extra"].setdefault("request_id", "-")


def _add_file_sink(log, cfg: LoggingConfig, diagnostics: bool) -> None:
    path = Path(cfg.file)
    path.parent.mkdir(parents=True, exist_ok=True)
    as_json = cfg.format == "json"
    log.add(
        str(path),
        level=cfg.level,
        format="{message}" if as_json else PLAIN_FORMAT,
        serialize=as_json,
        rotation=f"{cfg.max_size_mb} MB",
        retention=cfg.backup_count,
        compression="zip",
        enqueue=True,
        backtrace=diagnostics,
        diagnose=diagnostics,
    )


def _intercept_stdlib_logging() -> None:
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    for name in list(logging.root.manager.loggerDict):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("uvicorn.error").setLevel(logging.INFO)
    logging.getLogger("uvicorn.access").setLevel(logging.CRITICAL)


def configure_logging() -> None:
    """Install the console sink, the optional file sink and stdlib interception."""
    config = get_config()
    cfg = config.logging
    diagnostics = config.app.environment != "production"

    logger.remove()
    logger.configure(extra={"request_id": "-"})
    log = logger.patch(_with_request_id)

    log.add(
        sys.stderr,
        level=cfg.level,
        format=PLAIN_FORMAT,
        colorize=True,
        backtrace=diagnostics,
        diagnose=diagnostics,
    )
    if cfg.file:
        _add_file_sink(log, cfg, diagnostics)

    _intercept_stdlib_logging()

    log.info(
        "Logging configured",
        level=cfg.level,
        format=cfg.format,
        file=cfg.file,
        environment=config.app.environment,
    )
