import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Loggers of the scanning engines, configured together by the CLI.
ENGINE_LOGGERS = (
    "rna_hairpin.folding.stem_loops",
    "rna_hairpin.folding.selection",
    "rna_hairpin.precursor.precursor_hairpins",
    "rna_hairpin.energies.energy_loader",
)

VERBOSITY_LEVELS = {
    0: logging.WARNING,
    1: logging.INFO,
    2: logging.DEBUG,
}


def get_log_file_path(
        module_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Build a log file path for a logger name, creating the directory if needed.

    Parameters
    ----------
    module_name : str
        Logger name (e.g., "rna_hairpin.precursor.precursor_hairpins").
    log_dir : Optional[Path], optional
        Target directory. Defaults to `DEFAULT_LOG_DIR`.
    include_timestamp : bool, optional
        Append ``_YYYYmmdd_HHMMSS`` so runs do not overwrite each other.

    Returns
    -------
    Path
        The full path of the log file.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    log_dir.mkdir(parents=True, exist_ok=True)

    # Dotted logger names become flat file names
    safe_name = module_name.replace(".", "_")

    if include_timestamp:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{safe_name}_{timestamp}.log"
    else:
        filename = f"{safe_name}.log"

    return log_dir / filename


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
) -> logging.Logger:
    """
    Configure and return a logger with a stdout handler and an optional file handler.

    Existing handlers on the logger are cleared first so repeated CLI invocations
    in one process do not duplicate messages.

    Parameters
    ----------
    name : str
        The logger name, typically `__name__`.
    level : int, optional
        Base level for the logger and its handlers, by default `logging.INFO`.
    log_file : Optional[str], optional
        Explicit log file path; overrides the generated path.
    log_dir : Optional[Path], optional
        Directory for a generated log file when `log_file` is not given.
    enable_file_logging : bool, optional
        Create a timestamped log file when `log_file` is not given.
    console_level, file_level : Optional[int], optional
        Per-handler overrides of `level`.

    Returns
    -------
    logging.Logger
        The configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Drop handlers from a previous configuration
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    logger.addHandler(console_handler)

    # File handler: explicit path first, else a timestamped file
    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a')
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
        file_handler = logging.FileHandler(log_path, mode='a')
        logger.info(f"Logging to file: {log_path}")

    if file_handler:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(file_level if file_level is not None else level)
        logger.addHandler(file_handler)

    return logger


def configure_engine_logging(
    verbose_level: int,
    log_file: Optional[str] = None,
    extra_loggers: Iterable[str] = (),
) -> int:
    """
    Apply one verbosity level to every engine logger (plus any extra names).

    Verbosity 0 keeps only warnings on the console; 1 adds progress (INFO);
    2 and above add DEBUG detail. File logging is switched on whenever the run is
    verbose or an explicit `log_file` is given.

    Returns
    -------
    int
        The resolved `logging` level.
    """
    # Verbosity above 2 is treated as DEBUG
    log_level = VERBOSITY_LEVELS.get(min(verbose_level, 2), logging.WARNING)
    should_log_to_file = verbose_level > 0 or log_file is not None

    for logger_name in (*extra_loggers, *ENGINE_LOGGERS):
        setup_logger(
            logger_name,
            level=log_level,
            log_file=log_file,
            enable_file_logging=should_log_to_file,
        )

    return log_level
