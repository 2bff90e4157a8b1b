"""
Runtime configuration read from the environment.
"""
import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_BATCH_FILE = "examples/batch.json"
DEFAULT_LOG_LEVEL = "WARNING"


@dataclass(frozen=True)
class Config:
    batch_file: Path
    log_level: str


def load_config(cwd: Path | None = None) -> Config:
    """
    Build the configuration from SIGVERIFY_* environment variables.

    Args:
        cwd: Directory a relative batch path is resolved against (defaults to the working directory)

    Returns:
        Config with an absolute batch file path
    """
    base = cwd if cwd is not None else Path.cwd()
    batch_file = Path(os.environ.get("SIGVERIFY_BATCH_FILE", DEFAULT_BATCH_FILE)).expanduser()
    if not batch_file.is_absolute():
        batch_file = base / batch_file
    log_level = os.environ.get("SIGVERIFY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    return Config(batch_file=batch_file, log_level=log_level)
