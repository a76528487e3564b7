"""logging.py
Holds configured loggers.
"""
from typing import Literal
import logging
import os
import sys
from datetime import datetime
from functools import lru_cache
from dotenv import load_dotenv

load_dotenv()  # load .env

ENV = os.getenv("ENV", "development")  # e.g., development, staging, production
LOG_FOLDER = os.getenv("LOG_FOLDER", "logs")

LoggerType = Literal["default", "pytest", "pipeline", "pipeline_error"]

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


class LoggerFactory:
    """
    Factory to create configured loggers for the different pipeline stages.

    Logging behavior depends on environment (ENV):
      - Console logging is optional.
      - Local file logging in development (separate folders per logger type).
      - Cloud logging (optional) in staging/production using watchtower.
      - Duplicate handlers and propagation are avoided automatically.
    """

    def __init__(self, env: str = ENV, base_log_folder: str = LOG_FOLDER):
        self.env = env
        self.base_log_folder = base_log_folder

    def get_logger(
        self,
        name: str,
        logger_type: LoggerType = "default",
        console: bool = True
    ) -> logging.Logger:
        """
        Create and return a configured logger based on type.
        """
        logger = logging.getLogger(name)

        # Prevent duplicate handlers
        if logger.hasHandlers():
            return logger

        logger.propagate = False
        level = logging.DEBUG if logger_type in ["default", "pytest"] else logging.INFO
        logger.setLevel(level)

        formatter = logging.Formatter(LOG_FORMAT)

        if console:
            ch = logging.StreamHandler()
            ch.setFormatter(formatter)
            logger.addHandler(ch)

        if self.env in ["development", "local", "test"]:
            self._add_file_handler(
                logger=logger,
                log_folder=self._get_log_folder_for_type(logger_type),
                file_prefix=name,
                formatter=formatter,
            )
        elif self.env in ["staging", "production"]:
            self._add_cloudwatch_handler(logger, logger_type, formatter)

        # Safety: ensure at least one handler exists
        if not logger.handlers:
            ch = logging.StreamHandler()
            ch.setFormatter(formatter)
            logger.addHandler(ch)

        return logger

    @lru_cache(maxsize=None)
    def get_stage_logger(self, stage_name: str) -> logging.Logger:
        """
        Return a stage-specific pipeline logger that writes to its own subfolder.
        Example:
            logs/pipeline/segmenter/segmenter_20251028_103022.log
            logs/pipeline/merger/merger_20251028_103022.log
        """
        safe_stage_name = stage_name or "other"

        logger = logging.getLogger(f"pipeline_{safe_stage_name}")

        # Prevent duplicate handlers (esp. if re-requested)
        if logger.hasHandlers():
            return logger

        logger.setLevel(logging.DEBUG)
        logger.propagate = False  # do not print to console

        if self.env in ["staging", "production"]:
            self._add_cloudwatch_handler(logger, "pipeline", logging.Formatter(LOG_FORMAT))
        else:
            self._add_file_handler(
                logger=logger,
                log_folder=os.path.join(self._get_log_folder_for_type("pipeline"), safe_stage_name),
                file_prefix=safe_stage_name,
                formatter=logging.Formatter(LOG_FORMAT),
            )
        if not logger.handlers:
            logger.addHandler(logging.NullHandler())

        return logger

    def _add_file_handler(
        self,
        logger: logging.Logger,
        log_folder: str,
        file_prefix: str,
        formatter: logging.Formatter,
    ) -> None:
        """Attach a timestamped file handler (one file per logger and process start)."""
        os.makedirs(log_folder, exist_ok=True)
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file_path = os.path.join(log_folder, f"{file_prefix}_{timestamp}.log")
        fh = logging.FileHandler(log_file_path, mode="a", encoding="utf-8", delay=True)
        fh.setFormatter(formatter)
        logger.addHandler(fh)

    def _get_log_folder_for_type(self, logger_type: LoggerType) -> str:
        """Return folder path based on logger type."""
        if any("pytest" in arg for arg in sys.argv):
            return os.path.join(self.base_log_folder, "tests")

        mapping = {
            "default": self.base_log_folder,
            "pytest": os.path.join(self.base_log_folder, "tests"),
            "pipeline": os.path.join(self.base_log_folder, "pipeline"),
            "pipeline_error": os.path.join(self.base_log_folder, "pipeline_errors"),
        }
        return mapping.get(logger_type, self.base_log_folder)

    def _add_cloudwatch_handler(
        self,
        logger: logging.Logger,
        logger_type: LoggerType,
        formatter: logging.Formatter,
    ):
        """Optional AWS CloudWatch logging for staging/production."""
        try:
            import watchtower

            log_group = {
                "default": "resume_synth_logs",
                "pipeline": "resume_synth_pipeline_logs",
                "pipeline_error": "resume_synth_pipeline_error_logs",
            }.get(logger_type, "resume_synth_logs")

            aws_handler = watchtower.CloudWatchLogHandler(log_group=log_group)
            aws_handler.setFormatter(formatter)
            logger.addHandler(aws_handler)

        except ImportError:
            logger.warning("watchtower not installed, skipping cloud logging.")
