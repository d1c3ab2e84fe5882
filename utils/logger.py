import json
import logging
import threading


class JsonFormatter(logging.Formatter):
    """
    Formatter that dumps each record as a JSON object.

    fmt_dict maps output keys to LogRecord attribute names.
    """
    def __init__(self, fmt_dict: dict = None, time_format: str = "%Y-%m-%dT%H:%M:%S"):
        super().__init__()
        self.fmt_dict = fmt_dict if fmt_dict is not None else {"message": "message"}
        self.default_time_format = time_format

    def usesTime(self) -> bool:
        return "asctime" in self.fmt_dict.values()

    def formatMessage(self, record) -> dict:
        return {key: record.__dict__[attr] for key, attr in self.fmt_dict.items()}

    def format(self, record) -> str:
        record.message = record.getMessage()
        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)

        message_dict = self.formatMessage(record)

        if record.exc_info and not record.exc_text:
            record.exc_text = self.formatException(record.exc_info)
        if record.exc_text:
            message_dict["exc_info"] = record.exc_text

        return json.dumps(message_dict, default=str, ensure_ascii=False)


class SingletonLogger:
    """Configures the application logger once per process."""
    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._configured = False
        return cls._instance

    def configure(self, level: str = "INFO", log_file: str = None) -> logging.Logger:
        logger = logging.getLogger("gftire")
        with self._lock:
            logger.setLevel(getattr(logging, level.upper(), logging.INFO))
            if self._configured:
                return logger

            formatter = JsonFormatter({
                "timestamp": "asctime",
                "level": "levelname",
                "logger": "name",
                "module": "module",
                "line": "lineno",
                "message": "message",
            })

            console_handler = logging.StreamHandler()
            console_handler.setFormatter(formatter)
            logger.addHandler(console_handler)

            if log_file:
                file_handler = logging.FileHandler(log_file, encoding="utf-8")
                file_handler.setFormatter(formatter)
                logger.addHandler(file_handler)

            logger.propagate = False
            self._configured = True
        return logger


def configure_logging(level: str = "INFO", log_file: str = None) -> logging.Logger:
    return SingletonLogger().configure(level, log_file)


def get_logger(name: str = None) -> logging.Logger:
    """
    Return the application logger, or a child of it.

    Children share the handlers installed by configure_logging().
    """
    if not name:
        return logging.getLogger("gftire")
    return logging.getLogger(f"gftire.{name}")
