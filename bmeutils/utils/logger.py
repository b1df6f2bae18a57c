import datetime

from bmeutils import config


def _emit(level, message):
    timestamp = datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')
    print(f"{level:<7} {timestamp} - {message}")


def log(message):
    """Prints a normal log line with timestamp."""
    _emit("[INFO]", message)


def warn(message):
    """Prints a warning with timestamp."""
    _emit("[WARN]", message)


def error(message):
    """Prints an error with timestamp."""
    _emit("[ERROR]", message)


def debug(message):
    """Prints a debug line, only if config.LOG_DEBUG is set."""
    if getattr(config, "LOG_DEBUG", False):
        _emit("[DEBUG]", message)
