import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level_name: str = "INFO") -> None:
    """Send application logs to stdout (Railway / Render capture it)."""
    level = getattr(logging, level_name.upper(), logging.INFO)
    root = logging.getLogger()
    if not any(getattr(h, "_moodtune", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        handler._moodtune = True
        root.addHandler(handler)
    root.setLevel(level)
    # requests / openai are chatty at DEBUG
    logging.getLogger("urllib3").setLevel(max(level, logging.WARNING))
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
