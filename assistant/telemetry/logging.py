"""Structured JSON logging."""

import logging
import sys

_JSON_FORMAT = (
    '{"timestamp":"%(asctime)s","level":"%(levelname)s",'
    '"logger":"%(name)s","message":"%(message)s"}'
)


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_JSON_FORMAT))

    root = logging.getLogger("assistant")
    root.setLevel(level)
    root.handlers = [handler]
    root.propagate = False

    logging.getLogger("uvicorn.access").handlers = [handler]
    logging.getLogger("uvicorn.error").handlers = [handler]

    return root
