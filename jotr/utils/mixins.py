import structlog


class LoggerMixin:
    """Gives a class a structlog logger named after its module and class"""

    @property
    def logger(self) -> structlog.stdlib.BoundLogger:
        cls = type(self)
        return structlog.get_logger(f"{cls.__module__}.{cls.__qualname__}")
