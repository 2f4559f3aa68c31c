"""redcache logging — logging ports and structlog adapters."""

from redcache.logging.port import LineWriter, LoggingPort
from redcache.logging.structlog_adapter import StructlogAdapter, StructlogLineWriter

__all__ = ["LineWriter", "LoggingPort", "StructlogAdapter", "StructlogLineWriter"]
