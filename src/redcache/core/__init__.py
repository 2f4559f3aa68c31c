"""redcache core — configuration."""

from redcache.core.config import Config, config_properties

__all__ = ["Config", "config_properties"]
