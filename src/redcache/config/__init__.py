"""redcache configuration property classes."""
