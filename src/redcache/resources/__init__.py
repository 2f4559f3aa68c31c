"""Packaged resources for redcache."""
