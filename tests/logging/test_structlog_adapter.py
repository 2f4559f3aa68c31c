# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for StructlogAdapter and StructlogLineWriter."""

import logging

from redcache.core.config import Config
from redcache.logging.port import LineWriter, LoggingPort
from redcache.logging.structlog_adapter import StructlogAdapter, StructlogLineWriter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"redcache": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"redcache": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"

    def test_configure_applies_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"redcache": {"logging": {"level": {"root": "INFO", "redcache.cache": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"redcache.cache": "DEBUG"}
        assert logging.getLogger("redcache.cache").level == logging.DEBUG


class TestStructlogAdapterGetLogger:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("redcache.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))


class TestStructlogLineWriter:
    def test_implements_line_writer(self):
        assert isinstance(StructlogLineWriter(), LineWriter)

    def test_write_line_emits_info_event(self):
        events: list[str] = []

        class FakeLogger:
            def info(self, event: str) -> None:
                events.append(event)

        writer = StructlogLineWriter(logger=FakeLogger())
        writer.write_line("redis connected")
        assert events == ["redis connected"]
