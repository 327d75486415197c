import logging

import pytest

from porterbuilder.utils import setup_logger, parse_module_levels, normalize_module_name


class TestParseModuleLevels:

    def test_pairs(self):
        assert parse_module_levels("gen=debug, conv=INFO") == {"gen": "DEBUG", "conv": "INFO"}

    @pytest.mark.parametrize("spec", [None, "", "gen", ",,"])
    def test_empty_or_malformed(self, spec):
        assert parse_module_levels(spec) == {}

    def test_skips_malformed_pairs(self):
        assert parse_module_levels("gen,conv=warning") == {"conv": "WARNING"}


class TestNormalizeModuleName:

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("gen", "porterbuilder.builder.dockerfile"),
            ("conv", "porterbuilder.bundle.convert"),
            ("builder.prepare", "porterbuilder.builder.prepare"),
            ("bundle.*", "porterbuilder.bundle"),
            ("porterbuilder.manifest", "porterbuilder.manifest"),
            ("urllib3", "urllib3"),
        ],
    )
    def test_normalize(self, name, expected):
        assert normalize_module_name(name) == expected


class TestSetupLogger:

    @pytest.fixture(autouse=True)
    def restore_levels(self):
        names = ["porterbuilder.builder.dockerfile", "porterbuilder.bundle.convert"]
        saved = {n: logging.getLogger(n).level for n in names}
        root_level = logging.getLogger().level
        yield
        for name, level in saved.items():
            logging.getLogger(name).setLevel(level)
        logging.getLogger().setLevel(root_level)

    def test_module_levels(self):
        setup_logger(module_levels={"gen": "DEBUG", "conv": "ERROR"})

        assert logging.getLogger("porterbuilder.builder.dockerfile").level == logging.DEBUG
        assert logging.getLogger("porterbuilder.bundle.convert").level == logging.ERROR

    def test_env_levels(self, monkeypatch):
        monkeypatch.setenv("PORTERB_LOG_LEVELS", "conv=WARNING")

        setup_logger(debug=True)

        assert logging.getLogger().level == logging.DEBUG
        assert logging.getLogger("porterbuilder.bundle.convert").level == logging.WARNING

    def test_unknown_level_is_ignored(self, caplog):
        setup_logger(module_levels={"gen": "LOUD"})

        assert logging.getLogger("porterbuilder.builder.dockerfile").level == logging.NOTSET
        assert "Ignoring unknown log level 'LOUD'" in caplog.text
