"""Tests for the lazy-crc command line entry point."""

import json
import logging
import os

import pytest
from pathlib import Path
from lazy_crc.common import setup_logging
from lazy_crc.common.config import ConfigLoader
from lazy_crc.sfv import cli
from lazy_crc.sfv.cli import build_parser, checksum_command, main
from lazy_crc.sfv.config import LazyCRCConfig


@pytest.fixture
def logging_calls(monkeypatch):
    """Record setup_logging calls instead of replacing the root handlers."""
    calls = []
    monkeypatch.setattr(cli, "setup_logging", lambda **kwargs: calls.append(kwargs))
    return calls


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch, logging_calls, caplog):
    """Run every command against model defaults only."""
    work_dir = tmp_path / "cwd"
    work_dir.mkdir()
    monkeypatch.chdir(work_dir)
    monkeypatch.setattr(ConfigLoader, "_load_system_config", lambda self: None)
    monkeypatch.setattr(ConfigLoader, "_load_user_config", lambda self: None)
    monkeypatch.setattr(Path, "home", classmethod(lambda cls: tmp_path / "home"))
    for key in list(os.environ):
        if key.startswith("LAZY_CRC_"):
            monkeypatch.delenv(key)
    caplog.set_level(logging.INFO)


class TestBuildParser:
    """Tests for argument parsing."""

    def test_defaults(self):
        args = build_parser().parse_args([])

        assert args.path is None
        assert args.verify is False
        assert args.chunk_size is None
        assert args.worker_threads is None
        assert args.log_level is None

    def test_options(self, tmp_path):
        args = build_parser().parse_args([
            str(tmp_path), "--verify", "--chunk-size", "1024",
            "--worker-threads", "4", "--log-level", "debug",
        ])

        assert args.path == tmp_path
        assert args.verify is True
        assert args.chunk_size == 1024
        assert args.worker_threads == 4
        assert args.log_level == "DEBUG"

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            build_parser().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "LazyCRC 1.0.0" in capsys.readouterr().out


class TestMain:
    """Tests for main()."""

    def test_build_directory(self, sample_tree, caplog):
        root, expected = sample_tree

        assert main([str(root)]) == 0

        assert (root / "data.sfv").exists()
        assert f"({len(expected)} entries)" in caplog.text

    def test_build_single_file(self, tmp_path):
        file_path = tmp_path / "check.txt"
        file_path.write_bytes(b"123456789")

        assert main([str(file_path)]) == 0

        assert (tmp_path / "check.txt.sfv").read_bytes() == b"check.txt CBF43926\n"

    def test_build_empty_directory(self, tmp_path, caplog):
        empty = tmp_path / "empty"
        empty.mkdir()

        assert main([str(empty)]) == 0

        assert "Nothing to write" in caplog.text
        assert list(empty.iterdir()) == []

    def test_no_path(self, caplog):
        """Test that a missing argument prints the usage hint."""
        assert main([]) == 2

        assert "No file or directory specified." in caplog.text
        assert "usage: lazy-crc" in caplog.text

    def test_path_not_found(self, tmp_path, caplog):
        missing = tmp_path / "missing"

        assert main([str(missing)]) == 2

        assert f"The specified file '{missing}' doesn't exist." in caplog.text

    def test_verify_ok(self, sample_tree, caplog):
        root, expected = sample_tree
        main([str(root)])

        assert main([str(root / "data.sfv"), "--verify"]) == 0

        assert f"All {len(expected)} files OK" in caplog.text

    def test_verify_bad_files(self, sample_tree, caplog):
        """Test that bad files exit with 1 and name the report."""
        root, _ = sample_tree
        main([str(root)])
        (root / "empty.bin").unlink()

        assert main([str(root), "--verify"]) == 1

        report = root.resolve() / "data.sfv.bad.txt"
        assert report.read_text(encoding="utf-8") == "empty.bin open-failed\n"
        assert str(report) in caplog.text

    def test_invalid_option_value(self, sample_tree, caplog):
        root, _ = sample_tree

        assert main([str(root), "--chunk-size", "0"]) == 2

        assert "Invalid option" in caplog.text
        assert not (root / "data.sfv").exists()

    def test_worker_threads_option(self, sample_tree):
        root, expected = sample_tree

        assert main([str(root), "--worker-threads", "3"]) == 0

        assert len((root / "data.sfv").read_text(encoding="utf-8").splitlines()) == len(expected)

    def test_config_file(self, sample_tree, tmp_path, logging_calls):
        """Test that target and logging come from an explicit config file."""
        root, _ = sample_tree
        config_path = tmp_path / "defaults.toml"
        config_path.write_text(
            f'[checksum]\ntarget_path = "{root.as_posix()}"\n\n[logging]\nlevel = "warning"\n',
            encoding="utf-8",
        )

        assert main(["--config", str(config_path)]) == 0

        assert (root / "data.sfv").exists()
        assert logging_calls[-1]["level"] == "WARNING"

    def test_log_level_option_overrides_config(self, sample_tree, logging_calls):
        root, _ = sample_tree

        main([str(root), "--log-level", "debug"])

        assert logging_calls[-1]["level"] == "DEBUG"
        assert logging_calls[-1]["log_file"] is None

    def test_missing_config_file(self, tmp_path):
        assert main([str(tmp_path), "--config", str(tmp_path / "nope.toml")]) == 2

    def test_malformed_config_file(self, tmp_path):
        config_path = tmp_path / "defaults.toml"
        config_path.write_text("[checksum\nchunk_size = ", encoding="utf-8")

        assert main([str(tmp_path), "--config", str(config_path)]) == 2


class TestChecksumCommand:
    """Tests for checksum_command()."""

    def test_overrides_do_not_mutate_config(self, sample_tree):
        root, _ = sample_tree
        config = LazyCRCConfig()

        assert checksum_command(config, target_override=root, worker_threads_override=2) == 0

        assert config.checksum.worker_threads == 1

    def test_unexpected_error_exits_one(self, sample_tree, monkeypatch, caplog):
        """Test that an unexpected exception is logged, not raised."""
        root, _ = sample_tree

        def _explode(context, target_override=None):
            raise RuntimeError("boom")

        monkeypatch.setattr(cli, "run_checksums", _explode)

        assert checksum_command(LazyCRCConfig(), target_override=root) == 1
        assert "boom" in caplog.text


class TestLoggingOutput:
    """Tests for log output produced through the configured handlers."""

    @pytest.fixture(autouse=True)
    def real_logging(self, isolated_config, monkeypatch):
        """Use the real setup_logging and restore root handlers afterwards."""
        monkeypatch.setattr(cli, "setup_logging", setup_logging)
        root_logger = logging.getLogger()
        handlers = list(root_logger.handlers)
        level = root_logger.level
        yield
        for handler in root_logger.handlers:
            if handler not in handlers:
                handler.close()
        root_logger.handlers[:] = handlers
        root_logger.setLevel(level)

    def _write_config(self, tmp_path: Path, logging_section: str) -> Path:
        config_path = tmp_path / "defaults.toml"
        config_path.write_text(f"[logging]\n{logging_section}\n", encoding="utf-8")
        return config_path

    def test_detailed_console_format(self, sample_tree, tmp_path, capsys):
        root, _ = sample_tree
        config_path = self._write_config(tmp_path, 'format = "detailed"')

        assert main(["--config", str(config_path), str(root)]) == 0

        err = capsys.readouterr().err
        assert "| INFO     | lazy_crc.sfv:render_result:" in err
        assert "SFV file created" in err

    def test_json_console_and_log_file(self, sample_tree, tmp_path, capsys):
        """Test JSON records on stderr and in the log file under the expanded home."""
        root, _ = sample_tree
        config_path = self._write_config(
            tmp_path, 'format = "json"\nfile = "${USER_HOME}/logs/run.log"'
        )

        assert main(["--config", str(config_path), str(root)]) == 0

        console_records = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
        log_file = tmp_path / "home" / "logs" / "run.log"
        file_records = [
            json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()
        ]
        for records in (console_records, file_records):
            created = [r for r in records if r["message"].startswith("SFV file created")]
            assert len(created) == 1
            assert created[0]["level"] == "INFO"
            assert created[0]["logger"] == "lazy_crc.sfv"

    def test_verify_records_carry_manifest_field(self, sample_tree, tmp_path, capsys):
        """Test that records logged during verification name the manifest."""
        root, _ = sample_tree
        main([str(root)])
        capsys.readouterr()
        config_path = self._write_config(tmp_path, 'format = "json"')

        assert main(["--config", str(config_path), "--verify", str(root)]) == 0

        records = [json.loads(line) for line in capsys.readouterr().err.splitlines()]
        verifying = [r for r in records if r["message"].startswith("Verifying")]
        assert verifying[0]["manifest"] == str(root / "data.sfv")
