"""
Tests for the command-line interface.

These run the full CLI in-process: argument parsing, configuration,
dispatch and exit codes.
"""

import json
from unittest.mock import patch

import pytest
import toml
import yaml

from bookmark_manager import __version__
from bookmark_manager.cli import CLIInterface, main
from bookmark_manager.config.pydantic_config import ConfigurationManager, ManagerConfig


def load_yaml(path):
    return yaml.safe_load(path.read_text(encoding="utf-8"))


class TestMain:
    """Test main function end to end."""

    def test_add_then_query(self, tmp_path, capsys):
        store = tmp_path / "marks.yaml"
        assert main(["--file", str(store), "add", "--name", "alpha", "--offset", "3.5"]) == 0
        assert capsys.readouterr().out == ""

        assert main(["-f", str(store), "query", "-n", "alpha"]) == 0
        assert capsys.readouterr().out == 'Bookmark { name: "alpha", offset: 3.5 }\n'

    def test_default_store_file(self, tmp_path, capsys):
        """Without --file the store is ./bookmarks."""
        assert main(["add", "-n", "alpha", "-o", "1"]) == 0
        assert load_yaml(tmp_path / "bookmarks") == [{"name": "alpha", "offset": 1.0}]

    def test_remove_prints_removed_record(self, tmp_path, capsys):
        main(["add", "-n", "alpha", "-o", "1.0"])
        main(["add", "-n", "beta", "-o", "2.0"])
        capsys.readouterr()

        assert main(["remove", "-n", "alpha"]) == 0
        assert capsys.readouterr().out == 'Bookmark { name: "alpha", offset: 1.0 }\n'
        assert load_yaml(tmp_path / "bookmarks") == [{"name": "beta", "offset": 2.0}]

    def test_no_match_exits_zero_without_output(self, capsys):
        main(["add", "-n", "alpha", "-o", "1.0"])
        capsys.readouterr()
        assert main(["query", "-n", "missing"]) == 0
        assert main(["remove", "-n", "missing"]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""

    def test_output_file(self, tmp_path, capsys):
        main(["add", "-n", "alpha", "-o", "-2.5"])
        out_file = tmp_path / "result.txt"
        assert main(["--output-file", str(out_file), "query", "-n", "alpha"]) == 0
        assert capsys.readouterr().out == ""
        assert out_file.read_text() == 'Bookmark { name: "alpha", offset: -2.5 }\n'

    def test_query_missing_store_is_error(self, tmp_path, capsys):
        assert main(["query", "-n", "alpha"]) == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Error:" in captured.err
        assert not (tmp_path / "bookmarks").exists()

    def test_remove_unparseable_store_is_error(self, tmp_path, capsys):
        (tmp_path / "bookmarks").write_text("{broken")
        assert main(["remove", "-n", "alpha"]) == 1
        assert "Error:" in capsys.readouterr().err
        assert (tmp_path / "bookmarks").read_text() == "{broken"

    def test_store_path_is_directory_is_io_error(self, tmp_path, capsys):
        """A directory as store path fails on open, not as a usage error."""
        (tmp_path / "dir").mkdir()
        assert main(["--file", str(tmp_path / "dir"), "add", "-n", "a", "-o", "1"]) == 1
        err = capsys.readouterr().err
        assert "Failed to open store file" in err
        assert "Usage Error" not in err

    def test_add_over_unparseable_store(self, tmp_path):
        (tmp_path / "bookmarks").write_text("{broken")
        assert main(["add", "-n", "alpha", "-o", "1"]) == 0
        assert load_yaml(tmp_path / "bookmarks") == [{"name": "alpha", "offset": 1.0}]


class TestUsageErrors:
    """Bad invocations exit with status 2 and touch nothing."""

    @pytest.mark.parametrize(
        "argv",
        [
            [],
            ["list"],
            ["add", "-n", "alpha"],
            ["add", "-o", "1.0"],
            ["add", "-n", "alpha", "-o", "soon"],
            ["add", "-n", "", "-o", "1.0"],
            ["add", "-n", "   ", "-o", "1.0"],
            ["remove"],
            ["query", "--bogus"],
        ],
    )
    def test_usage_error(self, tmp_path, capsys, argv):
        assert main(argv) == 2
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Usage Error:" in captured.err
        assert not (tmp_path / "bookmarks").exists()

    def test_missing_config_file(self, capsys):
        assert main(["--config", "nope.toml", "query", "-n", "alpha"]) == 2
        assert "Configuration file does not exist" in capsys.readouterr().err



class TestVersionAndHelp:
    """Test --version and --help."""

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert __version__ in capsys.readouterr().out

    def test_help(self, capsys):
        with pytest.raises(SystemExit):
            main(["--help"])
        captured = capsys.readouterr()
        assert "named offsets" in captured.out
        assert "add" in captured.out


class TestConfiguration:
    """Configuration files and environment variables feed the CLI."""

    def test_default_config_file_sets_store(self, tmp_path, capsys):
        (tmp_path / "bookmark_manager.toml").write_text('[store]\nfile = "chapters.yaml"\n')
        assert main(["add", "-n", "alpha", "-o", "1"]) == 0
        assert load_yaml(tmp_path / "chapters.yaml") == [{"name": "alpha", "offset": 1.0}]
        assert not (tmp_path / "bookmarks").exists()

    def test_cli_overrides_config(self, tmp_path):
        config = tmp_path / "custom.json"
        config.write_text(json.dumps({"store": {"file": "from-config"}}))
        assert main(["-c", str(config), "-f", "from-cli", "add", "-n", "a", "-o", "1"]) == 0
        assert (tmp_path / "from-cli").exists()
        assert not (tmp_path / "from-config").exists()

    def test_env_overrides_config(self, tmp_path, monkeypatch):
        (tmp_path / "bookmark_manager.toml").write_text('[store]\nfile = "from-config"\n')
        monkeypatch.setenv("BOOKMARK_MANAGER_FILE", "from-env")
        assert main(["add", "-n", "a", "-o", "1"]) == 0
        assert (tmp_path / "from-env").exists()

    def test_invalid_config_is_error(self, tmp_path, capsys):
        (tmp_path / "bookmark_manager.toml").write_text('[logging]\nlevel = "LOUD"\n')
        assert main(["add", "-n", "a", "-o", "1"]) == 1
        assert "logging.level" in capsys.readouterr().err
        assert not (tmp_path / "bookmarks").exists()

    def test_misspelled_option_is_error(self, tmp_path, capsys):
        (tmp_path / "bookmark_manager.toml").write_text('[store]\nfiel = "chapters.yaml"\n')
        assert main(["add", "-n", "a", "-o", "1"]) == 1
        assert "store.fiel: unknown option" in capsys.readouterr().err
        assert not (tmp_path / "bookmarks").exists()

    def test_verbose_logs_to_stderr(self, capsys):
        assert main(["-v", "add", "-n", "alpha", "-o", "1"]) == 0
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "Adding bookmark 'alpha'" in captured.err


class TestCreateConfig:
    """Test --create-config."""

    def test_writes_default_toml(self, tmp_path, capsys):
        target = tmp_path / "bookmark_manager.toml"
        assert main(["--create-config", str(target)]) == 0
        assert "Created configuration file" in capsys.readouterr().out
        assert toml.load(target)["output"] == {"file": "-"}
        assert ConfigurationManager(target).config == ManagerConfig()

    def test_writes_json_for_json_name(self, tmp_path):
        target = tmp_path / "settings.json"
        assert main(["--create-config", str(target)]) == 0
        assert json.loads(target.read_text())["store"] == {"file": "bookmarks"}

    def test_created_file_is_picked_up(self, tmp_path, capsys):
        assert main(["--create-config", "bookmark_manager.toml"]) == 0
        assert main(["add", "-n", "alpha", "-o", "1"]) == 0
        assert load_yaml(tmp_path / "bookmarks") == [{"name": "alpha", "offset": 1.0}]

    def test_does_not_overwrite(self, tmp_path, capsys):
        target = tmp_path / "bookmark_manager.toml"
        target.write_text('[store]\nfile = "mine"\n')
        assert main(["--create-config", str(target)]) == 2
        assert "already exists" in capsys.readouterr().err
        assert target.read_text() == '[store]\nfile = "mine"\n'

    def test_rejects_other_extensions(self, tmp_path, capsys):
        assert main(["--create-config", "settings.yaml"]) == 2
        assert "TOML or JSON" in capsys.readouterr().err
        assert not (tmp_path / "settings.yaml").exists()

    def test_does_not_touch_store(self, tmp_path):
        assert main(["--create-config", "bookmark_manager.toml"]) == 0
        assert not (tmp_path / "bookmarks").exists()


class TestCLIInterface:
    """Test CLIInterface pieces directly."""

    def test_validate_args_parses_offset(self):
        cli = CLIInterface()
        validated = cli.validate_args(cli.parse_args(["add", "-n", "alpha", "-o", "1e3"]))
        assert validated["command"] == "add"
        assert validated["name"] == "alpha"
        assert validated["offset"] == 1000.0

    def test_validate_args_keeps_name_verbatim(self):
        cli = CLIInterface()
        validated = cli.validate_args(cli.parse_args(["query", "-n", " padded "]))
        assert validated["name"] == " padded "
        assert validated["offset"] is None

    def test_unexpected_error_returns_one(self, capsys):
        with patch(
            "bookmark_manager.cli.CommandDispatcher.dispatch",
            side_effect=RuntimeError("kaboom"),
        ):
            assert main(["query", "-n", "alpha"]) == 1
        assert "kaboom" in capsys.readouterr().err
