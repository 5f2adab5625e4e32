# tests/test_cli.py
"""
Tests for CLI interface
"""
from pathlib import Path

import pytest
import requests
from click.testing import CliRunner

from bitefetch import __version__
from bitefetch.cli import cli


class TestCLI:
    """Tests for the bitefetch command"""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def fake_client(self, mocker, make_response, record_dicts):
        """Replace ExerciseClient so fetch() returns a canned response"""
        client_cls = mocker.patch("bitefetch.cli.ExerciseClient")
        client_cls.return_value.fetch.return_value = make_response(
            record_dicts, headers={"Content-Type": "application/json", "Allow": "GET"}
        )
        return client_cls

    def test_cli_help(self, runner):
        result = runner.invoke(cli, ['--help'])

        assert result.exit_code == 0
        assert "Pybites Rust" in result.output
        assert "--test" in result.output

    def test_version(self, runner):
        result = runner.invoke(cli, ['--version'])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_download_writes_workspace(self, runner, fake_client, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

            assert result.exit_code == 0, result.output
            assert Path("exercises/intro/hello/Cargo.toml").exists()
            assert Path("exercises/easy/strings/Cargo.toml").exists()
            root_toml = Path("exercises/Cargo.toml").read_text()
            assert '"intro/hello"' in root_toml
            assert '"easy/strings"' in root_toml

        assert "2 exercises found!" in result.output
        assert '"Hello" ✅' in result.output
        assert '"Strings" ✅' in result.output
        assert result.output.index('"Hello"') < result.output.index('"Strings"')

    def test_anonymous_status_line(self, runner, fake_client, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

        assert "No API key set (PYBITES_API_KEY)" in result.output
        fake_client.assert_called_once()
        assert fake_client.call_args.args[1] is None

    def test_api_key_status_line(self, runner, fake_client, tmp_path, monkeypatch):
        monkeypatch.setenv("PYBITES_API_KEY", "secret-key-1234")

        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

        assert "Authenticating with API key" in result.output
        assert fake_client.call_args.args[1] == "secret-key-1234"
        assert "secret-key-1234" not in result.output

    def test_api_key_does_not_change_output_files(self, runner, fake_client, tmp_path, monkeypatch):
        def snapshot(root):
            return {
                str(p.relative_to(root)): p.read_text()
                for p in sorted(root.rglob("*")) if p.is_file()
            }

        with runner.isolated_filesystem(temp_dir=tmp_path) as anonymous_dir:
            runner.invoke(cli, [])
            anonymous = snapshot(Path(anonymous_dir) / "exercises")

        monkeypatch.setenv("PYBITES_API_KEY", "secret-key-1234")
        with runner.isolated_filesystem(temp_dir=tmp_path) as keyed_dir:
            runner.invoke(cli, [])
            keyed = snapshot(Path(keyed_dir) / "exercises")

        assert anonymous == keyed

    def test_test_mode_prints_status_and_writes_nothing(self, runner, fake_client, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, ['--test'])

            assert result.exit_code == 0, result.output
            assert not Path("exercises").exists()

        assert "Status: 200 OK" in result.output
        assert "Allow: GET" in result.output
        assert "exercises found" not in result.output

    def test_test_mode_does_not_need_valid_body(self, runner, mocker, make_response, tmp_path):
        client_cls = mocker.patch("bitefetch.cli.ExerciseClient")
        client_cls.return_value.fetch.return_value = make_response(
            raw=b"<html>maintenance</html>", status_code=503, reason="Service Unavailable"
        )

        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, ['--test'])

        assert result.exit_code == 0
        assert "Status: 503 Service Unavailable" in result.output

    def test_rerun_reports_backup(self, runner, fake_client, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            runner.invoke(cli, [])
            Path("exercises/intro/hello/src/lib.rs").write_text("// my work")

            result = runner.invoke(cli, [])

            backups = list(Path("exercises/intro/hello/src").glob("lib.rs.*"))
            assert len(backups) == 1
            assert backups[0].read_text() == "// my work"

        assert result.exit_code == 0
        assert "previous work saved as lib.rs." in result.output

    def test_http_error_exits_nonzero(self, runner, mocker, make_response, tmp_path):
        client_cls = mocker.patch("bitefetch.cli.ExerciseClient")
        client_cls.return_value.fetch.return_value = make_response(
            {"detail": "bad key"}, status_code=401, reason="Unauthorized"
        )

        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

            assert not Path("exercises").exists()

        assert result.exit_code == 1
        assert "FetchError" in result.output

    def test_transport_error_exits_nonzero(self, runner, mocker, tmp_path):
        session = mocker.Mock(spec=requests.Session)
        session.send.side_effect = requests.ConnectionError("no route to host")
        mocker.patch("bitefetch.api_client.requests.Session", return_value=session)

        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "Could not reach the exercises API" in result.output
        assert session.send.call_count == 1

    def test_invalid_body_exits_nonzero(self, runner, mocker, make_response, tmp_path):
        client_cls = mocker.patch("bitefetch.cli.ExerciseClient")
        client_cls.return_value.fetch.return_value = make_response(raw=b"not json")

        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "RecordDecodeError" in result.output

    def test_filesystem_error_exits_nonzero(self, runner, fake_client, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            Path("exercises").write_text("not a directory")

            result = runner.invoke(cli, [])

        assert result.exit_code == 1
        assert "ScaffoldError" in result.output

    def test_configured_output_dir_message(self, runner, fake_client, tmp_path, monkeypatch):
        target = tmp_path / "rust-bites"
        config_file = tmp_path / "bites.yaml"
        config_file.write_text(f"output_dir: {target}\n")
        monkeypatch.setenv("PYBITES_CONFIG", str(config_file))

        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

            assert not Path("exercises").exists()

        assert result.exit_code == 0, result.output
        assert f"Exercises will be written to {target}" in result.output
        assert "will be created in the current directory" not in result.output
        assert (target / "intro" / "hello" / "Cargo.toml").exists()

    def test_default_output_dir_message(self, runner, fake_client, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            result = runner.invoke(cli, [])

        assert "'exercises' will be created in the current directory" in result.output

    def test_client_closed_after_fetch(self, runner, fake_client, tmp_path):
        with runner.isolated_filesystem(temp_dir=tmp_path):
            runner.invoke(cli, ['--test'])

        fake_client.return_value.close.assert_called_once()
