"""
Unit tests for the create-release-metadata command.
"""

import os

import pytest
import yaml
from click.testing import CliRunner
from unittest.mock import patch

from release_pipeline.cli import cli
from signing import InteractiveCredential


class TestCreateReleaseMetadataCommand:
    """Tests for the CLI front end."""

    @pytest.fixture
    def cli_runner(self):
        """Create a Click CLI runner."""
        return CliRunner()

    @pytest.fixture
    def artifact(self, tmp_path):
        path = tmp_path / "MyApp-1.5.0-arm64.dmg"
        path.write_bytes(b"disk image")
        return str(path)

    def test_install_minisign_instructions(self, cli_runner):
        result = cli_runner.invoke(cli, ["--install-minisign"])

        assert result.exit_code == 0
        assert "brew install minisign" in result.output
        assert "minisign -G" in result.output

    def test_minisign_not_installed(self, cli_runner, tmp_path, artifact):
        result = cli_runner.invoke(cli, [
            artifact, "-k", "key.sec", "-p", "pw",
            "--minisign", str(tmp_path / "missing-minisign"),
        ])

        assert result.exit_code == 1
        assert "minisign command is required" in result.output

    def test_no_files(self, cli_runner, fake_minisign):
        result = cli_runner.invoke(cli, ["-k", "key.sec", "-p", "pw", "--minisign", fake_minisign.path])

        assert result.exit_code == 1
        assert "No distributable files specified" in result.output

    def test_no_secret_key(self, cli_runner, fake_minisign, artifact):
        result = cli_runner.invoke(cli, [artifact, "-p", "pw", "--minisign", fake_minisign.path])

        assert result.exit_code == 1
        assert "--secret-key is required" in result.output

    def test_no_password_without_terminal(self, cli_runner, fake_minisign, artifact):
        """Without a password or a terminal the run is rejected before signing."""
        result = cli_runner.invoke(cli, [artifact, "-k", "key.sec", "--minisign", fake_minisign.path])

        assert result.exit_code == 1
        assert "No password supplied" in result.output
        assert fake_minisign.calls() == []

    def test_successful_run(self, cli_runner, fake_minisign, artifact, tmp_path):
        output_dir = tmp_path / "metadata"

        result = cli_runner.invoke(cli, [
            artifact,
            "-k", "key.sec",
            "-p", "pw",
            "-o", str(output_dir),
            "--platform", "mac",
            "--auto-updater-compat",
            "-n", "Bug fixes",
            "--minisign", fake_minisign.path,
        ])

        assert result.exit_code == 0, result.output
        manifest_path = os.path.join(str(output_dir), "latest-mac.yml")
        assert f"Successfully created metadata at {manifest_path}" in result.output
        assert f" - {manifest_path}.minisig" in result.output
        assert f" - {artifact}.minisig" in result.output

        with open(manifest_path, 'r', encoding='utf-8') as f:
            document = yaml.safe_load(f)
        assert document['version'] == "1.5.0-arm64"
        assert document['releaseNotes'] == "Bug fixes"
        assert document['path'] == "MyApp-1.5.0-arm64.dmg"
        assert fake_minisign.calls() == [
            ("latest-mac.yml", "key.sec", "pw"),
            ("MyApp-1.5.0-arm64.dmg", "key.sec", "pw"),
        ]

    def test_password_from_environment(self, cli_runner, fake_minisign, artifact, tmp_path):
        result = cli_runner.invoke(
            cli,
            [artifact, "-k", "key.sec", "-o", str(tmp_path), "--app-version", "1.5.0"],
            env={"MINISIGN_PASSWORD": "from-env", "MINISIGN_BIN": fake_minisign.path},
        )

        assert result.exit_code == 0, result.output
        assert [call[2] for call in fake_minisign.calls()] == ["from-env", "from-env"]

    def test_signing_failure_reports_file(self, cli_runner, fake_minisign, artifact, tmp_path, monkeypatch):
        monkeypatch.setenv("FAKE_MINISIGN_FAIL_ON", "MyApp-1.5.0-arm64.dmg")

        result = cli_runner.invoke(cli, [
            artifact, "-k", "key.sec", "-p", "pw", "-o", str(tmp_path),
            "--minisign", fake_minisign.path,
        ])

        assert result.exit_code == 1
        assert "Error: [artifacts-signed] MyApp-1.5.0-arm64.dmg" in result.output
        assert "Wrong password for that key" in result.output

    def test_invalid_platform(self, cli_runner, artifact):
        result = cli_runner.invoke(cli, [artifact, "-k", "key.sec", "--platform", "beos"])

        assert result.exit_code == 2

    def test_pipeline_receives_interactive_credential_on_terminal(self, cli_runner, artifact, tmp_path, monkeypatch):
        monkeypatch.delenv("MINISIGN_PASSWORD", raising=False)

        with patch("release_pipeline.cli.MinisignSigner.is_available", return_value=True), \
             patch("release_pipeline.cli.resolve_credential",
                   return_value=InteractiveCredential()) as mock_resolve, \
             patch("release_pipeline.cli.ReleasePipeline") as mock_pipeline_class:
            mock_pipeline_class.return_value.run.return_value = str(tmp_path / "latest-mac.yml")

            result = cli_runner.invoke(cli, [artifact, "-k", "key.sec"])

        assert result.exit_code == 0, result.output
        mock_resolve.assert_called_once_with(None)
        request = mock_pipeline_class.return_value.run.call_args.args[0]
        assert request.credential.mode == 'interactive'
        assert request.distributables == [artifact]
