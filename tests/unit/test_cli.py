"""Unit tests for the CLI commands."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from typer.testing import CliRunner

from automate_ai import __version__
from automate_ai.cli.main import app
from automate_ai.exceptions import AmbiguousCommandError, HAClientError
from automate_ai.ha import BY_CONFIG_ID, RemoteAutomationRecord
from automate_ai.llm import GeneratedAutomation, Intent
from automate_ai.services import ReconcileReport

GENERATED_YAML = (
    "- id: '1718000000099'\n"
    "  alias: Morning lights\n"
    "  triggers:\n"
    "  - trigger: time\n"
    "    at: '07:00:00'\n"
    "  actions:\n"
    "  - action: light.turn_on"
)


@pytest.fixture
def runner():
    """CLI test runner."""
    return CliRunner()


@pytest.fixture(autouse=True)
def no_logging_setup():
    """Keep the CLI from replacing the root logger's handlers."""
    with (
        patch("automate_ai.cli.main.configure_logging") as main_logging,
        patch("automate_ai.logging_config.configure_logging") as delete_logging,
    ):
        yield main_logging, delete_logging


@pytest.fixture
def ha_client():
    """Mock HA client returned by get_ha_client()."""
    client = MagicMock()
    client.delete_automation = AsyncMock(return_value=BY_CONFIG_ID)
    client.reload_automations = AsyncMock(return_value=True)
    client.close = AsyncMock()
    client.__aenter__ = AsyncMock(return_value=client)
    client.__aexit__ = AsyncMock(return_value=None)
    with patch("automate_ai.ha.get_ha_client", return_value=client):
        yield client


class TestMainApp:
    """Test main CLI app registration."""

    def test_app_name(self):
        assert app.info.name == "automate-ai"

    def test_all_commands_registered(self, runner):
        result = runner.invoke(app, ["--help"])

        assert result.exit_code == 0
        for command in ("create", "cleanup", "delete", "version"):
            assert command in result.output

    def test_version(self, runner):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_log_level_passed_to_logging(self, runner, no_logging_setup):
        main_logging, _ = no_logging_setup

        result = runner.invoke(app, ["--log-level", "debug", "version"])

        assert result.exit_code == 0
        main_logging.assert_called_once_with(level="DEBUG")

    def test_unknown_log_level(self, runner):
        result = runner.invoke(app, ["--log-level", "chatty", "version"])

        assert result.exit_code != 0


class TestCreateCommand:
    """Tests for the create command."""

    @pytest.fixture
    def generator(self):
        generator = MagicMock()
        generator.generate = AsyncMock(
            return_value=GeneratedAutomation(
                yaml=GENERATED_YAML, intent=Intent.STANDARD, automation_id="1718000000099"
            )
        )
        with patch("automate_ai.services.build_generator", AsyncMock(return_value=generator)):
            yield generator

    def test_create_from_arguments(
        self, runner, mock_settings, generator, ha_client, automations_yaml
    ):
        result = runner.invoke(app, ["create", "every", "morning", "at", "7"])

        assert result.exit_code == 0, result.output
        assert "1718000000099" in result.output
        generator.generate.assert_awaited_once_with("every morning at 7")
        assert automations_yaml.read_text(encoding="utf-8").endswith(f"\n{GENERATED_YAML}\n")
        ha_client.reload_automations.assert_awaited_once()
        ha_client.close.assert_awaited_once()

    def test_create_prompts_for_command(self, runner, mock_settings, generator, ha_client):
        result = runner.invoke(app, ["create"], input="turn on the lights at sunset\n")

        assert result.exit_code == 0, result.output
        generator.generate.assert_awaited_once_with("turn on the lights at sunset")

    def test_empty_command_exits_cleanly(self, runner, mock_settings, generator):
        result = runner.invoke(app, ["create"], input="\n")

        assert result.exit_code == 0
        assert "No command entered" in result.output
        generator.generate.assert_not_called()

    def test_ambiguous_command(self, runner, mock_settings, generator, ha_client):
        generator.generate.side_effect = AmbiguousCommandError("The command was ambiguous.")

        result = runner.invoke(app, ["create", "do", "stuff"])

        assert result.exit_code == 1
        assert "ERROR" in result.output
        ha_client.close.assert_awaited_once()

    def test_invalid_yaml_lists_errors(
        self, runner, mock_settings, generator, ha_client, automations_yaml, sample_automations
    ):
        generator.generate.return_value = GeneratedAutomation(
            yaml="- id: '1'\n  alias: no triggers",
            intent=Intent.STANDARD,
            automation_id="1",
        )

        result = runner.invoke(app, ["create", "x"])

        assert result.exit_code == 1
        assert "trigger" in result.output
        assert automations_yaml.read_text(encoding="utf-8") == sample_automations

    def test_missing_automations_setting(self, runner, mock_settings, generator):
        mock_settings.automations_yaml = ""

        result = runner.invoke(app, ["create", "x"])

        assert result.exit_code == 1
        assert "AUTOMATIONS_YAML" in result.output


class TestCleanupCommand:
    """Tests for the cleanup command."""

    @pytest.fixture
    def orphan(self):
        return RemoteAutomationRecord(id="200", entity_id="automation.gone", alias="Gone")

    @pytest.fixture
    def reconciler(self, orphan):
        """Patch Reconciler with one that asks about a single orphan."""

        async def run(confirm):
            report = ReconcileReport(orphans=[orphan])
            if confirm(orphan):
                report.deleted.append(orphan)
            else:
                report.skipped.append(orphan)
            return report

        with patch("automate_ai.services.Reconciler") as mock_cls:
            mock_cls.return_value.run = AsyncMock(side_effect=run)
            yield mock_cls

    def test_confirmed_deletion(self, runner, mock_settings, reconciler, ha_client):
        result = runner.invoke(app, ["cleanup"], input="y\n")

        assert result.exit_code == 0, result.output
        assert "automation.gone" in result.output
        assert "deleted 1" in result.output

    def test_declined_deletion(self, runner, mock_settings, reconciler, ha_client):
        result = runner.invoke(app, ["cleanup"], input="n\n")

        assert result.exit_code == 0, result.output
        assert "deleted 0" in result.output

    def test_no_orphans(self, runner, mock_settings, ha_client):
        with patch("automate_ai.services.Reconciler") as mock_cls:
            mock_cls.return_value.run = AsyncMock(return_value=ReconcileReport())

            result = runner.invoke(app, ["cleanup"])

        assert result.exit_code == 0
        assert "No orphaned automations found" in result.output

    def test_requires_ha(self, runner, mock_settings, reconciler):
        mock_settings.ha_url = ""

        result = runner.invoke(app, ["cleanup"])

        assert result.exit_code == 1
        assert "HA_URL or HA_TOKEN" in result.output
        reconciler.assert_not_called()

    def test_empty_listing_is_fatal(self, runner, mock_settings, ha_client):
        with patch("automate_ai.services.Reconciler") as mock_cls:
            mock_cls.return_value.run = AsyncMock(
                side_effect=HAClientError("No automation list returned from HA.")
            )

            result = runner.invoke(app, ["cleanup"])

        assert result.exit_code == 1
        assert "No automation list returned" in result.output


class TestDeleteCommand:
    """Tests for the delete command."""

    def test_deleted_via_api(self, runner, mock_settings, ha_client, no_logging_setup):
        _, delete_logging = no_logging_setup

        result = runner.invoke(app, ["delete", "1718000000002"])

        assert result.exit_code == 0, result.output
        assert "(api)" in result.output
        delete_logging.assert_called_once_with(level=None, log_file=mock_settings.delete_log_file)
        ha_client.close.assert_awaited_once()

    def test_file_fallback(self, runner, mock_settings, ha_client, automations_yaml):
        ha_client.delete_automation.return_value = None

        result = runner.invoke(app, ["delete", "1718000000002"])

        assert result.exit_code == 0, result.output
        assert "(file)" in result.output
        assert "1718000000002" not in automations_yaml.read_text(encoding="utf-8")

    def test_not_found(self, runner, mock_settings, ha_client):
        ha_client.delete_automation.return_value = None

        result = runner.invoke(app, ["delete", "nope"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_without_ha(self, runner, mock_settings, automations_yaml):
        mock_settings.ha_url = ""

        with patch("automate_ai.ha.get_ha_client") as mock_get_client:
            result = runner.invoke(app, ["delete", "1718000000001"])

        assert result.exit_code == 0, result.output
        mock_get_client.assert_not_called()
        assert "1718000000001" not in automations_yaml.read_text(encoding="utf-8")

    def test_api_deletion_without_automations_setting(self, runner, mock_settings, ha_client):
        mock_settings.automations_yaml = ""

        result = runner.invoke(app, ["delete", "1718000000002"])

        assert result.exit_code == 0, result.output
        assert "(api)" in result.output
        ha_client.delete_automation.assert_awaited_once()

    def test_file_fallback_without_automations_setting(self, runner, mock_settings, ha_client):
        mock_settings.automations_yaml = ""
        ha_client.delete_automation.return_value = None

        result = runner.invoke(app, ["delete", "1718000000002"])

        assert result.exit_code == 1
        assert "AUTOMATIONS_YAML" in result.output
        ha_client.delete_automation.assert_awaited_once()

    def test_log_level_option_reaches_delete_log(
        self, runner, mock_settings, ha_client, no_logging_setup
    ):
        main_logging, delete_logging = no_logging_setup

        result = runner.invoke(app, ["-l", "debug", "delete", "1718000000002"])

        assert result.exit_code == 0, result.output
        main_logging.assert_called_once_with(level="DEBUG")
        delete_logging.assert_called_once_with(
            level="DEBUG", log_file=mock_settings.delete_log_file
        )

    def test_unwritable_log_file(self, runner, mock_settings, ha_client, no_logging_setup):
        _, delete_logging = no_logging_setup
        delete_logging.side_effect = FileNotFoundError("No such file or directory")

        result = runner.invoke(app, ["delete", "1718000000002"])

        assert result.exit_code == 1
        assert "ERROR" in result.output
        assert "DELETE_LOG_FILE" in result.output
        ha_client.delete_automation.assert_not_called()

    def test_invalid_environment(self, runner, monkeypatch, ha_client):
        from automate_ai.settings import get_settings

        monkeypatch.setenv("LOG_LEVEL", "chatty")
        get_settings.cache_clear()
        try:
            result = runner.invoke(app, ["delete", "1718000000002"])
        finally:
            get_settings.cache_clear()

        assert result.exit_code == 1
        assert "Invalid configuration" in result.output
        ha_client.delete_automation.assert_not_called()
