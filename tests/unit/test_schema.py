"""Unit tests for generated automation validation."""

from automate_ai.schema import validate_automation_yaml

VALID_LIST = """
- id: '1718000000099'
  alias: Morning lights
  triggers:
  - trigger: time
    at: '07:00:00'
  conditions: []
  actions:
  - action: light.turn_on
    target:
      entity_id: light.kitchen
  mode: single
"""


class TestValidateAutomationYaml:
    """Tests for validate_automation_yaml."""

    def test_valid_list(self):
        result = validate_automation_yaml(VALID_LIST)

        assert result.valid
        assert result.errors == []
        assert result.automations[0]["trigger"] == [{"trigger": "time", "at": "07:00:00"}]
        assert "triggers" not in result.automations[0]

    def test_valid_single_mapping(self):
        content = "alias: x\ntrigger:\n  platform: sun\n  event: sunset\naction: []\n"

        assert validate_automation_yaml(content).valid

    def test_extra_keys_allowed(self):
        content = VALID_LIST + "  stored_traces: 10\n"

        assert validate_automation_yaml(content).valid

    def test_missing_trigger(self):
        content = "- id: '1'\n  actions:\n  - action: light.turn_on\n"

        result = validate_automation_yaml(content)

        assert not result.valid
        assert result.errors[0].path == "[0]"
        assert "trigger" in result.errors[0].message

    def test_bad_mode_reports_path(self):
        content = VALID_LIST.replace("mode: single", "mode: sometimes")

        result = validate_automation_yaml(content)

        assert not result.valid
        assert [e.path for e in result.errors] == ["[0].mode"]
        assert str(result.errors[0]).startswith("[0].mode: ")

    def test_invalid_syntax(self):
        result = validate_automation_yaml("- id: '1\n  alias: [\n")

        assert not result.valid
        assert result.errors[0].message.startswith("Invalid YAML syntax")

    def test_scalar_rejected(self):
        result = validate_automation_yaml("AMBIGUOUS")

        assert not result.valid
        assert "got str" in result.errors[0].message

    def test_empty_list_rejected(self):
        assert not validate_automation_yaml("[]").valid

    def test_non_mapping_item(self):
        result = validate_automation_yaml(VALID_LIST + "- just a string\n")

        assert not result.valid
        assert result.errors[0].path == "[1]"
