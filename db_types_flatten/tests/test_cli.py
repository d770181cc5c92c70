"""
Tests for the db_types_flatten command line.
"""

import json
from pathlib import Path

import pytest
from click.testing import CliRunner

from db_types_flatten import __version__
from db_types_flatten.db_types_flatten import db_types_flatten

SCHEMA_FILE = Path(__file__).parent / "test_data" / "schemas" / "database.types.ts"


@pytest.fixture
def runner():
    return CliRunner()


class TestCommandLine:
    def test_prints_to_stdout(self, runner):
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE)])
        assert result.exit_code == 0, result.output
        assert result.output.startswith(f"// Generated by db_types_flatten {__version__}\n")
        assert "// Command: db_types_flatten database.types.ts\n" in result.output
        assert "export type profilesRow = {" in result.output
        assert 'export type mood = "happy" | "sad" | "ok"' in result.output
        assert "profilesUpdate" not in result.output
        # Record<number, ...> columns are not representable
        assert "scoresRow" not in result.output

    def test_flags_and_styles(self, runner):
        result = runner.invoke(
            db_types_flatten,
            [str(SCHEMA_FILE), "--updates", "--table-style", "pascal", "--enum-style", "pascal", "--no-generation-comment"],
        )
        assert result.exit_code == 0, result.output
        assert not result.output.startswith("//")
        assert "export type ProfilesUpdate = {" in result.output
        assert "mood?: Mood | null" in result.output
        assert 'export type Mood = "happy" | "sad" | "ok"' in result.output

    def test_other_schema(self, runner):
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE), "-s", "graphql_public", "--no-generation-comment"])
        assert result.exit_code == 0, result.output
        # Inline argument structures are not emitted, only named types
        assert "graphqlArgs" not in result.output
        assert "export type graphqlReturns = Json" in result.output
        assert "profilesRow" not in result.output

    def test_writes_output_file(self, runner, tmp_path):
        output = tmp_path / "flat.types.ts"
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE), str(output)])
        assert result.exit_code == 0, result.output
        content = output.read_text(encoding="utf-8")
        assert content.startswith("// Generated by db_types_flatten")
        assert "export type profilesRow = {" in content
        # No temp files left behind
        assert [p.name for p in tmp_path.iterdir()] == ["flat.types.ts"]

    def test_refuses_to_overwrite(self, runner, tmp_path):
        output = tmp_path / "flat.types.ts"
        output.write_text("keep me", encoding="utf-8")
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE), str(output)])
        assert result.exit_code == 1
        assert "already exists" in result.output
        assert output.read_text(encoding="utf-8") == "keep me"

    def test_force_overwrites(self, runner, tmp_path):
        output = tmp_path / "flat.types.ts"
        output.write_text("old", encoding="utf-8")
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE), str(output), "--force"])
        assert result.exit_code == 0, result.output
        assert "export type profilesRow" in output.read_text(encoding="utf-8")

    def test_config_file(self, runner, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(
            json.dumps(
                {
                    "inserts": True,
                    "add_generation_comment": False,
                    "naming": {"table_or_view": "camel", "composite_type": "pascal"},
                }
            ),
            encoding="utf-8",
        )
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE), "-c", str(config)])
        assert result.exit_code == 0, result.output
        assert not result.output.startswith("//")
        assert "export type profilesInsert = {" in result.output
        assert "export type Address = {" in result.output
        assert "address?: Address | null" in result.output

    def test_command_line_overrides_config(self, runner, tmp_path):
        config = tmp_path / "config.json"
        config.write_text(json.dumps({"schema": "missing", "add_generation_comment": False}), encoding="utf-8")
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE), "-c", str(config), "--schema", "public"])
        assert result.exit_code == 0, result.output
        assert "export type profilesRow" in result.output

    @pytest.mark.parametrize(
        "content, message",
        [
            ("{not json", "Invalid config file"),
            ('{"output": {"mode": "bogus"}}', "Unknown output mode 'bogus'"),
            ('{"naming": "pascal"}', "Config section 'naming' must be an object"),
            ('["schema"]', "Config must be a JSON object"),
            ('{"naming": {"enum": "shouting"}}', "Unknown naming style 'shouting'"),
        ],
    )
    def test_invalid_config_file(self, runner, tmp_path, content, message):
        config = tmp_path / "config.json"
        config.write_text(content, encoding="utf-8")
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE), "-c", str(config)])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error:" in result.output
        assert message in result.output

    def test_unknown_naming_key_is_ignored(self, runner, tmp_path):
        config = tmp_path / "config.json"
        config.write_text('{"naming": {"enums": "pascal"}, "add_generation_comment": false}', encoding="utf-8")
        result = runner.invoke(db_types_flatten, [str(SCHEMA_FILE), "-c", str(config)])
        assert result.exit_code == 0, result.output
        assert 'export type mood = "happy" | "sad" | "ok"' in result.output

    def test_invalid_source(self, runner, tmp_path):
        source = tmp_path / "broken.ts"
        source.write_text("export type Database = {\n  public: {\n", encoding="utf-8")
        result = runner.invoke(db_types_flatten, [str(source)])
        assert result.exit_code == 1
        assert "Failed to parse" in result.output

    def test_missing_input(self, runner, tmp_path):
        result = runner.invoke(db_types_flatten, [str(tmp_path / "nope.ts")])
        assert result.exit_code == 2
