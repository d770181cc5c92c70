"""
End-to-end tests for transform_types.
"""

import re
from pathlib import Path

import pytest

from db_types_flatten import ParseError, transform_types

SCHEMAS_DIR = Path(__file__).parent / "test_data" / "schemas"

QUALIFIED_PATH = re.compile(r"""Database\[["']public["']\]\[["'](Enums|CompositeTypes)["']\]""")

MOOD_SOURCE = """export type Database = {
  public: {
    Tables: {
      users: {
        Row: {
          id: number
          mood: Database["public"]["Enums"]["mood"]
        }
        Insert: {
          id?: number
          mood: Database["public"]["Enums"]["mood"]
        }
        Update: {
          id?: number
          mood?: Database["public"]["Enums"]["mood"]
        }
      }
    }
    Enums: {
      mood: "happy" | "sad"
    }
  }
}
"""


@pytest.fixture
def source_text():
    with open(SCHEMAS_DIR / "database.types.ts", encoding="utf-8") as f:
        return f.read()


def declarations(output):
    """Split output into {name: body}."""
    result = {}
    for declaration in output.split(";\n"):
        match = re.match(r"export type (\S+) =\s*(.*)", declaration, re.DOTALL)
        if match:
            result[match.group(1)] = match.group(2)
    return result


def count_table_declarations(output):
    return sum(1 for name in declarations(output) if re.search(r"(Row|Insert|Update|Delete|Relationships)$", name))


def test_mood_scenario():
    output = transform_types(MOOD_SOURCE, schema="public", updates=True)
    found = declarations(output)
    assert list(found) == ["usersRow", "usersUpdate", "mood"]
    assert found["mood"] == '"happy" | "sad"'
    assert "mood: mood" in found["usersRow"]
    assert "mood?: mood" in found["usersUpdate"]
    assert "Database" not in output
    assert "usersInsert" not in output


def test_mood_scenario_uppercase_enum():
    output = transform_types(MOOD_SOURCE, enum_formatter=str.upper, updates=True)
    found = declarations(output)
    assert list(found) == ["usersRow", "usersUpdate", "MOOD"]
    assert "mood: MOOD" in found["usersRow"]
    assert "mood?: MOOD" in found["usersUpdate"]
    assert "Database" not in output


def test_deterministic(source_text):
    kwargs = {"relationships": True, "inserts": True, "enum_formatter": lambda name: name.title()}
    assert transform_types(source_text, **kwargs) == transform_types(source_text, **kwargs)


def test_missing_schema_is_empty():
    assert transform_types(MOOD_SOURCE, schema="private") == ""


def test_missing_database_is_empty():
    assert transform_types("export type Something = { public: {} }\n") == ""


def test_empty_source_is_empty():
    assert transform_types("") == ""


def test_json_only_when_schema_missing(source_text):
    output = transform_types(source_text, schema="private")
    assert output.startswith("export type Json =")
    assert output.endswith("| Json[]")


@pytest.mark.parametrize("schema", ["public", "private"])
def test_json_is_schema_independent(schema):
    source = 'export type Json = string | number\nexport type Database = {\n  private: {\n    Enums: { a: "x" }\n  }\n}\n'
    output = transform_types(source, schema=schema)
    if schema == "private":
        assert output == 'export type Json = string | number;\nexport type a = "x"'
    else:
        assert output == "export type Json = string | number"


def test_json_without_database():
    assert transform_types("export type Json = string\n") == "export type Json = string"


@pytest.mark.parametrize(
    "flags",
    [
        {"relationships": True},
        {"inserts": True},
        {"updates": True},
        {"deletes": True},
        {"relationships": True, "inserts": True, "updates": True, "deletes": True},
    ],
)
def test_gates_never_reduce_table_declarations(source_text, flags):
    baseline = count_table_declarations(transform_types(source_text))
    assert count_table_declarations(transform_types(source_text, **flags)) >= baseline


def test_no_qualified_paths_survive(source_text):
    output = transform_types(source_text, relationships=True, inserts=True, updates=True, deletes=True)
    assert QUALIFIED_PATH.search(source_text)
    assert not QUALIFIED_PATH.search(output)


def test_json_copied_verbatim(source_text):
    output = transform_types(
        source_text,
        enum_formatter=lambda name: f"Renamed{name}",
        composite_type_formatter=lambda name: f"Renamed{name}",
    )
    json_text = source_text[source_text.index("export type Json") : source_text.index("export type Database")].rstrip()
    assert output.startswith(json_text + ";\n")
    assert "RenamedJson" not in output


def test_numeric_records_dropped_regardless_of_formatter(source_text):
    for formatter in (None, lambda name, operation: f"T_{name}_{operation}"):
        output = transform_types(source_text, table_or_view_formatter=formatter, inserts=True, updates=True)
        assert "Record<number" not in output
        assert "scores" not in output


def test_full_rewrite(source_text):
    output = transform_types(
        source_text,
        enum_formatter=lambda name: name.capitalize() + "Enum",
        composite_type_formatter=lambda name: name.capitalize() + "Type",
        table_or_view_formatter=lambda name, operation: f"{name}_{operation}",
        function_formatter=lambda name, grouping: f"{name}_{grouping}",
    )
    found = declarations(output)
    assert list(found) == [
        "Json",
        "profiles_Row",
        "happy_profiles_Row",
        "MoodEnum",
        "VisibilityEnum",
        "AddressType",
        "current_mood_Args",
        "profile_json_Returns",
    ]
    assert "mood: MoodEnum | null" in found["profiles_Row"]
    assert "address: AddressType | null" in found["profiles_Row"]
    assert "visibility: VisibilityEnum | null" in found["AddressType"]
    assert found["current_mood_Args"] == "Record<PropertyKey, never>"
    assert found["profile_json_Returns"] == "Json"


def test_parse_error():
    with pytest.raises(ParseError):
        transform_types("export type Database = {\n  public: {\n")


if __name__ == "__main__":
    pytest.main([__file__])
