"""
Tests for schema file discovery.
"""

from json_schema_resolver.discovery import discover_schema_files


def touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("{}", encoding="utf-8")
    return path


class TestDiscoverSchemaFiles:
    def test_recursive_directory(self, tmp_path):
        b = touch(tmp_path / "b.json")
        a = touch(tmp_path / "sub" / "a.json")
        touch(tmp_path / "notes.txt")
        assert discover_schema_files([tmp_path]) == sorted([a, b])

    def test_non_recursive_directory(self, tmp_path):
        b = touch(tmp_path / "b.json")
        touch(tmp_path / "sub" / "a.json")
        assert discover_schema_files([tmp_path], recursive=False) == [b]

    def test_pattern(self, tmp_path):
        schema = touch(tmp_path / "person.schema.json")
        touch(tmp_path / "data.json")
        assert discover_schema_files([tmp_path], pattern="*.schema.json") == [schema]

    def test_files_kept_in_given_order_without_duplicates(self, tmp_path):
        a = touch(tmp_path / "a.json")
        b = touch(tmp_path / "b.json")
        assert discover_schema_files([b, a, str(b)]) == [b, a]

    def test_file_and_its_directory(self, tmp_path):
        a = touch(tmp_path / "a.json")
        b = touch(tmp_path / "b.json")
        assert discover_schema_files([b, tmp_path]) == [b, a]
