"""
Unit tests for name_search.config.

Covers table key folding, the packaged defaults, YAML loading and config
file discovery.
"""

import tempfile
import unittest
from pathlib import Path
from unittest import mock

from pydantic import ValidationError

from name_search.config import MatchTables, SearchSettings, Settings, find_config


class TestMatchTables(unittest.TestCase):
    """Test table construction and lookups."""

    def test_keys_are_folded(self):
        tables = MatchTables(
            name_remap={" Miguel ": ["Mihel", "MIGEL", "mihel"]},
            full_names={"Way-Chang": "Wei Zhang"},
            partial_names={"Ali Al": "Ali Al-Mansour"},
            single_name_priorities={"Jon": "Jon Richardson"},
        )
        self.assertEqual(tables.name_remap, {"miguel": ("mihel", "migel")})
        self.assertEqual(tables.full_name("way chang"), "Wei Zhang")
        self.assertEqual(tables.partial_name("  ALI AL "), "Ali Al-Mansour")
        self.assertEqual(tables.priority_name("JON"), "Jon Richardson")

    def test_single_string_variant(self):
        tables = MatchTables(surname_remap={"khan": "kan"})
        self.assertEqual(tables.surname_variants("Khan"), ("kan",))

    def test_missing_entries(self):
        tables = MatchTables()
        self.assertEqual(tables.name_variants("nobody"), ())
        self.assertIsNone(tables.full_name("nobody"))

    def test_tables_are_immutable(self):
        tables = MatchTables()
        with self.assertRaises(ValidationError):
            tables.name_remap = {"a": ("b",)}

    def test_table_contents_are_read_only(self):
        for tables in (MatchTables(), MatchTables(full_names={"Way Chang": "Wei Zhang"}), MatchTables.defaults()):
            with self.subTest(tables=tables):
                with self.assertRaises(TypeError):
                    tables.name_remap["x"] = ("y",)
                with self.assertRaises(TypeError):
                    tables.full_names["way chang"] = "Someone Else"

    def test_dump_gives_plain_dicts(self):
        dumped = MatchTables(name_remap={"Jon": ["John"]}).model_dump()
        self.assertEqual(dumped["name_remap"], {"jon": ("john",)})
        self.assertIs(type(dumped["name_remap"]), dict)
        self.assertEqual(MatchTables.model_validate(dumped), MatchTables(name_remap={"jon": ["john"]}))

    def test_bad_shape_is_rejected(self):
        with self.assertRaises(ValidationError):
            MatchTables.model_validate({"full_names": ["not", "a", "mapping"]})

    def test_merged_prefers_overlay(self):
        base = MatchTables(single_name_priorities={"miguel": "Miguel Rivera", "jon": "Jon Richardson"})
        overlay = MatchTables(single_name_priorities={"Miguel": "Miguel Cruz"})
        merged = base.merged(overlay)
        self.assertEqual(merged.priority_name("miguel"), "Miguel Cruz")
        self.assertEqual(merged.priority_name("jon"), "Jon Richardson")

    def test_packaged_defaults(self):
        tables = MatchTables.defaults()
        self.assertEqual(tables.priority_name("Miguel"), "Miguel Rivera")
        self.assertEqual(tables.partial_name("Ali Al"), "Ali Al-Mansour")
        self.assertEqual(tables.full_name("mikael jonson"), "Michael Johnson")
        self.assertIn("ayesha", tables.name_variants("aysha"))
        self.assertIn("khan", tables.surname_variants("kan"))


class TestSettings(unittest.TestCase):
    """Test settings loading."""

    def test_defaults(self):
        settings = Settings()
        self.assertEqual(settings.search.scoring_workers, 1)
        self.assertTrue(settings.search.use_default_tables)
        self.assertEqual(settings.resolved_tables(), MatchTables.defaults())

    def test_worker_count_has_a_floor(self):
        self.assertEqual(SearchSettings(scoring_workers=0).scoring_workers, 1)

    def test_matcher_names_are_stripped(self):
        settings = SearchSettings(disabled_matchers=[" exact ", "", "close_spelling"])
        self.assertEqual(settings.disabled_matchers, ["exact", "close_spelling"])

    def test_load_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "name_search.yaml"
            path.write_text(
                "tables:\n"
                "  single_name_priorities:\n"
                "    Miguel: Miguel Cruz\n"
                "search:\n"
                "  scoring_workers: 4\n"
                "  disabled_matchers: [close_spelling]\n",
                encoding="utf-8",
            )
            settings = Settings.load(path)
        self.assertEqual(settings.search.scoring_workers, 4)
        self.assertEqual(settings.search.disabled_matchers, ["close_spelling"])
        resolved = settings.resolved_tables()
        self.assertEqual(resolved.priority_name("miguel"), "Miguel Cruz")
        self.assertEqual(resolved.priority_name("jon"), "Jon Richardson")

    def test_load_empty_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "name_search.yaml"
            path.write_text("", encoding="utf-8")
            self.assertEqual(Settings.load(path), Settings())

    def test_without_default_tables(self):
        settings = Settings.model_validate(
            {
                "tables": {"partial_names": {"Ali Al": "Ali Al-Mansour"}},
                "search": {"use_default_tables": False},
            }
        )
        resolved = settings.resolved_tables()
        self.assertEqual(resolved.partial_name("ali al"), "Ali Al-Mansour")
        self.assertIsNone(resolved.priority_name("miguel"))


class TestFindConfig(unittest.TestCase):
    """Test config file discovery."""

    def test_explicit_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "custom.yaml"
            path.write_text("{}", encoding="utf-8")
            self.assertEqual(find_config(path), path)

    def test_missing_explicit_path(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(FileNotFoundError):
                find_config(Path(tmp) / "missing.yaml")

    def test_discovers_working_directory_file(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "name_search.yml"
            path.write_text("{}", encoding="utf-8")
            with mock.patch("name_search.config.Path.cwd", return_value=Path(tmp)):
                self.assertEqual(find_config(None), path)

    def test_no_config_is_fine(self):
        with tempfile.TemporaryDirectory() as tmp:
            with mock.patch("name_search.config.Path.cwd", return_value=Path(tmp)):
                self.assertIsNone(find_config(None))


if __name__ == "__main__":
    unittest.main()
