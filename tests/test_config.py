"""Tests for config validation and YAML persistence."""

import os
import shutil
import tempfile
import unittest

import yaml

from CubeBrew.config import CubemapConfig, _merge_dict_to_dataclass


class TestConfigValidation(unittest.TestCase):
    def test_default_config_valid(self):
        config = CubemapConfig()
        config.validate()

    def test_invalid_log_level(self):
        config = CubemapConfig()
        config.log_level = "LOUD"
        with self.assertRaises(ValueError) as ctx:
            config.validate()
        self.assertIn("log_level", str(ctx.exception))

    def test_log_level_normalized(self):
        config = CubemapConfig()
        config.log_level = "debug"
        config.validate()
        self.assertEqual(config.log_level, "DEBUG")

    def test_invalid_config_version(self):
        config = CubemapConfig()
        config.config_version = 0
        with self.assertRaises(ValueError):
            config.validate()

    def test_errors_are_collected(self):
        config = CubemapConfig()
        config.config_version = 0
        config.log_level = "LOUD"
        with self.assertRaises(ValueError) as ctx:
            config.validate()
        self.assertIn("config_version", str(ctx.exception))
        self.assertIn("log_level", str(ctx.exception))

    def test_keep_partial_without_overwrite_warns(self):
        config = CubemapConfig()
        config.keep_partial_output = True
        config.overwrite = False
        with self.assertLogs("cubemap.config", level="WARNING") as cm:
            config.validate()
        self.assertTrue(any("keep_partial_output" in msg for msg in cm.output))


class TestConfigYaml(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.path = os.path.join(self.tmpdir, "cubebrew.yaml")

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def _write(self, text):
        with open(self.path, "w", encoding="utf-8") as f:
            f.write(text)

    def test_round_trip(self):
        config = CubemapConfig()
        config.overwrite = False
        config.log_level = "WARNING"
        config.to_yaml(self.path)
        loaded = CubemapConfig.from_yaml(self.path)
        self.assertEqual(loaded, config)
        self.assertEqual(
            [n for n in os.listdir(self.tmpdir) if ".tmp." in n], []
        )

    def test_missing_file_returns_defaults(self):
        loaded = CubemapConfig.from_yaml(os.path.join(self.tmpdir, "nope.yaml"))
        self.assertEqual(loaded, CubemapConfig())

    def test_empty_file_returns_defaults(self):
        self._write("")
        self.assertEqual(CubemapConfig.from_yaml(self.path), CubemapConfig())

    def test_malformed_yaml_raises_value_error(self):
        self._write("overwrite: [unclosed\n")
        with self.assertRaises(ValueError):
            CubemapConfig.from_yaml(self.path)

    def test_non_mapping_raises_value_error(self):
        self._write("- a\n- b\n")
        with self.assertRaises(ValueError) as ctx:
            CubemapConfig.from_yaml(self.path)
        self.assertIn("mapping", str(ctx.exception))

    def test_invalid_value_names_file(self):
        self._write("log_level: LOUD\n")
        with self.assertRaises(ValueError) as ctx:
            CubemapConfig.from_yaml(self.path)
        self.assertIn(self.path, str(ctx.exception))

    def test_newer_config_version_warns(self):
        self._write("config_version: 99\n")
        with self.assertLogs("cubemap.config", level="WARNING") as cm:
            CubemapConfig.from_yaml(self.path)
        self.assertTrue(any("config_version=99" in msg for msg in cm.output))

    def test_generated_yaml_is_plain_mapping(self):
        CubemapConfig().to_yaml(self.path)
        with open(self.path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        self.assertEqual(data["overwrite"], True)
        self.assertEqual(data["keep_partial_output"], False)


class TestMergeDict(unittest.TestCase):
    def test_unknown_key_ignored(self):
        config = CubemapConfig()
        with self.assertLogs("cubemap.config", level="WARNING") as cm:
            _merge_dict_to_dataclass(config, {"colour": "blue"})
        self.assertTrue(any("colour" in msg for msg in cm.output))

    def test_type_mismatch_keeps_default(self):
        config = CubemapConfig()
        with self.assertLogs("cubemap.config", level="WARNING"):
            _merge_dict_to_dataclass(config, {"overwrite": "yes"})
        self.assertTrue(config.overwrite)

    def test_bool_not_accepted_for_int(self):
        config = CubemapConfig()
        with self.assertLogs("cubemap.config", level="WARNING"):
            _merge_dict_to_dataclass(config, {"config_version": True})
        self.assertEqual(config.config_version, 1)

    def test_integral_float_promoted(self):
        config = CubemapConfig()
        _merge_dict_to_dataclass(config, {"config_version": 1.0})
        self.assertEqual(config.config_version, 1)
        self.assertIsInstance(config.config_version, int)

    def test_null_keeps_default(self):
        config = CubemapConfig()
        with self.assertLogs("cubemap.config", level="WARNING"):
            _merge_dict_to_dataclass(config, {"log_file": None})
        self.assertEqual(config.log_file, "")

    def test_valid_values_applied(self):
        config = CubemapConfig()
        _merge_dict_to_dataclass(
            config, {"show_progress": False, "log_file": "run.log"}
        )
        self.assertFalse(config.show_progress)
        self.assertEqual(config.log_file, "run.log")


if __name__ == "__main__":
    unittest.main(verbosity=2)
