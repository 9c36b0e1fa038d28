"""Tests for packaging and pyproject.toml correctness."""

import os
import unittest

_ROOT = os.path.dirname(os.path.dirname(__file__))


def _load_pyproject():
    import tomllib
    with open(os.path.join(_ROOT, "pyproject.toml"), "rb") as f:
        return tomllib.load(f)


class TestPyproject(unittest.TestCase):
    def test_runtime_deps_declared(self):
        deps = _load_pyproject()["project"]["dependencies"]
        self.assertTrue(any(d.startswith("PyYAML") for d in deps))
        self.assertTrue(any(d.startswith("tqdm") for d in deps))

    def test_pytest_only_in_test_extra(self):
        data = _load_pyproject()
        self.assertFalse(any("pytest" in d for d in data["project"]["dependencies"]))
        test_deps = data["project"]["optional-dependencies"]["test"]
        self.assertTrue(any(d.startswith("pytest") for d in test_deps))

    def test_console_script_targets_cli(self):
        scripts = _load_pyproject()["project"]["scripts"]
        self.assertEqual(scripts["CubeBrew"], "CubeBrew.cli:main")

    def test_requirements_match_pyproject(self):
        with open(os.path.join(_ROOT, "requirements.txt"), "r", encoding="utf-8") as f:
            lines = [
                ln.strip()
                for ln in f.readlines()
                if ln.strip() and not ln.strip().startswith("#")
            ]
        self.assertEqual(sorted(lines), sorted(_load_pyproject()["project"]["dependencies"]))

    def test_version_matches_package(self):
        from CubeBrew import __version__
        self.assertEqual(_load_pyproject()["project"]["version"], __version__)


if __name__ == "__main__":
    unittest.main(verbosity=2)
