"""Tests for loading profiles from disk and the environment."""

from __future__ import annotations

import os
import tempfile
import textwrap
import unittest
from pathlib import Path
from unittest import mock

from rrc.config import (
    configured_roots,
    default_config_path,
    get_profile,
    load_config,
    profile_roots,
)
from rrc.exceptions import ConfigError
from rrc.fs import expand_home


class LoadConfigTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.dir = Path(self._tmp.name)
        self.path = self.dir / "rrc.toml"

    def _write(self, body: str) -> None:
        self.path.write_text(textwrap.dedent(body))

    def test_missing_file_yields_default_profile_from_env(self) -> None:
        with mock.patch.dict(os.environ, {"RRC_ROOT": "/srv/repos"}):
            config = load_config(self.dir / "absent.toml")

        self.assertEqual(list(config.profiles), ["default"])
        self.assertEqual(config.profiles["default"].root, "/srv/repos")
        self.assertIsNone(config.source)

    def test_missing_file_defaults_to_repos_in_home(self) -> None:
        env = {key: value for key, value in os.environ.items() if key != "RRC_ROOT"}
        env["HOME"] = "/home/tester"
        with mock.patch.dict(os.environ, env, clear=True):
            config = load_config(self.dir / "absent.toml")

        self.assertEqual(config.profiles["default"].root, "/home/tester/repos")

    def test_profiles_and_host_overrides(self) -> None:
        self._write(
            """
            [default]
            root = "~/repos"

            [default.hosts]
            "example.com" = "/data/scm"

            [work]
            root = "/work"
            """
        )

        config = load_config(self.path)

        self.assertEqual(config.source, self.path)
        self.assertEqual(config.profiles["default"].hosts, {"example.com": "/data/scm"})
        self.assertEqual(config.profiles["work"].root, "/work")
        self.assertEqual(config.profiles["work"].hosts, {})

    def test_profile_without_root_uses_default_root(self) -> None:
        self._write(
            """
            [default]
            hosts = {}
            """
        )

        with mock.patch.dict(os.environ, {"RRC_ROOT": "/fallback"}):
            config = load_config(self.path)

        self.assertEqual(config.profiles["default"].root, "/fallback")

    def test_malformed_toml_raises(self) -> None:
        self._write("[default\nroot = ")

        with self.assertRaises(ConfigError) as ctx:
            load_config(self.path)

        self.assertIn(str(self.path), str(ctx.exception))

    def test_invalid_shapes_raise(self) -> None:
        bodies = [
            'default = "not a table"\n',
            "[default]\nroot = 3\n",
            '[default]\nhosts = ["example.com"]\n',
            "[default.hosts]\n\"example.com\" = 1\n",
        ]
        for body in bodies:
            with self.subTest(body=body):
                self.path.write_text(body)
                with self.assertRaises(ConfigError):
                    load_config(self.path)

    def test_config_path_from_env(self) -> None:
        with mock.patch.dict(os.environ, {"RRC_CONFIG": "/etc/rrc.toml"}):
            self.assertEqual(default_config_path(), Path("/etc/rrc.toml"))


class ProfileTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.base = Path(self._tmp.name).resolve()
        for name in ("repos", "scm", "work"):
            (self.base / name).mkdir()
        path = self.base / "rrc.toml"
        path.write_text(
            textwrap.dedent(
                f"""
                [default]
                root = "{self.base / 'repos'}"

                [default.hosts]
                "example.com" = "{self.base / 'scm'}"
                "example.org" = "{self.base / 'repos'}"
                "example.net" = "{self.base / 'not-cloned-yet'}"

                [work]
                root = "{self.base / 'work'}"
                """
            )
        )
        self.config = load_config(path)

    def test_get_profile_defaults_to_default(self) -> None:
        self.assertEqual(get_profile(self.config, None).name, "default")
        self.assertEqual(get_profile(self.config, "work").root, str(self.base / "work"))

    def test_unknown_profile_raises(self) -> None:
        with self.assertRaises(ConfigError) as ctx:
            get_profile(self.config, "missing")

        self.assertIn("profile 'missing' not found", str(ctx.exception))

    def test_profile_roots_include_existing_host_overrides(self) -> None:
        roots = profile_roots(self.config.profiles["default"])

        self.assertEqual(roots, [self.base / "repos", self.base / "scm"])

    def test_missing_host_override_root_is_skipped(self) -> None:
        self.assertNotIn(self.base / "not-cloned-yet", profile_roots(self.config.profiles["default"]))

        (self.base / "not-cloned-yet").mkdir()

        self.assertIn(self.base / "not-cloned-yet", profile_roots(self.config.profiles["default"]))

    def test_missing_profile_root_is_kept(self) -> None:
        (self.base / "work").rmdir()

        self.assertEqual(profile_roots(self.config.profiles["work"]), [self.base / "work"])

    def test_configured_roots_are_unique_and_sorted(self) -> None:
        self.assertEqual(
            configured_roots(self.config),
            [self.base / "repos", self.base / "scm", self.base / "work"],
        )


class ExpandHomeTests(unittest.TestCase):
    def test_expands_tilde_forms_only(self) -> None:
        with mock.patch.dict(os.environ, {"HOME": "/home/tester"}):
            self.assertEqual(expand_home("~"), Path("/home/tester"))
            self.assertEqual(expand_home("~/repos"), Path("/home/tester/repos"))
            self.assertEqual(expand_home("~other/repos"), Path("~other/repos"))
            self.assertEqual(expand_home("/abs/path"), Path("/abs/path"))

    def test_root_home_does_not_double_slash(self) -> None:
        with mock.patch.dict(os.environ, {"HOME": "/"}):
            self.assertEqual(expand_home("~/repos"), Path("/repos"))


if __name__ == "__main__":
    unittest.main()
