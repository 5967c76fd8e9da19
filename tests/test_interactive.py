"""Tests for the repository choice helper used by the prompts."""

from __future__ import annotations

import unittest
from pathlib import Path

from rrc.interactive import build_repository_choices
from rrc.models import LocalRepository
from rrc.vcs import VcsBackend


class BuildRepositoryChoicesTests(unittest.TestCase):
    def setUp(self) -> None:
        self.repos = [
            LocalRepository(path=Path("/repos/github.com/acme/widget"), relative_path="github.com/acme/widget", backend=VcsBackend.GIT),
            LocalRepository(path=Path("/repos/example.com/org/tool"), relative_path="example.com/org/tool", backend=VcsBackend.HG),
        ]

    def test_returns_lookup_and_choices(self) -> None:
        choices, lookup = build_repository_choices(self.repos)

        self.assertEqual(len(choices), len(self.repos))
        self.assertEqual(set(lookup.keys()), {str(repo.path) for repo in self.repos})
        self.assertIs(lookup[choices[0].value], self.repos[0])
        self.assertEqual(choices[1].name, "example.com/org/tool · hg")

    def test_duplicate_paths_are_listed_once(self) -> None:
        choices, lookup = build_repository_choices(self.repos + [self.repos[0]])

        self.assertEqual(len(choices), 2)
        self.assertEqual(len(lookup), 2)


if __name__ == "__main__":
    unittest.main()
