import unittest

from testing_farm_survey.domain.markers import has_marker
from testing_farm_survey.domain.models import FileTreeEntry


def _entries(*names):
    return [FileTreeEntry(name=name) for name in names]


class TestHasMarker(unittest.TestCase):
    def test_fmf_suffix_is_positive(self) -> None:
        self.assertTrue(has_marker(_entries("README.md", "tests/plans.fmf")))

    def test_bare_fmf_entry_is_positive(self) -> None:
        self.assertTrue(has_marker(_entries(".fmf", "bash.spec")))

    def test_fmf_inside_name_is_negative(self) -> None:
        self.assertFalse(has_marker(_entries("README.fmf.bak")))

    def test_match_is_case_sensitive(self) -> None:
        self.assertFalse(has_marker(_entries("plans.FMF")))

    def test_empty_tree_is_negative(self) -> None:
        self.assertFalse(has_marker([]))

    def test_custom_marker(self) -> None:
        self.assertTrue(has_marker(_entries("gating.yaml"), marker="gating.yaml"))
        self.assertFalse(has_marker(_entries("plans.fmf"), marker="gating.yaml"))
