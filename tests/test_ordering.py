"""
Tests for module/lesson ordering.
"""

import itertools

import pytest

from curriculex.errors import OrdinalFormatError
from curriculex.index import (
    is_lesson_before,
    is_module_before,
    lesson_sort_key,
    module_sort_key,
    parse_ordinal,
)


class TestParseOrdinal:
    """Test identifier parsing."""

    def test_valid(self):
        assert parse_ordinal("module3", "module") == 3
        assert parse_ordinal("lesson12", "lesson") == 12
        assert parse_ordinal("lesson007", "lesson") == 7

    @pytest.mark.parametrize(
        "identifier",
        ["intro", "module", "module3a", "Module3", "lesson3", " module3", "", "module3\n", "module\u0663", "module-3"],
    )
    def test_malformed_module_ids(self, identifier):
        with pytest.raises(OrdinalFormatError):
            parse_ordinal(identifier, "module")

    def test_non_string(self):
        with pytest.raises(OrdinalFormatError):
            parse_ordinal(None, "module")

    def test_error_carries_identifier(self):
        with pytest.raises(OrdinalFormatError) as exc_info:
            parse_ordinal("intro", "lesson")
        assert exc_info.value.identifier == "intro"
        assert exc_info.value.prefix == "lesson"


class TestComparators:
    """Test strict ordering comparisons."""

    def test_numeric_not_lexicographic(self):
        assert is_module_before("module2", "module10")
        assert not is_module_before("module10", "module2")
        assert is_lesson_before("lesson9", "lesson11")

    def test_strict(self):
        assert not is_module_before("module4", "module4")
        assert not is_lesson_before("lesson1", "lesson1")

    def test_malformed_fails_loudly(self):
        with pytest.raises(OrdinalFormatError):
            is_module_before("module1", "appendix")
        with pytest.raises(OrdinalFormatError):
            is_lesson_before("lesson-one", "lesson2")

    def test_accepts_loaded_objects(self, two_module_curriculum):
        module1, module2 = two_module_curriculum.modules
        assert is_module_before(module1, module2)
        assert is_module_before(module1, "module2")
        assert is_lesson_before(module1.lessons[0], module1.lessons[1])

    def test_transitivity(self):
        ids = [f"module{n}" for n in (1, 2, 3, 9, 10, 11, 20, 100)]
        for a, b, c in itertools.permutations(ids, 3):
            if is_module_before(a, b) and is_module_before(b, c):
                assert is_module_before(a, c)

    def test_sort_keys(self):
        assert sorted(["module10", "module2", "module1"], key=module_sort_key) == ["module1", "module2", "module10"]
        assert sorted(["lesson3", "lesson20", "lesson4"], key=lesson_sort_key) == ["lesson3", "lesson4", "lesson20"]
