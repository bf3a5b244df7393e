"""
Tests for curriculum content checks.
"""

from curriculex.index import CurriculumIndex, Severity, ValidationIssue, validate_curriculum
from curriculex.telemetry import RecordingTelemetry


def _checks(issues):
    return [issue.check for issue in issues]


class TestValidateCurriculum:
    """Test each content check."""

    def test_sample_curriculum_is_clean(self, sample_curriculum):
        assert validate_curriculum(sample_curriculum) == []

    def test_fixture_curriculum_only_grammar_warnings(self, two_module_curriculum):
        # fill-blank steps there have no grammar-intro
        assert set(_checks(validate_curriculum(two_module_curriculum))) == {"GRAMMAR_BEFORE_INTRO"}

    def test_unknown_vocabulary_reference(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", vocab_ids=["salam"], steps=[
                factory.flashcard("salam"),
                factory.quiz("ghost"),
            ]),
        ]))
        issues = validate_curriculum(curriculum)
        assert _checks(issues) == ["UNKNOWN_VOCAB_REF"]
        assert issues[0].severity == Severity.ERROR
        assert issues[0].step_index == 1

    def test_unknown_flashcard_vocabulary(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", steps=[factory.flashcard("ghost")]),
        ]))
        assert _checks(validate_curriculum(curriculum)) == ["UNKNOWN_VOCAB_REF"]

    def test_vocabulary_used_before_introduction(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", vocab_ids=["salam"], steps=[
                factory.quiz("salam"),
                factory.flashcard("salam"),
                factory.quiz("salam"),
            ]),
        ]))
        issues = validate_curriculum(curriculum)
        assert _checks(issues) == ["VOCAB_NOT_INTRODUCED"]
        assert issues[0].severity == Severity.WARNING
        assert issues[0].step_index == 0

    def test_vocabulary_from_later_lesson(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", steps=[factory.quiz("esm")]),
            factory.lesson("module1", "lesson2", vocab_ids=["esm"], steps=[factory.flashcard("esm")]),
        ]))
        issues = validate_curriculum(curriculum)
        assert _checks(issues) == ["VOCAB_NOT_INTRODUCED"]
        assert (issues[0].module_id, issues[0].lesson_id) == ("module1", "lesson1")

    def test_review_vocabulary_suppresses_warning(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", steps=[factory.quiz("esm")], reviewVocabulary=["esm"]),
            factory.lesson("module1", "lesson2", vocab_ids=["esm"], steps=[factory.flashcard("esm")]),
        ]))
        assert validate_curriculum(curriculum) == []

    def test_bad_origin_lesson_ref(self, factory):
        lesson = factory.lesson("module1", "lesson2", steps=[factory.flashcard("salam")])
        lesson["vocabulary"] = [factory.vocab("salam", "module1", "lesson1")]
        curriculum = factory.curriculum(factory.module("module1", [lesson]))
        issues = validate_curriculum(curriculum)
        assert _checks(issues) == ["BAD_ORIGIN_LESSON_REF"]
        assert "module1-lesson2" in issues[0].message

    def test_grammar_before_intro(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", steps=[factory.fill_blank(suffixes=["am"])]),
            factory.lesson("module1", "lesson2", steps=[
                factory.grammar_intro("suffix-am"),
                factory.fill_blank(suffixes=["am"]),
            ]),
        ]))
        issues = validate_curriculum(curriculum)
        assert _checks(issues) == ["GRAMMAR_BEFORE_INTRO"]
        assert issues[0].lesson_id == "lesson1"

    def test_grammar_intro_in_earlier_lesson(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", steps=[factory.grammar_intro("suffix-am")]),
            factory.lesson("module1", "lesson2", steps=[factory.fill_blank(suffixes=["am"])]),
        ]))
        assert validate_curriculum(curriculum) == []

    def test_flashcard_without_vocabulary(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", steps=[factory.flashcard()]),
        ]))
        issues = validate_curriculum(curriculum)
        assert _checks(issues) == ["FLASHCARD_WITHOUT_VOCAB"]
        assert issues[0].severity == Severity.WARNING

    def test_errors_sorted_first(self, factory):
        curriculum = factory.curriculum(factory.module("module1", [
            factory.lesson("module1", "lesson1", steps=[
                factory.flashcard(),
                factory.flashcard("ghost"),
            ]),
        ]))
        issues = validate_curriculum(curriculum)
        assert [issue.severity for issue in issues] == [Severity.ERROR, Severity.WARNING]

    def test_uses_supplied_index(self, two_module_curriculum):
        telemetry = RecordingTelemetry()
        index = CurriculumIndex(two_module_curriculum, telemetry=telemetry)
        validate_curriculum(two_module_curriculum, index)
        assert index.is_built
        assert index.cached_lesson_count() > 0


class TestValidationIssue:
    """Test issue rendering."""

    def test_str_with_step(self):
        issue = ValidationIssue(
            severity=Severity.ERROR,
            check="UNKNOWN_VOCAB_REF",
            module_id="module1",
            lesson_id="lesson2",
            step_index=3,
            message="quiz step references unknown vocabulary 'ghost'",
        )
        assert str(issue) == "[error] UNKNOWN_VOCAB_REF module1/lesson2#3: quiz step references unknown vocabulary 'ghost'"

    def test_location_without_step(self):
        issue = ValidationIssue(Severity.WARNING, "BAD_ORIGIN_LESSON_REF", "module1", "lesson1", "x")
        assert issue.location == "module1/lesson1"
