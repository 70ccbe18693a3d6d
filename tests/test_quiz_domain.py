"""
Pytest tests for QuizDomain and ResultDomain helpers
Covers category normalization, sampling and answer scoring
"""

from types import SimpleNamespace

import pytest

from aptiquest.core.exceptions import ValidationError
from aptiquest.domain.quiz_domain import QuizDomain
from aptiquest.domain.result_domain import ResultDomain
from aptiquest.schemas.result import NO_EXPLANATION, UNKNOWN_QUESTION


class TestCategoryNormalization:
    def test_lowercases_and_trims(self):
        assert QuizDomain.normalize_categories([" Logical ", "VERBAL"]) == [
            "logical",
            "verbal",
        ]

    def test_single_string_is_accepted(self):
        assert QuizDomain.normalize_categories("Numerical") == ["numerical"]

    def test_empty_defaults_to_all(self):
        assert QuizDomain.normalize_categories([]) == ["all"]
        assert QuizDomain.normalize_categories(None) == ["all"]

    def test_every_invalid_tag_is_reported(self):
        with pytest.raises(ValidationError) as exc_info:
            QuizDomain.normalize_categories(["logical", "astrology", "cooking"])

        assert "astrology" in exc_info.value.message
        assert "cooking" in exc_info.value.message
        assert "logical" not in exc_info.value.message

    def test_all_disables_the_filter(self):
        assert QuizDomain.category_filter(["all", "logical"]) is None
        assert QuizDomain.category_filter(["logical"]) == ["logical"]

    def test_display_categories_are_capitalized(self):
        assert QuizDomain.display_categories(["logical", "all"]) == ["Logical", "All"]


class TestSampling:
    def test_sample_has_no_duplicates(self):
        pool = [f"id{i}" for i in range(50)]
        for _ in range(20):
            picked = QuizDomain.sample(pool, 10)
            assert len(picked) == 10
            assert len(set(picked)) == 10
            assert set(picked) <= set(pool)

    def test_sample_clamps_to_pool_size(self):
        pool = list(range(10))
        picked = QuizDomain.sample(pool, 1000)
        assert sorted(picked) == pool

    def test_shuffled_is_a_permutation_and_leaves_input_alone(self):
        items = list(range(30))
        result = QuizDomain.shuffled(items)
        assert sorted(result) == items
        assert items == list(range(30))


class TestScoring:
    def setup_method(self):
        self.question = SimpleNamespace(
            id="q1",
            question="Capital of France?",
            options=["Paris", "Rome"],
            answer="Paris",
            explanation="",
        )

    def test_comparison_trims_whitespace(self):
        assert ResultDomain.is_correct("  Paris ", "Paris ")

    def test_comparison_is_case_sensitive(self):
        assert not ResultDomain.is_correct("paris", "Paris")

    def test_snapshot_copies_question_content(self):
        snapshot = ResultDomain.snapshot("q1", "Paris", self.question)

        assert snapshot.question == "Capital of France?"
        assert snapshot.options == ["Paris", "Rome"]
        assert snapshot.correct_answer == "Paris"
        assert snapshot.explanation == NO_EXPLANATION
        assert snapshot.correct is True

    def test_unknown_question_snapshot(self):
        snapshot = ResultDomain.snapshot("missing", "Paris", None)

        assert snapshot.question_id == "missing"
        assert snapshot.question == UNKNOWN_QUESTION
        assert snapshot.options == []
        assert snapshot.correct is False

    def test_tally_counts_right_and_wrong(self):
        snapshots = ResultDomain.build_snapshots(
            {"q1": "Paris", "q2": "Rome"}, [self.question]
        )
        assert ResultDomain.tally(snapshots) == {
            "correct_answers": 1,
            "wrong_answers": 1,
        }
