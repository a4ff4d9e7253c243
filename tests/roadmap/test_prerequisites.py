"""Tests for prerequisite graphs, learning order and suggestions."""

from roadmap.prerequisites import (
    PREREQUISITES,
    get_learning_order,
    get_prerequisites,
    get_suggested_next,
    prerequisites_met,
)
from shared_types import Track


class TestGraphs:
    def test_lookup(self):
        assert get_prerequisites("frontend", "React") == ("JavaScript", "ES6+", "HTML", "CSS")
        assert get_prerequisites("frontend", "HTML") == ()
        assert get_prerequisites("frontend", "Unknown") == ()
        assert get_prerequisites("mobile", "React") == ()
        assert get_prerequisites("frontend", "react") == ("JavaScript", "ES6+", "HTML", "CSS")

    def test_every_track_has_a_graph(self):
        assert set(PREREQUISITES) == set(Track)

    def test_prerequisites_met_is_case_insensitive(self):
        assert prerequisites_met("frontend", "CSS", ["html"])
        assert not prerequisites_met("frontend", "React", ["HTML", "CSS"])


class TestLearningOrder:
    def test_prerequisites_come_first(self):
        order = get_learning_order("frontend", ["React", "JavaScript", "HTML", "CSS", "ES6+"])
        assert order == ["HTML", "CSS", "JavaScript", "ES6+", "React"]

    def test_prerequisites_outside_the_set_are_ignored(self):
        assert get_learning_order("frontend", ["React"]) == ["React"]
        assert get_learning_order("frontend", ["Async/Await", "React"]) == ["Async/Await", "React"]

    def test_is_a_permutation(self):
        skills = ["Jest", "React Testing Library", "Unit Testing", "React", "JavaScript"]
        order = get_learning_order("frontend", skills)
        assert sorted(order) == sorted(skills)
        assert order.index("Unit Testing") < order.index("Jest") < order.index("React Testing Library")

    def test_duplicates_collapse(self):
        assert get_learning_order("frontend", ["CSS", "HTML", "CSS"]) == ["HTML", "CSS"]

    def test_names_match_case_insensitively(self):
        order = get_learning_order("frontend", ["react", "javascript", "html", "css"])
        assert order == ["html", "css", "javascript", "react"]

    def test_duplicates_differing_in_case_keep_first_spelling(self):
        assert get_learning_order("frontend", ["css", "HTML", "CSS"]) == ["HTML", "css"]

    def test_unknown_track_keeps_input_order(self):
        assert get_learning_order("mobile", ["b", "a"]) == ["b", "a"]

    def test_empty(self):
        assert get_learning_order("backend", []) == []

    def test_cycle_is_flushed_alphabetically(self, monkeypatch):
        monkeypatch.setattr(
            "roadmap.prerequisites.PREREQUISITES",
            {Track.FRONTEND: {"A": ("B",), "B": ("A",), "C": ()}},
        )
        assert get_learning_order("frontend", ["B", "A", "C"]) == ["C", "A", "B"]


class TestSuggestedNext:
    def test_met_and_single_blocker(self):
        suggestions = get_suggested_next("frontend", ["HTML"], ["CSS", "JavaScript", "React", "ES6+"])

        assert [s.skill for s in suggestions] == ["CSS", "JavaScript", "ES6+"]
        assert suggestions[0].reason == "prerequisites met"
        assert suggestions[2].reason == "blocked by single prerequisite JavaScript"
        assert suggestions[2].missing == ["JavaScript"]

    def test_respects_count(self):
        suggestions = get_suggested_next("frontend", ["HTML"], ["CSS", "JavaScript", "SEO Basics"], count=2)
        assert len(suggestions) == 2

    def test_current_skills_compare_case_insensitively(self):
        suggestions = get_suggested_next("frontend", ["html", "css"], ["CSS Grid"])
        assert suggestions[0].reason == "prerequisites met"

    def test_skips_skills_missing_two_or_more(self):
        assert get_suggested_next("frontend", [], ["React"]) == []
