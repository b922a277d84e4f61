"""Tests for the skill scoring engine."""

import pytest

from services.models import PlatformSnapshot, TagCount
from services.scoring_engine import SYNC_RECOMMENDATION, ScoringEngine, overall_score


@pytest.fixture
def engine():
    return ScoringEngine()


class TestOverallScore:
    def test_baseline_only(self):
        assert overall_score(0, 0, 0, 0) == 10

    def test_weighted(self):
        # 0 + 10 + 10 + 4.5 + 10 = 34.5 rounds up
        assert overall_score(0, 40, 40, 30) == 35

    def test_clamped(self):
        assert overall_score(300, 300, 300, 300) == 100


class TestScoringEngine:
    """Test suite for ScoringEngine."""

    def test_github_only_profile(self, engine, github_snapshot):
        analysis = engine.analyze({"github": github_snapshot})

        assert analysis.project_building_score == 40
        assert analysis.consistency_score == 40
        assert analysis.collaboration_score == 30
        assert analysis.problem_solving_score == 0
        assert analysis.total_problems_solved == 0
        assert analysis.platform_breakdown == {}
        assert analysis.overall_score == 35
        assert "Strong project portfolio with 12 repositories" in analysis.strengths
        assert "Multi-language developer: Go, Rust, Python" in analysis.strengths
        assert "Highly active on GitHub recently" in analysis.strengths
        assert any("Only active on 1 platform" in w for w in analysis.weaknesses)
        assert analysis.skill_distribution == {"Go": 15, "Rust": 15, "Python": 15}

    def test_leetcode_with_strong_dp(self, engine, leetcode_snapshot):
        analysis = engine.analyze({"leetcode": leetcode_snapshot})

        assert analysis.problem_solving_score >= 60
        assert analysis.total_problems_solved == 250
        assert analysis.platform_breakdown == {"LeetCode": 250}
        assert analysis.dsa_skills == {"dynamic programming": 20}
        assert "Exceptional: 250 LeetCode problems solved" in analysis.strengths
        assert "Can solve Hard-level algorithmic problems" in analysis.strengths
        assert any(s.startswith("Strong DSA topics: dynamic programming") for s in analysis.strengths)
        dp_items = [
            i for i in analysis.dsa_improvements
            if i.topic.lower() == "dynamic programming" and i.priority == "high"
        ]
        assert dp_items == []

    def test_empty_dataset(self, engine):
        analysis = engine.analyze({})

        assert analysis.overall_score == 10
        assert analysis.problem_solving_score == 0
        assert analysis.recommendations == [SYNC_RECOMMENDATION]
        assert analysis.company_matches == []
        assert analysis.dsa_improvements == []

    def test_all_platforms_failed(self, engine):
        analysis = engine.analyze({"github": None, "leetcode": None})
        assert analysis.overall_score == 10
        assert analysis.recommendations == [SYNC_RECOMMENDATION]

    def test_sub_scores_clamped(self, engine):
        dataset = {
            "leetcode": PlatformSnapshot(stats={"totalSolved": 500, "hardSolved": 40}),
            "codeforces": PlatformSnapshot(stats={"rating": 1900, "problemsSolved": 80}),
            "gfg": PlatformSnapshot(stats={"totalSolved": 150, "score": 900}),
        }
        analysis = engine.analyze(dataset)

        assert analysis.problem_solving_score == 100
        assert 0 <= analysis.overall_score <= 100
        assert analysis.total_problems_solved == 730
        assert analysis.platform_breakdown == {
            "LeetCode": 500,
            "Codeforces": 80,
            "GeeksForGeeks": 150,
        }
        assert "High GFG coding score: 900" in analysis.strengths

    def test_breakdown_sums_to_total(self, engine):
        dataset = {
            "leetcode": PlatformSnapshot(stats={"totalSolved": 42}),
            "gfg": PlatformSnapshot(stats={"totalSolved": 0}),
            "codechef": PlatformSnapshot(stats={"problemsSolved": 7}),
        }
        analysis = engine.analyze(dataset)

        assert analysis.total_problems_solved == sum(analysis.platform_breakdown.values())
        assert "GeeksForGeeks" not in analysis.platform_breakdown

    def test_deterministic(self, engine, github_snapshot, leetcode_snapshot):
        dataset = {"github": github_snapshot, "leetcode": leetcode_snapshot}
        assert engine.analyze(dataset) == engine.analyze(dataset)

    def test_insertion_order_does_not_matter(self, engine, github_snapshot, leetcode_snapshot):
        forward = engine.analyze({"github": github_snapshot, "leetcode": leetcode_snapshot})
        backward = engine.analyze({"leetcode": leetcode_snapshot, "github": github_snapshot})
        assert forward.model_dump() == backward.model_dump()

    def test_few_hard_problems_flagged(self, engine):
        dataset = {"leetcode": PlatformSnapshot(stats={"totalSolved": 50, "hardSolved": 1})}
        analysis = engine.analyze(dataset)

        assert analysis.dsa_improvements[0].topic == "Hard Problems"
        assert analysis.dsa_improvements[0].priority == "high"
        assert analysis.problem_solving_score == 20

    def test_small_portfolio_recommends_projects(self, engine):
        github = PlatformSnapshot(stats={"totalRepos": 2, "recentActivity": 12})
        analysis = engine.analyze({"github": github})

        assert analysis.project_building_score == 0
        assert analysis.consistency_score == 25
        assert "Limited number of public GitHub projects" in analysis.weaknesses
        assert analysis.recommendations[0].startswith("Build more projects on GitHub")

    def test_codeforces_thresholds(self, engine):
        expert = engine.analyze({"codeforces": PlatformSnapshot(stats={"rating": 1600, "contestsParticipated": 20})})
        newbie = engine.analyze({"codeforces": PlatformSnapshot(stats={"rating": 800})})
        unrated = engine.analyze({"codeforces": PlatformSnapshot(stats={"rating": 0})})

        assert expert.problem_solving_score == 40
        assert expert.consistency_score == 20
        assert newbie.problem_solving_score == 10
        assert unrated.problem_solving_score == 0

    def test_stub_only_dataset(self, engine):
        stub = PlatformSnapshot(
            stats={"rating": 0, "stars": "N/A", "problemsSolved": 0},
            profile={"username": "d", "message": "Add CodeChef stats manually"},
        )
        analysis = engine.analyze({"codechef": stub})

        assert analysis.overall_score == 10
        assert analysis.platform_breakdown == {}
        assert SYNC_RECOMMENDATION not in analysis.recommendations

    def test_malformed_stats_count_as_zero(self, engine):
        github = PlatformSnapshot(
            stats={"totalRepos": "many", "recentActivity": None},
            profile={"followers": "lots"},
        )
        analysis = engine.analyze({"github": github})
        assert analysis.collaboration_score == 0
        assert analysis.project_building_score == 0

    def test_company_matches_from_merged_tags(self, engine):
        tags = [
            TagCount(tag_name=name, problems_solved=20)
            for name in ("Arrays", "Dynamic Programming", "Trees", "String", "Greedy", "Sorting")
        ]
        analysis = engine.analyze({"leetcode": PlatformSnapshot(stats={"totalSolved": 120}, tags=tags)})

        assert analysis.company_matches
        assert analysis.company_matches[0].score >= 30
        assert len(analysis.dsa_improvements) <= 6

    def test_short_dp_tag_keeps_dynamic_programming_weak(self, engine):
        codeforces = PlatformSnapshot(
            stats={"rating": 1300, "problemsSolved": 40},
            tags=[TagCount(tag_name="dp", problems_solved=10)],
        )
        analysis = engine.analyze({"codeforces": codeforces})

        assert analysis.dsa_skills == {"dp": 10}
        assert any("Focus on Dynamic Programming" in r for r in analysis.recommendations)
        assert any(
            i.topic == "Dynamic programming" and i.priority == "high"
            for i in analysis.dsa_improvements
        )

    def test_camel_case_contract(self, engine, github_snapshot):
        payload = engine.analyze({"github": github_snapshot}).model_dump(by_alias=True)
        assert payload["overallScore"] == 35
        assert "projectBuildingScore" in payload
        assert "dsaImprovements" in payload
