"""Tests for batch ranking and opportunity summaries."""

from datetime import timedelta

import pytest

from grant_matching.config import MatchingSettings
from grant_matching.errors import DimensionMismatchError
from grant_matching.models import GrantStatus
from grant_matching.ranking import (
    is_open,
    rank_opportunities,
    rank_with_settings,
    summarize_opportunities,
    summarize_with_settings,
)


@pytest.fixture
def grants(make_grant, today):
    """A mixed batch: strong, weak, closed and open-to-all grants."""
    return [
        make_grant(
            id="strong",
            title="Tecnologias Estratégicas - Edital 01/2025",
            value_min=500_000,
            value_max=3_000_000,
            deadline=today + timedelta(days=45),
            criteria=dict(cnae_codes=["62.01-5-01"], company_size=["SMALL"], states=["SP"]),
        ),
        make_grant(
            id="weak",
            title="Agro 4.0",
            deadline=today + timedelta(days=20),
            criteria=dict(
                cnae_codes=["01.11-3-01"],
                states=["MT"],
                priority_sectors=["Agronegócio"],
            ),
        ),
        make_grant(id="closed", status=GrantStatus.CLOSED, criteria={}),
        make_grant(id="cancelled", status=GrantStatus.CANCELLED),
        make_grant(id="upcoming", status=GrantStatus.UPCOMING),
        make_grant(id="open-to-all", title="Chamada Universal", status=GrantStatus.CLOSING_SOON),
    ]


class TestIsOpen:
    @pytest.mark.parametrize(
        "status,expected",
        [
            (GrantStatus.OPEN, True),
            (GrantStatus.CLOSING_SOON, True),
            (GrantStatus.UPCOMING, False),
            (GrantStatus.CLOSED, False),
            (GrantStatus.CANCELLED, False),
        ],
    )
    def test_status(self, make_grant, status, expected):
        assert is_open(make_grant(status=status)) is expected


class TestRankOpportunities:
    def test_skips_grants_not_accepting_applications(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, today=today)
        ids = {r.grant.id for r in ranked}
        assert ids == {"strong", "weak", "open-to-all"}

    def test_ordered_by_rating(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, today=today)
        assert ranked[0].grant.id == "strong"
        assert ranked[-1].grant.id == "weak"
        ratings = [r.rating.value for r in ranked]
        assert ratings == sorted(ratings, reverse=True)

    def test_min_match_score_filter(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, min_match_score=70, today=today)
        assert [r.grant.id for r in ranked] == ["strong", "open-to-all"]
        assert all(r.match.score >= 70 for r in ranked)

    def test_limit(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, limit=1, today=today)
        assert len(ranked) == 1
        assert ranked[0].grant.id == "strong"

    def test_ties_broken_by_deadline_then_id(self, make_company, make_grant, today):
        later = make_grant(id="b-later", deadline=today + timedelta(days=30))
        sooner = make_grant(id="c-sooner", deadline=today + timedelta(days=20))
        no_deadline = make_grant(id="a-none")
        same = make_grant(id="a-same", deadline=today + timedelta(days=20))

        ranked = rank_opportunities(make_company(), [no_deadline, later, sooner, same], today=today)
        assert [r.grant.id for r in ranked] == ["a-same", "c-sooner", "b-later", "a-none"]

    def test_empty_batch(self, software_company):
        assert rank_opportunities(software_company, []) == []

    def test_single_worker_matches_pool(self, software_company, grants, today):
        serial = rank_opportunities(software_company, grants, max_workers=1, today=today)
        pooled = rank_opportunities(software_company, grants, max_workers=4, today=today)
        assert serial == pooled

    def test_dimension_mismatch_propagates(self, make_company, make_grant, today):
        company = make_company(embedding=[0.1, 0.2, 0.3])
        batch = [
            make_grant(id="ok", criteria={}, embedding=[0.1, 0.2, 0.3]),
            make_grant(id="bad", criteria={}, embedding=[0.1, 0.2]),
        ]
        with pytest.raises(DimensionMismatchError):
            rank_opportunities(company, batch, today=today)

    def test_ineligible_grants_are_kept_with_blockers(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, today=today)
        weak = next(r for r in ranked if r.grant.id == "weak")
        assert weak.match.eligible is False
        assert weak.match.blockers


class TestRankWithSettings:
    def test_settings_drive_threshold_and_limit(self, software_company, grants, today):
        settings = MatchingSettings(min_match_score=0, max_results=2)
        ranked = rank_with_settings(software_company, grants, settings=settings, today=today)
        assert [r.grant.id for r in ranked] == ["strong", "open-to-all"]

    def test_settings_weights_file(self, software_company, grants, today, tmp_path):
        path = tmp_path / "weights.yaml"
        path.write_text("match: 1.0\nvalue: 0.0\nease: 0.0\n")
        settings = MatchingSettings(min_match_score=0, max_results=None, weights_file=str(path))

        ranked = rank_with_settings(software_company, grants, settings=settings, today=today)
        assert all(r.rating.value == r.match.score for r in ranked)


class TestSummarize:
    def test_summary(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, today=today)
        summary = summarize_opportunities(ranked, today=today)

        assert summary.total_evaluated == 3
        assert summary.recommended_grants == 2
        scores = [r.match.score for r in ranked]
        assert summary.average_match_score == round(sum(scores) / len(scores))
        assert summary.days_to_deadline == 45
        assert summary.deadline_grant_title == "Tecnologias Estratégicas"
        assert summary.next_deadline == today + timedelta(days=45)

    def test_top_n_limits_average(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, today=today)
        summary = summarize_opportunities(ranked, top_n=1, today=today)
        assert summary.average_match_score == ranked[0].match.score

    def test_custom_threshold(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, today=today)
        summary = summarize_opportunities(ranked, high_match_threshold=101, today=today)
        assert summary.recommended_grants == 0

    def test_empty(self):
        summary = summarize_opportunities([])
        assert summary.total_evaluated == 0
        assert summary.recommended_grants == 0
        assert summary.average_match_score == 0
        assert summary.days_to_deadline is None
        assert summary.deadline_grant_title is None


class TestSummarizeWithSettings:
    def test_settings_drive_threshold_and_top_n(self, software_company, grants, today):
        ranked = rank_opportunities(software_company, grants, today=today)
        settings = MatchingSettings(high_match_threshold=80, summary_top_n=2)

        summary = summarize_with_settings(ranked, settings=settings, today=today)
        # match scores in rank order: 100, 75, 41
        assert summary.recommended_grants == 1
        assert summary.average_match_score == 88
        assert summary.total_evaluated == 3
