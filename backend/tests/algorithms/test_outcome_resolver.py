"""
Tests for per-match outcome resolution.
"""

from app.algorithms.outcome_resolver import OutcomeResolver, same_id
from app.core.enums import MatchOutcome, TeamKey
from app.core.henrik_api.models import MatchRecord


class TestTeamKey:
    """Team label to teams-key mapping."""

    def test_blue_any_casing(self):
        assert OutcomeResolver.team_key("Blue") is TeamKey.BLUE
        assert OutcomeResolver.team_key("BLUE") is TeamKey.BLUE
        assert OutcomeResolver.team_key("blue") is TeamKey.BLUE

    def test_everything_else_is_red(self):
        assert OutcomeResolver.team_key("Red") is TeamKey.RED
        assert OutcomeResolver.team_key("") is TeamKey.RED
        assert OutcomeResolver.team_key("Neutral") is TeamKey.RED


class TestOutcomeFor:
    """Outcome derivation from the teams mapping."""

    def test_win_and_loss(self, make_record, make_player):
        match = make_record([make_player("a")], winner="blue")

        assert OutcomeResolver.outcome_for(match, "Blue") is MatchOutcome.WIN
        assert OutcomeResolver.outcome_for(match, "Red") is MatchOutcome.LOSS

    def test_draw_on_equal_rounds(self, make_record, make_player):
        match = make_record([make_player("a")], winner=None, rounds=(12, 12))

        assert OutcomeResolver.outcome_for(match, "Red") is MatchOutcome.DRAW

    def test_zero_zero_is_not_a_draw(self, make_record, make_player):
        match = make_record([make_player("a")], winner=None, rounds=(0, 0))

        assert OutcomeResolver.outcome_for(match, "Red") is MatchOutcome.LOSS

    def test_missing_team_is_unknown(self, make_record, make_player):
        match = make_record(
            [make_player("a")],
            teams={"blue": {"has_won": True, "rounds_won": 13, "rounds_lost": 3}},
        )

        assert OutcomeResolver.outcome_for(match, "Red") is MatchOutcome.UNKNOWN

    def test_truthy_non_bool_has_won_is_not_a_win(self, make_record, make_player):
        match = make_record(
            [make_player("a")],
            teams={"red": {"has_won": "true", "rounds_won": 13, "rounds_lost": 3}},
        )

        assert OutcomeResolver.outcome_for(match, "Red") is MatchOutcome.LOSS


class TestResolve:
    """Subject lookup and full resolution."""

    def test_subject_found_case_insensitively(self, make_record, make_player):
        match = make_record(
            [
                make_player("other", team="Red"),
                make_player("Subject-PUUID", team="Blue", kills=21),
            ],
            winner="blue",
        )

        resolved = OutcomeResolver("subject-puuid").resolve(match)

        assert resolved.subject_found
        assert resolved.team == "Blue"
        assert resolved.outcome is MatchOutcome.WIN
        assert resolved.subject_stats.kills == 21

    def test_first_matching_entry_wins(self, make_record, make_player):
        match = make_record(
            [
                make_player("dup", team="Red", kills=1),
                make_player("dup", team="Blue", kills=2),
            ]
        )

        subject = OutcomeResolver("dup").find_subject(match)

        assert subject is not None
        assert subject.stats.kills == 1

    def test_missing_subject_is_unknown(self, make_record, make_player):
        match = make_record([make_player("other")])

        resolved = OutcomeResolver("nobody").resolve(match)

        assert not resolved.subject_found
        assert resolved.team == ""
        assert resolved.outcome is MatchOutcome.UNKNOWN
        assert resolved.subject_stats.kills == 0

    def test_empty_match(self):
        resolved = OutcomeResolver("x").resolve(MatchRecord.from_payload({}))

        assert resolved.outcome is MatchOutcome.UNKNOWN


def test_same_id_ignores_case():
    assert same_id("AbC-1", "abc-1")
    assert not same_id("abc-1", "abc-2")
