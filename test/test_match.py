import numpy as np
import pytest

from helpers import ScriptedRandom
from ipd_sim.errors import InvalidParameterError
from ipd_sim.payoff import PAYOFF_MATRIX, VALID_ROUND_TOTALS, get_payoff
from ipd_sim.strategies import (
    Move, AlwaysCooperate, AlwaysDefect, Random, TitForTat, Joss, Detective, DetectiveMode
)
from ipd_sim.tournament import MatchResult, play_match

C, D = Move.COOPERATE, Move.DEFECT


class TestPayoff:

    def test_payoff_table(self):
        assert get_payoff(C, C) == (3, 3)
        assert get_payoff(C, D) == (0, 5)
        assert get_payoff(D, C) == (5, 0)
        assert get_payoff(D, D) == (1, 1)

    def test_letters_are_accepted(self):
        assert get_payoff('D', 'C') == (5, 0)

    def test_round_totals(self):
        assert VALID_ROUND_TOTALS == {6, 5, 2}
        assert len(PAYOFF_MATRIX) == 4


class TestPlayMatch:

    def test_tit_for_tat_vs_always_defect(self):
        result = play_match(TitForTat(), AlwaysDefect(), 50)

        first = result.rounds[0]
        assert (first.move_a, first.move_b) == (C, D)
        assert (first.score_a, first.score_b) == (0, 5)
        for record in result.rounds[1:]:
            assert (record.move_a, record.move_b) == (D, D)
            assert (record.score_a, record.score_b) == (1, 1)
        assert (result.score_a, result.score_b) == (49, 54)

    @pytest.mark.parametrize("rounds", [1, 7, 200])
    def test_mutual_cooperation(self, rounds):
        result = play_match(AlwaysCooperate(), AlwaysCooperate(), rounds)
        assert (result.score_a, result.score_b) == (3 * rounds, 3 * rounds)

    def test_detective_vs_always_cooperate(self):
        result = play_match(Detective(), AlwaysCooperate(), 10)
        assert result.strategy_a_moves == [C, D, C, C, D, D, D, D, D, D]
        assert result.strategy_b_moves == [C] * 10
        assert (result.score_a, result.score_b) == (44, 9)

    def test_zero_rounds(self):
        result = play_match(TitForTat(), AlwaysDefect(), 0)
        assert result.rounds == ()
        assert (result.score_a, result.score_b) == (0, 0)
        assert result.rounds_played == 0
        assert result.cooperation_rate("a") == 0.0

    def test_numpy_integer_round_count(self):
        result = play_match(AlwaysCooperate(), AlwaysDefect(), np.int64(5))
        assert result.rounds_played == 5
        assert (result.score_a, result.score_b) == (0, 25)

    @pytest.mark.parametrize("rounds", [-1, 2.5, "10", True])
    def test_invalid_round_counts(self, rounds):
        with pytest.raises(InvalidParameterError):
            play_match(TitForTat(), AlwaysDefect(), rounds)

    @pytest.mark.parametrize("rounds", [0, 1, 5, 33])
    def test_round_invariants(self, rounds):
        rng = ScriptedRandom([0.2, 0.6, 0.05, 0.95, 0.4] * 20)
        result = play_match(Random(rng=rng), Joss(rng=rng), rounds)

        assert len(result.rounds) == rounds
        assert [r.round_number for r in result.rounds] == list(range(1, rounds + 1))
        for record in result.rounds:
            assert record.score_a + record.score_b in VALID_ROUND_TOTALS
        assert result.score_a == sum(r.score_a for r in result.rounds)
        assert result.score_b == sum(r.score_b for r in result.rounds)

    def test_names_and_serialization(self):
        result = play_match(TitForTat(), AlwaysDefect(), 2)
        assert result.strategy_a == "Tit For Tat"
        assert result.strategy_b == "Always Defect"
        assert result.to_dict() == {
            'strategy_a': "Tit For Tat",
            'strategy_b': "Always Defect",
            'moves': [('C', 'D'), ('D', 'D')],
            'scores': (1, 6),
            'rounds': 2,
        }

    def test_result_is_immutable(self):
        result = play_match(TitForTat(), AlwaysDefect(), 3)
        assert isinstance(result, MatchResult)
        with pytest.raises(AttributeError):
            result.score_a = 100

    def test_cooperation_rate(self):
        result = play_match(TitForTat(), AlwaysDefect(), 4)
        assert result.cooperation_rate("a") == 0.25
        assert result.cooperation_rate("b") == 0.0
        with pytest.raises(ValueError):
            result.cooperation_rate("c")


class TestStateBetweenMatches:

    def test_detective_is_reset_before_each_match(self):
        detective = Detective()
        play_match(detective, AlwaysCooperate(), 10)
        assert detective.mode is DetectiveMode.ALWAYS_DEFECT

        reused = play_match(detective, TitForTat(), 10)
        fresh = play_match(Detective(), TitForTat(), 10)
        assert reused.strategy_a_moves == fresh.strategy_a_moves
        assert reused.strategy_a_moves[4] == C

    def test_reset_matches_fresh_instance_with_same_draws(self):
        detective = Detective()
        play_match(detective, Random(rng=ScriptedRandom([0.9])), 12)

        reused = play_match(detective, Random(rng=ScriptedRandom([0.1, 0.9, 0.1])), 12)
        fresh = play_match(Detective(), Random(rng=ScriptedRandom([0.1, 0.9, 0.1])), 12)
        assert reused == fresh

    def test_self_play_gives_each_seat_its_own_state(self):
        detective = Detective()
        result = play_match(detective, detective, 10)
        assert result.strategy_a_moves == result.strategy_b_moves
        assert result.strategy_a_moves[:4] == [C, D, C, C]
        # Each seat saw the other defect in round 2, so both settle on Tit-for-Tat
        assert result.strategy_a_moves[4:] == [C] * 6
        assert (result.score_a, result.score_b) == (28, 28)

    def test_histories_are_read_only_snapshots(self):
        seen = []

        class Recorder(AlwaysCooperate):
            def make_move(self, own_history, opponent_history):
                seen.append((own_history, opponent_history))
                return C

        result = play_match(Recorder(), AlwaysDefect(), 3)
        assert result.strategy_a_moves == [C, C, C]
        # Snapshots handed out earlier keep the length of their round
        assert [len(own) for own, _ in seen] == [0, 1, 2]
        assert seen[2] == ((C, C), (D, D))
        assert all(isinstance(own, tuple) and isinstance(opp, tuple) for own, opp in seen)
