# Copyright (c) 2025 LemonadeStand Contributors
# BSD-3-Clause License

"""
Tests for the game lifecycle.

Covers:
- New game defaults
- Playing a day end to end
- Insufficient funds and game over refusals (no state change)
- Forecast draws and plan reset between days
- Replaying a recorded random sequence
"""

import random

import pytest

from lemonade_stand.errors import GameOverViolation, InsufficientFunds
from lemonade_stand.game import GameState, new_game, play_day
from lemonade_stand.models import DayPlan, GameConfig, WeatherType
from lemonade_stand.planner import plan_day
from lemonade_stand.resolver import resolve
from lemonade_stand.weather import RecordingRandom, ReplayRandom


def snapshot(state: GameState) -> tuple:
    return (state.money, state.day, state.forecast, len(state.history), state.game_over, state.draft_plan)


class TestNewGame:
    """Tests for new_game()."""

    def test_defaults(self):
        state = new_game(seed=1)
        assert state.money == 5.00
        assert state.day == 1
        assert len(state.history) == 0
        assert state.game_over is False
        assert state.can_play is True
        assert state.forecast.type in set(WeatherType)

    def test_draft_plan_defaults(self):
        state = new_game(seed=1)
        assert state.draft_plan == DayPlan(ads=0, cups=0, price=1.00)

    def test_initial_forecast_uses_one_draw(self):
        rng = ReplayRandom([0.55, 0.3])
        state = new_game(rng=rng)
        assert state.forecast.type == WeatherType.WINDY
        assert rng.remaining == 1

    def test_custom_starting_money(self):
        state = new_game(config=GameConfig(starting_money=20.0), seed=1)
        assert state.money == 20.0

    def test_same_seed_same_forecast(self):
        assert new_game(seed=7).forecast == new_game(seed=7).forecast

    def test_rng_takes_precedence_over_seed(self):
        state = new_game(rng=ReplayRandom([0.0]), seed=999)
        assert state.forecast.type == WeatherType.HOT


class TestPlayDay:
    """Tests for play_day()."""

    def test_mild_scenario(self, mild_game: GameState):
        """10 cups at $1.00 on a Mild day earns $9.25."""
        outcome = play_day(mild_game, plan_day(0, 10, 1.00))
        assert outcome.day == 1
        assert outcome.forecast_type == WeatherType.MILD
        assert outcome.actual_weather_type == WeatherType.MILD
        assert outcome.sales == 10
        assert outcome.revenue == pytest.approx(10.00)
        assert outcome.cost == pytest.approx(0.75)
        assert outcome.profit == pytest.approx(9.25)
        assert outcome.money_after == pytest.approx(14.25)
        assert mild_game.money == pytest.approx(14.25)

    def test_day_advances_and_history_grows(self, mild_game: GameState):
        play_day(mild_game, plan_day(0, 10, 1.00))
        assert mild_game.day == 2
        assert len(mild_game.history) == 1
        assert mild_game.history.last.day == 1

    def test_next_forecast_drawn(self, mild_game: GameState):
        play_day(mild_game, plan_day(0, 10, 1.00))
        assert mild_game.forecast.type == WeatherType.HOT

    def test_draft_plan_reset(self, mild_game: GameState):
        mild_game.draft_plan = DayPlan(ads=4, cups=40, price=2.00)
        play_day(mild_game, plan_day(4, 40, 2.00))
        assert mild_game.draft_plan == DayPlan(ads=0, cups=0, price=1.00)

    def test_missed_forecast(self, scripted):
        state = scripted(WeatherType.SUNNY, [(WeatherType.STORMY, WeatherType.MILD)])
        outcome = play_day(state, plan_day(0, 30, 1.00))
        assert outcome.forecast_type == WeatherType.SUNNY
        assert outcome.actual_weather_type == WeatherType.STORMY
        # 8 * 0.3 = 2.4 -> 2 customers
        assert outcome.sales == 2
        assert state.forecast.type == WeatherType.MILD

    def test_money_changes_by_profit(self, seeded_game: GameState):
        for plan in (plan_day(1, 20, 1.00), plan_day(0, 5, 2.00), plan_day(2, 0, 1.00)):
            before = seeded_game.money
            outcome = play_day(seeded_game, plan)
            assert seeded_game.money == before + outcome.profit
            assert outcome.profit == outcome.revenue - outcome.cost

    def test_outcome_matches_resolver(self, scripted, catalog):
        state = scripted(WeatherType.WINDY, [(WeatherType.WINDY, WeatherType.RAINY)],
                         config=GameConfig(starting_money=20.00))
        plan = plan_day(10, 50, 1.00)
        windy = catalog.get_variant(WeatherType.WINDY)
        expected = resolve(plan, windy, windy)
        outcome = play_day(state, plan)
        assert outcome.sales == expected.sales == 24
        assert outcome.profit == expected.profit

    def test_loss_day_reduces_money(self, scripted):
        state = scripted(WeatherType.STORMY, [(WeatherType.STORMY, WeatherType.RAINY)])
        # 8 * 0.3 = 2.4 -> 2 cups sold against $4.75 spent
        outcome = play_day(state, plan_day(0, 90, 1.00))
        assert outcome.profit < 0
        assert state.money < 5.00

    def test_plan_inputs_are_clamped(self, mild_game: GameState):
        outcome = play_day(mild_game, DayPlan(ads=-3, cups=-3, price=-1.0))
        assert outcome.ads == 0
        assert outcome.cups == 0
        assert outcome.price == 0.0
        assert outcome.cost == pytest.approx(0.25)

    @pytest.mark.parametrize("price", [1e308, float("inf")])
    def test_unbounded_price_sells_nothing(self, scripted, price):
        state = scripted(WeatherType.HOT, [(WeatherType.HOT, WeatherType.HOT)])
        outcome = play_day(state, plan_day(0, 10, price))
        assert outcome.sales == 0
        assert outcome.revenue == 0
        assert outcome.profit == pytest.approx(-0.75)
        assert state.money == pytest.approx(4.25)
        assert state.day == 2
        assert state.rng.remaining == 0


class TestInsufficientFunds:
    """Unaffordable plans are refused without changing anything."""

    def test_three_signs_with_one_dollar(self, scripted):
        state = scripted(WeatherType.MILD, [(WeatherType.MILD, WeatherType.MILD)],
                         config=GameConfig(starting_money=1.00))
        rng_before = state.rng.remaining
        before = snapshot(state)

        with pytest.raises(InsufficientFunds) as exc_info:
            play_day(state, plan_day(3, 0, 1.00))

        assert exc_info.value.cost == pytest.approx(1.75)
        assert snapshot(state) == before
        assert state.money == 1.00
        assert state.rng.remaining == rng_before

    def test_can_retry_with_cheaper_plan(self, scripted):
        state = scripted(WeatherType.MILD, [(WeatherType.MILD, WeatherType.MILD)],
                         config=GameConfig(starting_money=1.00))
        with pytest.raises(InsufficientFunds):
            play_day(state, plan_day(3, 0, 1.00))
        outcome = play_day(state, plan_day(0, 10, 1.00))
        assert outcome.day == 1
        assert outcome.sales == 10

    def test_huge_sign_count_refused_without_draws(self, scripted):
        state = scripted(WeatherType.MILD, [(WeatherType.MILD, WeatherType.MILD)])
        rng_before = state.rng.remaining
        before = snapshot(state)

        with pytest.raises(InsufficientFunds):
            play_day(state, plan_day(1e308, 0, 1.00))

        assert snapshot(state) == before
        assert state.rng.remaining == rng_before

    def test_below_minimum_at_start_refused(self, scripted):
        """A free plan is still refused when the money is under the minimum."""
        config = GameConfig(starting_money=0.50, daily_overhead=0.0, min_required_money=1.00)
        state = scripted(WeatherType.MILD, [(WeatherType.MILD, WeatherType.MILD)], config=config)
        assert state.can_play is False
        rng_before = state.rng.remaining
        before = snapshot(state)

        with pytest.raises(InsufficientFunds):
            play_day(state, plan_day(0, 0, 1.00))

        assert snapshot(state) == before
        assert state.rng.remaining == rng_before


class TestAtomicApply:
    """A day is applied completely or not at all."""

    def test_exhausted_source_leaves_state_unchanged(self):
        # Initial Mild forecast and a forecast hit, but no value left for
        # the next forecast
        state = new_game(rng=ReplayRandom([0.4, 0.1]))
        before = snapshot(state)

        with pytest.raises(IndexError):
            play_day(state, plan_day(0, 10, 1.00))

        assert snapshot(state) == before
        assert state.money == 5.00
        assert state.day == 1
        assert len(state.history) == 0
        assert state.forecast.type == WeatherType.MILD

    def test_draw_order_unchanged(self, mild_game: GameState):
        """The next forecast is still the last draw of the day."""
        play_day(mild_game, plan_day(0, 10, 1.00))
        assert mild_game.forecast.type == WeatherType.HOT
        assert mild_game.rng.remaining == 0


class TestGameOver:
    """Tests for the game-over transition."""

    def broke_game(self, scripted) -> GameState:
        state = scripted(WeatherType.MILD, [(WeatherType.MILD, WeatherType.SUNNY)])
        # $0.25 overhead + 9 signs + 5 cups = $5.00, sold for nothing
        play_day(state, plan_day(9, 5, 0.0))
        return state

    def test_going_broke_ends_game_on_same_day(self, scripted):
        state = self.broke_game(scripted)
        assert state.money == pytest.approx(0.0)
        assert state.game_over is True
        assert state.can_play is False
        assert state.day == 2
        assert len(state.history) == 1

    def test_play_after_game_over_refused(self, scripted):
        state = self.broke_game(scripted)
        before = snapshot(state)
        with pytest.raises(GameOverViolation):
            play_day(state, plan_day(0, 0, 1.00))
        assert snapshot(state) == before

    def test_apply_after_game_over_refused(self, scripted, mild):
        state = self.broke_game(scripted)
        before = snapshot(state)
        result = resolve(plan_day(0, 10, 1.00), mild, mild)
        with pytest.raises(GameOverViolation):
            state.apply(result, plan_day(0, 10, 1.00), mild)
        assert snapshot(state) == before

    def test_game_over_is_permanent(self, scripted):
        state = self.broke_game(scripted)
        for _ in range(3):
            with pytest.raises(GameOverViolation):
                play_day(state, plan_day(0, 0, 1.00))
        assert state.game_over is True
        assert len(state.history) == state.day - 1

    def test_staying_at_minimum_keeps_playing(self, scripted):
        """Ending exactly at the minimum is still enough to play."""
        config = GameConfig(starting_money=1.00, min_required_money=0.25)
        state = scripted(WeatherType.MILD, [(WeatherType.MILD, WeatherType.MILD)], config=config)
        # $0.25 + $0.50 = $0.75, nothing sold
        play_day(state, plan_day(1, 0, 1.00))
        assert state.money == pytest.approx(0.25)
        assert state.game_over is False
        assert state.can_play is True

    def test_custom_minimum(self, scripted):
        config = GameConfig(min_required_money=2.00)
        state = scripted(WeatherType.MILD, [(WeatherType.MILD, WeatherType.MILD)], config=config)
        # $0.25 + $3.00 = $3.25 spent, nothing sold -> $1.75 left
        play_day(state, plan_day(6, 0, 1.00))
        assert state.game_over is True


class TestHistoryInvariant:
    """History length always tracks the day counter."""

    def test_history_length_matches_day(self):
        state = new_game(seed=11)
        assert len(state.history) == state.day - 1
        for _ in range(10):
            if not state.can_play:
                break
            play_day(state, plan_day(0, 10, 1.00))
            assert len(state.history) == state.day - 1

    def test_recent_history_window(self):
        state = new_game(seed=11)
        for _ in range(7):
            play_day(state, plan_day(0, 10, 1.00))
        recent = state.recent_history()
        assert [o.day for o in recent] == [7, 6, 5, 4, 3]
        assert len(state.history) == 7

    def test_snapshot(self, mild_game: GameState):
        play_day(mild_game, plan_day(0, 10, 1.00))
        snap = mild_game.snapshot()
        assert snap["day"] == 2
        assert snap["money"] == 14.25
        assert snap["forecast"] == "Hot"
        assert snap["game_over"] is False
        assert len(snap["recent_history"]) == 1


class TestReplay:
    """A recorded random sequence reproduces the same game."""

    PLANS = [
        plan_day(0, 10, 1.00),
        plan_day(2, 30, 1.50),
        plan_day(1, 15, 0.75),
        plan_day(0, 20, 2.00),
        plan_day(3, 25, 1.00),
    ]

    def play(self, state: GameState):
        return [play_day(state, plan) for plan in self.PLANS]

    def test_recorded_draws_replay_identically(self):
        recorder = RecordingRandom(random.Random(2024))
        original = self.play(new_game(rng=recorder))

        replayed = self.play(new_game(rng=recorder.replay()))
        assert replayed == original

    def test_same_seed_same_game(self):
        assert self.play(new_game(seed=5)) == self.play(new_game(seed=5))

    def test_draws_per_day(self):
        """One forecast draw at start; per day one accuracy draw (+1 on a miss) and one forecast draw."""
        recorder = RecordingRandom(random.Random(77))
        state = new_game(rng=recorder)
        assert len(recorder.values) == 1

        for plan in self.PLANS:
            before = len(recorder.values)
            outcome = play_day(state, plan)
            used = len(recorder.values) - before
            accuracy_draw = recorder.values[before]
            if accuracy_draw < state.config.forecast_accuracy:
                assert used == 2
                assert outcome.actual_weather_type == outcome.forecast_type
            else:
                assert used == 3
