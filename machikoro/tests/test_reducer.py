"""
Tests for the reducer (state transitions).

Tests:
- Roll phase: dice counts, Radio Tower reroll, Harbor, auto-commit
- Sub-phases: TV, Office trade, skip
- Buy phase and end of turn
- Rejections: wrong phase, illegal move, game over, turn, debug
- Atomicity of rejected moves
"""

import pytest

from ..engine_core.action import Action, ActionType, ErrorCode
from ..engine_core.events import EventType
from ..engine_core.random_service import FixedDice
from ..engine_core.reducer import ACTION_PHASES, Reducer, apply_action
from ..engine_core.state import GamePhase, TurnPhase
from ..rules import InvariantError, SetupConfig, UnknownCardError, Version
from ..rules.establishments import (
    CAFE,
    OFFICE,
    OFFICE2,
    STADIUM,
    TV_STATION,
    WHEAT_FIELD,
)
from ..rules.landmarks import (
    AIRPORT,
    AMUSEMENT_PARK,
    FARMERS_MARKET2,
    FORGE2,
    HARBOR,
    LAUNCH_PAD2,
    RADIO_TOWER,
    TECH_STARTUP2,
    TRAIN_STATION,
)
from .conftest import clear_holdings, give, play


# One sample of every move, for the rejection matrix
SAMPLE_ACTIONS = {
    ActionType.ROLL_ONE: Action.roll_one(),
    ActionType.ROLL_TWO: Action.roll_two(),
    ActionType.KEEP_ROLL: Action.keep_roll(),
    ActionType.ADD_TWO: Action.add_two(),
    ActionType.DEBUG_ROLL: Action.debug_roll(3),
    ActionType.BUY_ESTABLISHMENT: Action.buy_establishment(WHEAT_FIELD.id),
    ActionType.BUY_LANDMARK: Action.buy_landmark(TRAIN_STATION.id),
    ActionType.RESOLVE_TV: Action.resolve_tv(1),
    ActionType.RESOLVE_OFFICE_PHASE1: Action.resolve_office_phase1(WHEAT_FIELD.id),
    ActionType.RESOLVE_OFFICE_PHASE2: Action.resolve_office_phase2(1, WHEAT_FIELD.id),
    ActionType.SKIP_OFFICE: Action.skip_office(),
    ActionType.END_TURN: Action.end_turn(),
}


def build(state, player, *landmarks):
    for land in landmarks:
        state.land_data.owned[player][land.id] = True


class TestRollPhase:
    """Tests for rolling dice."""

    def test_single_die_commits_and_buys(self, new_game):
        state, reducer = new_game(dice=[4])
        clear_holdings(state)
        state, events = play(reducer, state, Action.roll_one())
        assert state.roll == 4
        assert state.num_rolls == 1
        assert state.phase == TurnPhase.BUY
        assert [e.event_type for e in events] == [EventType.ROLL_ONE]

    def test_two_dice_need_train_station(self, mk1_game):
        state, reducer = mk1_game
        result = reducer.apply(state, Action.roll_two())
        assert not result.success
        assert result.error_code == ErrorCode.INVALID_ACTION

    def test_two_dice_with_train_station(self, new_game):
        state, reducer = new_game(dice=[3, 5])
        clear_holdings(state)
        build(state, 0, TRAIN_STATION)
        state, events = play(reducer, state, Action.roll_two())
        assert state.roll == 8
        assert state.flags.dice == (3, 5)
        assert events[0].dice == (3, 5)
        assert state.phase == TurnPhase.BUY

    def test_radio_tower_reroll(self, new_game):
        """With Radio Tower the first roll waits for keep or reroll."""
        state, reducer = new_game(dice=[2, 5])
        clear_holdings(state)
        build(state, 0, RADIO_TOWER)
        state, _ = play(reducer, state, Action.roll_one())
        assert state.phase == TurnPhase.ROLL
        assert state.roll == 2

        state, _ = play(reducer, state, Action.roll_one())
        assert state.roll == 5
        assert state.num_rolls == 2
        assert state.phase == TurnPhase.BUY

    def test_radio_tower_keep(self, new_game):
        state, reducer = new_game(dice=[2])
        clear_holdings(state)
        build(state, 0, RADIO_TOWER)
        state, _ = play(reducer, state, Action.roll_one(), Action.keep_roll())
        assert state.roll == 2
        assert state.phase == TurnPhase.BUY

    def test_keep_before_rolling_rejected(self, mk1_game):
        state, reducer = mk1_game
        result = reducer.apply(state, Action.keep_roll())
        assert result.error_code == ErrorCode.INVALID_ACTION

    def test_harbor_add_two(self, new_game, harbor_config):
        state, reducer = new_game(harbor_config, dice=[5, 5])
        clear_holdings(state)
        build(state, 0, TRAIN_STATION, HARBOR)
        state, _ = play(reducer, state, Action.roll_two())
        assert state.phase == TurnPhase.ROLL

        state, events = play(reducer, state, Action.add_two())
        assert state.roll == 12
        assert events[0].event_type == EventType.ROLL_MODIFIED
        assert events[0].roll == 12
        assert state.phase == TurnPhase.BUY

    def test_harbor_below_ten_commits(self, new_game, harbor_config):
        state, reducer = new_game(harbor_config, dice=[4, 5])
        clear_holdings(state)
        build(state, 0, TRAIN_STATION, HARBOR)
        state, _ = play(reducer, state, Action.roll_two())
        assert state.phase == TurnPhase.BUY
        assert state.roll == 9

    def test_mk2_two_dice_always_allowed(self, new_game, mk2_config):
        state, reducer = new_game(mk2_config, dice=[1, 3])
        state, _ = play(reducer, state, Action.roll_two())
        assert state.roll == 4
        assert state.phase == TurnPhase.BUY

    @pytest.mark.parametrize("roll", [0, -2, True, None])
    def test_debug_roll_needs_positive_int(self, mk1_game, roll):
        state, reducer = mk1_game
        result = reducer.apply(state, Action.debug_roll(roll))
        assert result.error_code == ErrorCode.INVALID_ACTION

    def test_debug_roll_is_never_doubles(self, mk1_game):
        state, reducer = mk1_game
        build(state, 0, AMUSEMENT_PARK)
        state, events = play(reducer, state, Action.debug_roll(4))
        assert events[0].event_type == EventType.ROLL_ONE
        assert state.flags.dice == ()
        assert not state.flags.second_turn


class TestSubPhases:
    """Tests for TV Station and Office."""

    def test_tv_station(self, mk1_game):
        state, reducer = mk1_game
        give(state, 0, TV_STATION)
        state, _ = play(reducer, state, Action.debug_roll(6))
        assert state.phase == TurnPhase.TV

        assert reducer.apply(state, Action.resolve_tv(0)).error_code == ErrorCode.INVALID_ACTION
        assert reducer.apply(state, Action.resolve_tv(5)).error_code == ErrorCode.INVALID_ACTION

        state, events = play(reducer, state, Action.resolve_tv(1))
        assert state.money == [6, 0]
        assert events[0].name == "TV Station"
        assert state.phase == TurnPhase.BUY

    def test_office_trade(self, mk1_game):
        state, reducer = mk1_game
        give(state, 0, OFFICE)
        give(state, 0, WHEAT_FIELD)
        give(state, 1, CAFE)
        state, _ = play(reducer, state, Action.debug_roll(6))
        assert state.phase == TurnPhase.OFFICE_PHASE1

        # no Purple trades in version 1, and no skipping
        assert not reducer.apply(state, Action.resolve_office_phase1(OFFICE.id)).success
        assert not reducer.apply(state, Action.skip_office()).success

        state, _ = play(reducer, state, Action.resolve_office_phase1(WHEAT_FIELD.id))
        assert state.phase == TurnPhase.OFFICE_PHASE2
        assert state.flags.office_give_est == WHEAT_FIELD.id

        assert not reducer.apply(state, Action.resolve_office_phase2(1, WHEAT_FIELD.id)).success
        state, events = play(reducer, state, Action.resolve_office_phase2(1, CAFE.id))
        assert events[0].event_type == EventType.OFFICE_TRADE
        assert (events[0].player_est, events[0].opponent_est) == ("Wheat Field", "Cafe")
        assert state.est_data.owned[0][CAFE.id] == 1
        assert state.est_data.owned[1][WHEAT_FIELD.id] == 1
        assert state.est_data.owned[0][WHEAT_FIELD.id] == 0
        assert state.phase == TurnPhase.BUY

    def test_tv_before_office(self, mk1_game):
        state, reducer = mk1_game
        for est in (STADIUM, TV_STATION, OFFICE, WHEAT_FIELD):
            give(state, 0, est)
        give(state, 1, CAFE)
        state, events = play(reducer, state, Action.debug_roll(6))
        assert state.phase == TurnPhase.TV
        assert [e.name for e in events if e.event_type == EventType.TAKE] == ["Stadium"]

        state, _ = play(reducer, state, Action.resolve_tv(1))
        assert state.phase == TurnPhase.OFFICE_PHASE1

    def test_mk2_skip_office(self, mk2_game):
        state, reducer = mk2_game
        give(state, 0, OFFICE2, 2)
        state, _ = play(reducer, state, Action.debug_roll(6))
        assert state.phase == TurnPhase.OFFICE_PHASE1
        assert state.flags.do_office == 1

        state, _ = play(reducer, state, Action.skip_office())
        assert state.phase == TurnPhase.BUY
        assert state.flags.do_office == 0

    def test_mk2_purple_trade_allowed(self, mk2_game):
        state, reducer = mk2_game
        give(state, 0, OFFICE2)
        give(state, 1, OFFICE2)
        state, _ = play(
            reducer, state,
            Action.debug_roll(6),
            Action.resolve_office_phase1(OFFICE2.id),
            Action.resolve_office_phase2(1, OFFICE2.id),
        )
        assert state.phase == TurnPhase.BUY

    def test_office_without_staged_card_is_fatal(self, mk1_game):
        state, reducer = mk1_game
        give(state, 0, WHEAT_FIELD)
        give(state, 1, CAFE)
        state.phase = TurnPhase.OFFICE_PHASE2
        with pytest.raises(InvariantError):
            reducer.apply(state, Action.resolve_office_phase2(1, CAFE.id))


class TestBuyAndEndTurn:
    """Tests for purchases and turn hand-off."""

    def test_buy_establishment(self, mk1_game):
        state, reducer = mk1_game
        state, events = play(reducer, state, Action.debug_roll(1), Action.buy_establishment(CAFE.id))
        assert state.phase == TurnPhase.END
        assert state.flags.just_bought_est == CAFE.id
        assert events[-1].event_type == EventType.BUY

        result = reducer.apply(state, Action.buy_establishment(WHEAT_FIELD.id))
        assert result.error_code == ErrorCode.WRONG_PHASE

    def test_unaffordable(self, mk1_game):
        state, reducer = mk1_game
        state, _ = play(reducer, state, Action.debug_roll(1))
        result = reducer.apply(state, Action.buy_landmark(TRAIN_STATION.id))
        assert result.error_code == ErrorCode.INVALID_ACTION

    def test_buy_landmark(self, mk1_game):
        state, reducer = mk1_game
        state.money[0] = 4
        state, _ = play(reducer, state, Action.debug_roll(1), Action.buy_landmark(TRAIN_STATION.id))
        assert state.money[0] == 0
        assert state.land_data.owned[0][TRAIN_STATION.id]
        assert state.flags.just_bought_land == TRAIN_STATION.id

    def test_unknown_card_is_fatal(self, mk1_game):
        state, reducer = mk1_game
        state, _ = play(reducer, state, Action.debug_roll(1))
        with pytest.raises(UnknownCardError):
            reducer.apply(state, Action.buy_establishment(99))
        with pytest.raises(UnknownCardError):
            reducer.apply(state, Action.buy_landmark(99))

    def test_end_turn_passes_to_next_player(self, mk1_game):
        state, reducer = mk1_game
        state, _ = play(reducer, state, Action.debug_roll(1), Action.end_turn())
        assert state.current_player == 1
        assert state.turn_number == 2
        assert state.phase == TurnPhase.ROLL
        assert state.roll is None
        assert state.num_rolls == 0

    def test_turn_order_wraps(self, mk1_game):
        state, reducer = mk1_game
        for _ in range(2):
            state, _ = play(reducer, state, Action.debug_roll(1), Action.end_turn())
        assert state.current_player == 0
        assert state.turn_number == 3

    def test_amusement_park_second_turn(self, new_game):
        state, reducer = new_game(dice=[2, 2])
        clear_holdings(state)
        build(state, 0, TRAIN_STATION, AMUSEMENT_PARK)
        state, _ = play(reducer, state, Action.roll_two())
        assert state.flags.second_turn

        state, _ = play(reducer, state, Action.end_turn())
        assert state.current_player == 0
        assert not state.flags.second_turn
        assert state.turn_number == 2

    def test_airport_only_without_building(self, harbor_game):
        state, reducer = harbor_game
        build(state, 0, AIRPORT)
        build(state, 1, AIRPORT)
        state, events = play(reducer, state, Action.debug_roll(3), Action.end_turn())
        assert [e.name for e in events if e.event_type == EventType.EARN] == ["Airport"]
        assert state.money[0] == 13

        state, events = play(
            reducer, state, Action.debug_roll(3), Action.buy_establishment(WHEAT_FIELD.id), Action.end_turn()
        )
        assert not [e for e in events if e.event_type == EventType.EARN]
        assert state.money[1] == 2

    def test_mk2_third_landmark_wins(self, mk2_game):
        state, reducer = mk2_game
        build(state, 0, FARMERS_MARKET2, FORGE2)
        state.money[0] = 22
        state, events = play(reducer, state, Action.debug_roll(1), Action.buy_landmark(TECH_STARTUP2.id))
        assert state.is_game_over
        assert state.winner == 0
        assert events[-1].event_type == EventType.END_GAME

    def test_mk2_launch_pad_wins(self, mk2_game):
        state, reducer = mk2_game
        state.money[0] = 45
        state, _ = play(reducer, state, Action.debug_roll(1), Action.buy_landmark(LAUNCH_PAD2.id))
        assert state.game_phase == GamePhase.GAME_OVER
        assert state.winner == 0


class TestRejections:
    """Rejected moves change nothing."""

    @pytest.mark.parametrize("phase", list(TurnPhase))
    def test_wrong_phase_matrix(self, mk1_game, phase):
        """Every move outside its phases is rejected with WRONG_PHASE."""
        state, reducer = mk1_game
        state.phase = phase
        snapshot = state.clone()
        for action_type, action in SAMPLE_ACTIONS.items():
            if phase in ACTION_PHASES[action_type]:
                continue
            result = reducer.apply(state, action)
            assert not result.success
            assert result.error_code == ErrorCode.WRONG_PHASE
            assert result.events == []
            assert result.new_state is None
        assert state == snapshot

    def test_every_move_has_a_phase(self):
        assert set(ACTION_PHASES) == set(ActionType)

    def test_game_over(self, mk1_game):
        state, reducer = mk1_game
        state.game_phase = GamePhase.GAME_OVER
        for action in SAMPLE_ACTIONS.values():
            assert reducer.apply(state, action).error_code == ErrorCode.GAME_OVER

    def test_not_your_turn(self, mk1_game):
        state, reducer = mk1_game
        result = reducer.apply(state, Action.roll_one(), player=1)
        assert result.error_code == ErrorCode.NOT_YOUR_TURN
        assert reducer.apply(state, Action.debug_roll(1), player=0).success

    def test_debug_disabled(self, mk1_game):
        state, reducer = mk1_game
        strict = Reducer(random=reducer.random)
        result = strict.apply(state, Action.debug_roll(3))
        assert result.error_code == ErrorCode.DEBUG_DISABLED

    def test_rejection_consumes_no_randomness(self, mk1_game):
        state, reducer = mk1_game
        before = reducer.random.getstate()
        snapshot = state.clone()
        assert not reducer.apply(state, Action.roll_two()).success
        assert reducer.random.getstate() == before
        assert state == snapshot

    def test_success_leaves_input_untouched(self, mk1_game):
        state, reducer = mk1_game
        snapshot = state.clone()
        result = reducer.apply(state, Action.roll_one())
        assert result.success
        assert state == snapshot
        assert result.new_state is not state


class TestApplyAction:
    """Tests for the module-level helper."""

    def test_apply_action(self, mk1_game):
        state, _ = mk1_game
        result = apply_action(state, Action.roll_one(), FixedDice([2]))
        assert result.success
        assert result.new_state.roll == 2

    def test_apply_action_debug_off_by_default(self, mk1_game):
        state, _ = mk1_game
        result = apply_action(state, Action.debug_roll(2), FixedDice([]))
        assert result.error_code == ErrorCode.DEBUG_DISABLED

    def test_version_of_config(self, new_game):
        state, _ = new_game(SetupConfig(version=Version.MK2))
        assert state.version == Version.MK2
