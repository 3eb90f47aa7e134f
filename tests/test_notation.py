import pytest

from processors.notation import ZERO_OUTCOME, innings_pitched, parse_notation


@pytest.mark.parametrize('raw', ['', '   ', '\t', None, float('nan')])
def test_blank_notation_is_zero_outcome(raw):
    assert parse_notation(raw) == ZERO_OUTCOME
    assert parse_notation(raw).batters_faced == 0
    assert parse_notation(raw).fielder_position is None


def test_grand_slam():
    out = parse_notation('HR 4RBI')
    assert out.hits_allowed == 1
    assert out.home_runs_allowed == 1
    assert out.total_bases == 4
    assert out.runs_allowed == 4
    assert out.at_bats == 1
    assert out.batters_faced == 1
    assert out.outs_recorded == 0


def test_strikeout_with_pitching_change():
    out = parse_notation('K PC2')
    assert out.strikeouts == 1
    assert out.outs_recorded == 1
    assert out.at_bats == 1
    assert out.batters_faced == 1
    assert out.is_pitcher_change
    assert out.inherited_runners == 2


@pytest.mark.parametrize('raw, runners', [('PC0', 0), ('pc3', 3), (' PC[1] ', 1)])
def test_standalone_pitching_change(raw, runners):
    out = parse_notation(raw)
    assert out.is_pitcher_change
    assert out.inherited_runners == runners
    assert out.batters_faced == 0
    assert out._replace(is_pitcher_change=False, inherited_runners=0) == ZERO_OUTCOME


def test_pitching_change_digit_out_of_range_is_not_a_change():
    out = parse_notation('PC5')
    assert not out.is_pitcher_change
    assert out.batters_faced == 1


def test_single_with_error():
    out = parse_notation('1B E6')
    assert out.hits_allowed == 1
    assert out.total_bases == 1
    assert out.is_error
    assert out.fielder_position == 6
    assert out.at_bats == 1
    assert not out.error_occurred


def test_bracketed_error_and_nice_play():
    assert parse_notation('OUT E[4]').fielder_position == 4
    out = parse_notation('out np[5]')
    assert out.is_nice_play
    assert out.fielder_position == 5
    assert out.outs_recorded == 1
    assert not out.nice_play_occurred


def test_nice_play_fielder_overwrites_error_fielder():
    out = parse_notation('OUT E4 NP6')
    assert out.is_error
    assert out.is_nice_play
    assert out.fielder_position == 6


def test_triple_play():
    out = parse_notation('TP')
    assert out.outs_recorded == 3
    assert out.double_play


def test_double_play():
    out = parse_notation('DP')
    assert out.outs_recorded == 2
    assert out.double_play
    assert out.at_bats == 1


def test_sacrifice_fly_is_not_an_at_bat():
    out = parse_notation('SF RBI')
    assert out.outs_recorded == 1
    assert out.runs_allowed == 1
    assert out.at_bats == 0
    assert out.batters_faced == 1


def test_sacrifice_hit():
    out = parse_notation('SH')
    assert out.outs_recorded == 1
    assert out.at_bats == 0


def test_walk():
    out = parse_notation('BB')
    assert out.walks_allowed == 1
    assert out.at_bats == 0
    assert out.outs_recorded == 0


def test_hits_total_bases():
    assert parse_notation('2B').total_bases == 2
    assert parse_notation('3b').total_bases == 3
    assert parse_notation('1B').total_bases == 1


def test_later_hit_check_wins_on_malformed_input():
    out = parse_notation('1B 2B')
    assert out.hits_allowed == 1
    assert out.total_bases == 2


def test_fielders_choice():
    out = parse_notation('FC')
    assert out.fielders_choice_no_out
    assert out.outs_recorded == 0
    assert out.at_bats == 1
    for raw in ('FC OUT', 'FCOUT'):
        out = parse_notation(raw)
        assert out.outs_recorded == 1
        assert not out.fielders_choice_no_out


def test_caught_stealing_adds_an_out():
    out = parse_notation('K CS')
    assert out.caught_stealing
    assert out.outs_recorded == 2
    out = parse_notation('DP CS')
    assert out.outs_recorded == 3


def test_stolen_base():
    out = parse_notation('1B SB')
    assert out.stolen_base
    assert out.hits_allowed == 1


@pytest.mark.parametrize('raw, runs', [('RBI', 1), ('2RBI', 2), ('3RBI 2B', 3),
                                       ('HR 4RBI', 4), ('1B', 0)])
def test_rbi_priority(raw, runs):
    assert parse_notation(raw).runs_allowed == runs


def test_double_play_does_not_add_to_fc_out():
    out = parse_notation('FC OUT DP')
    assert out.outs_recorded == 2


def test_unknown_notation_is_plain_at_bat():
    out = parse_notation('XYZ')
    assert out.batters_faced == 1
    assert out.at_bats == 1
    assert out.outs_recorded == 0
    assert out.hits_allowed == 0


def test_legacy_nice_play_flag():
    out = parse_notation('OUT NP')
    assert out.nice_play_occurred
    assert not out.is_nice_play
    assert out.fielder_position is None


@pytest.mark.parametrize('raw, expected', [('E', True), ('OUT E', True), ('E OUT', True),
                                           ('1B E 2', True), ('OUT', False), ('SE', False)])
def test_legacy_error_flag_only_for_isolated_token(raw, expected):
    assert parse_notation(raw).error_occurred is expected


@pytest.mark.parametrize('outs, ip', [(0, 0.0), (1, 0.33), (2, 0.67), (3, 1.0),
                                      (4, 1.33), (8, 2.67), (-2, 0.0)])
def test_innings_pitched(outs, ip):
    assert innings_pitched(outs) == ip
