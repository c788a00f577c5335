from termjack.blackjack.rules import natural_settlement, standard_settlement
from termjack.blackjack.stats import PlayerProfile


def test_default_profile():
    profile = PlayerProfile()
    assert profile.chips == 1000
    assert profile.games_played == 0
    assert profile.is_consistent
    assert profile.win_rate == 0.0


def test_record_win():
    profile = PlayerProfile(chips=500)
    profile.record(standard_settlement(20, 24, 100))
    assert profile.chips == 600
    assert profile.games_played == 1
    assert profile.games_won == 1


def test_record_blackjack_counts_as_win():
    profile = PlayerProfile(chips=500)
    profile.record(natural_settlement(21, 20, 100))
    assert profile.chips == 650
    assert profile.games_won == 1
    assert profile.games_lost == 0


def test_record_loss_and_tie():
    profile = PlayerProfile(chips=500)
    profile.record(standard_settlement(24, 17, 100))
    profile.record(standard_settlement(18, 18, 100))
    assert profile.chips == 400
    assert profile.games_lost == 1
    assert profile.games_tied == 1
    assert profile.games_played == 2


def test_counters_stay_consistent():
    profile = PlayerProfile()
    settlements = [
        standard_settlement(20, 24, 50),
        standard_settlement(24, 10, 50),
        standard_settlement(18, 18, 50),
        natural_settlement(21, 21, 50),
        natural_settlement(12, 21, 50),
        natural_settlement(21, 9, 50),
    ]
    for settlement in settlements:
        assert profile.is_consistent
        profile.record(settlement)
        assert profile.is_consistent
    assert profile.games_played == 6
    assert profile.win_rate == 2 / 6


def test_round_trip_uses_stored_keys():
    profile = PlayerProfile(chips=725, games_played=4, games_won=2, games_lost=1, games_tied=1)
    data = profile.to_dict()
    assert data == {
        "chips": 725,
        "gamesPlayed": 4,
        "gamesWon": 2,
        "gamesLost": 1,
        "gamesTied": 1,
    }
    assert PlayerProfile.from_dict(data) == profile


def test_from_dict_defaults():
    profile = PlayerProfile.from_dict({"chips": 300})
    assert profile.chips == 300
    assert profile.games_played == 0


def test_report():
    profile = PlayerProfile(games_played=4, games_won=1, games_lost=2, games_tied=1)
    assert profile.report() == {
        "games_played": 4,
        "games_won": 1,
        "games_lost": 2,
        "games_tied": 1,
        "win_rate": 0.25,
    }
