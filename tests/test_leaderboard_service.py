from sql_arena.schemas.profile import UserProfile
from sql_arena.services.leaderboard_service import MOCK_LEADERBOARD, build_leaderboard


def test_current_user_is_ranked_by_score():
    entries = build_leaderboard(UserProfile(name="grace", current_score=1700))
    assert [entry.score for entry in entries] == [2500, 2100, 1850, 1700, 1600, 1200]
    assert [entry.rank for entry in entries] == [1, 2, 3, 4, 5, 6]
    me = next(entry for entry in entries if entry.is_current_user)
    assert me.name == "grace"
    assert me.rank == 4
    assert me.badges == ["Rising Star"]


def test_blank_name_and_low_score():
    entries = build_leaderboard(UserProfile(current_score=0))
    me = entries[-1]
    assert me.name == "You"
    assert me.rank == 6
    assert me.badges == []


def test_mock_entries_are_not_mutated():
    build_leaderboard(UserProfile(name="grace", current_score=9999))
    assert [entry.rank for entry in MOCK_LEADERBOARD] == [1, 2, 3, 4, 5]
