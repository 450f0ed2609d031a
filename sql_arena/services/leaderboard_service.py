from typing import List

from sql_arena.schemas.leaderboard import LeaderboardEntry
from sql_arena.schemas.profile import UserProfile

RISING_STAR_THRESHOLD = 1000
DEFAULT_PLAYER_NAME = "You"

MOCK_LEADERBOARD: List[LeaderboardEntry] = [
    LeaderboardEntry(name="Alice_DBA", score=2500, rank=1, badges=["Query God"]),
    LeaderboardEntry(name="Bob_Builder", score=2100, rank=2, badges=["Join Master"]),
    LeaderboardEntry(name="Charlie_SQL", score=1850, rank=3, badges=[]),
    LeaderboardEntry(name="Data_Diana", score=1600, rank=4, badges=["Window Wizard"]),
    LeaderboardEntry(name="Index_Ian", score=1200, rank=5, badges=[]),
]


def build_leaderboard(profile: UserProfile) -> List[LeaderboardEntry]:
    """Merge the learner into the benchmark table and rank by score, highest first."""
    current = LeaderboardEntry(
        name=profile.name or DEFAULT_PLAYER_NAME,
        score=profile.current_score,
        badges=["Rising Star"] if profile.current_score > RISING_STAR_THRESHOLD else [],
        is_current_user=True,
    )
    entries = sorted([*MOCK_LEADERBOARD, current], key=lambda entry: entry.score, reverse=True)
    return [entry.model_copy(update={"rank": index + 1}) for index, entry in enumerate(entries)]
