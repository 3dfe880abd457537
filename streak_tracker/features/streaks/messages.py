from __future__ import annotations

from streak_tracker.models.streak import StreakTier

ALREADY_CHECKED_IN_MESSAGE = "Already checked in today! Come back tomorrow to continue your streak."


def tier_for(current_streak: int) -> StreakTier:
    """Encouragement band for a streak length (lower bound inclusive)."""
    if current_streak >= 100:
        return "legendary"
    if current_streak >= 30:
        return "excellent"
    if current_streak >= 7:
        return "strong"
    if current_streak >= 2:
        return "building"
    return "start"


def tier_message(current_streak: int) -> str:
    tier = tier_for(current_streak)
    if tier == "start":
        return "Great start! You've begun your streak journey! 🌱"
    if tier == "building":
        return f"Awesome! You're on a {current_streak}-day streak! Keep it up! 🔥"
    if tier == "strong":
        return f"Amazing! {current_streak} days strong! You're on fire! ⚡"
    if tier == "excellent":
        return f"Incredible! {current_streak}-day streak! You're unstoppable! 🚀"
    return f"LEGENDARY! {current_streak} days! You're a streak master! 👑"
