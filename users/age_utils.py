"""Age calculation from profile birthdates."""
from datetime import date, datetime
from typing import Optional

from users.models import Profile


def calculate_age(birthdate: str, today: Optional[date] = None) -> int:
    """
    Calculate age in whole years from a birthdate.

    Args:
        birthdate: Date string in YYYY-MM-DD format
        today: Reference date (default: current local date)

    Returns:
        Age in years as of the reference date

    Raises:
        ValueError: If birthdate is not a valid YYYY-MM-DD date
    """
    if today is None:
        today = date.today()

    birth = datetime.strptime(birthdate, '%Y-%m-%d').date()

    age = today.year - birth.year

    # Birthday hasn't occurred yet this year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1

    return age


def get_age(profile: Profile, today: Optional[date] = None) -> Optional[int]:
    """
    Get age from a profile, preferring the birthdate over the stored age.

    Args:
        profile: User profile
        today: Reference date passed through to calculate_age

    Returns:
        Current age, or None if the profile has neither field
    """
    if profile.birthdate:
        return calculate_age(profile.birthdate, today=today)
    return profile.age
