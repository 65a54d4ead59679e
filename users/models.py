"""Data models for user profiles."""
from dataclasses import dataclass
from typing import Optional


@dataclass
class Profile:
    """Subset of a user profile used for age derivation."""
    birthdate: Optional[str] = None
    age: Optional[int] = None
