"""Unit tests for age utilities."""
from datetime import date

import pytest

from users.age_utils import calculate_age, get_age
from users.models import Profile


REFERENCE_DATE = date(2024, 6, 15)


class TestCalculateAge:
    """Test cases for calculate_age."""

    @pytest.mark.parametrize('birthdate, expected', [
        ('2000-01-01', 24),
        ('2000-06-14', 24),
        ('1990-03-31', 34),
    ])
    def test_birthday_already_passed(self, birthdate, expected):
        """Test age when the birthday has passed this year."""
        assert calculate_age(birthdate, today=REFERENCE_DATE) == expected

    @pytest.mark.parametrize('birthdate, expected', [
        ('2000-06-16', 23),
        ('2000-07-01', 23),
        ('1990-12-31', 33),
    ])
    def test_birthday_not_yet_reached(self, birthdate, expected):
        """Test age when the birthday is still ahead this year."""
        assert calculate_age(birthdate, today=REFERENCE_DATE) == expected

    def test_birthday_today(self):
        """Test that the birthday itself counts as reached."""
        assert calculate_age('2000-06-15', today=REFERENCE_DATE) == 24

    def test_same_month_earlier_day(self):
        """Test the day comparison within the birth month."""
        assert calculate_age('2000-06-20', today=date(2024, 6, 19)) == 23
        assert calculate_age('2000-06-20', today=date(2024, 6, 20)) == 24

    def test_leap_day_birthdate(self):
        """Test a Feb 29 birthdate in a non-leap year."""
        assert calculate_age('2000-02-29', today=date(2023, 2, 28)) == 22
        assert calculate_age('2000-02-29', today=date(2023, 3, 1)) == 23
        assert calculate_age('2000-02-29', today=date(2024, 2, 29)) == 24

    def test_defaults_to_current_date(self):
        """Test that the current date is used when none is given."""
        today = date.today()
        birthdate = f"{today.year - 30}-01-01"

        assert calculate_age(birthdate) == 30

    @pytest.mark.parametrize('birthdate', ['', 'not-a-date', '2000-13-01', '15/06/2000'])
    def test_invalid_birthdate_raises(self, birthdate):
        """Test that unparseable birthdates propagate an error."""
        with pytest.raises(ValueError):
            calculate_age(birthdate, today=REFERENCE_DATE)


class TestGetAge:
    """Test cases for get_age."""

    def test_birthdate_on_birthday(self):
        """Test age derived from birthdate on the birthday."""
        profile = Profile(birthdate='2000-06-15')

        assert get_age(profile, today=REFERENCE_DATE) == 24

    def test_birthdate_day_before_birthday(self):
        """Test age derived from birthdate the day before the birthday."""
        profile = Profile(birthdate='2000-06-16')

        assert get_age(profile, today=REFERENCE_DATE) == 23

    def test_falls_back_to_age(self):
        """Test that the stored age is used without a birthdate."""
        assert get_age(Profile(age=30)) == 30

    def test_empty_birthdate_falls_back_to_age(self):
        """Test that an empty birthdate is treated as absent."""
        assert get_age(Profile(birthdate='', age=41)) == 41

    def test_birthdate_wins_over_age(self):
        """Test that birthdate takes precedence over a stale age."""
        profile = Profile(birthdate='2000-06-15', age=99)

        assert get_age(profile, today=REFERENCE_DATE) == 24

    def test_empty_profile(self):
        """Test that a profile with neither field has no age."""
        assert get_age(Profile()) is None
