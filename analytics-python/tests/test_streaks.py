"""Tests for streaks and log totals."""

from datetime import date, timedelta

from services.streaks import current_streak, longest_streak, workout_stats
from factories import PLANK, TODAY, reps, timed, workout, workouts_on


class TestCurrentStreak:
    """Tests for current_streak."""

    def test_streak_including_today(self):
        workouts = workouts_on([date(2024, 6, 13), date(2024, 6, 14), TODAY])
        assert current_streak(workouts, TODAY) == 3

    def test_missing_today_does_not_break_streak(self):
        workouts = workouts_on([date(2024, 6, 12), date(2024, 6, 13), date(2024, 6, 14)])
        assert current_streak(workouts, TODAY) == 3

    def test_missing_yesterday_breaks_streak(self):
        workouts = workouts_on([date(2024, 6, 12), date(2024, 6, 13)])
        assert current_streak(workouts, TODAY) == 0

    def test_several_workouts_on_one_day_count_once(self):
        workouts = workouts_on([TODAY, TODAY, TODAY])
        assert current_streak(workouts, TODAY) == 1

    def test_empty_log(self):
        assert current_streak([], TODAY) == 0

    def test_scan_is_capped_at_a_year(self):
        workouts = workouts_on([TODAY - timedelta(days=i) for i in range(400)])
        assert current_streak(workouts, TODAY) == 365


class TestLongestStreak:
    """Tests for longest_streak."""

    def test_longest_run(self):
        days = [date(2024, 6, d) for d in (1, 2, 3, 5, 6)]
        assert longest_streak(workouts_on(days)) == 3

    def test_not_capped(self):
        workouts = workouts_on([TODAY - timedelta(days=i) for i in range(400)])
        assert longest_streak(workouts) == 400

    def test_run_across_month_end(self):
        days = [date(2024, 1, 30), date(2024, 1, 31), date(2024, 2, 1)]
        assert longest_streak(workouts_on(days)) == 3

    def test_empty_log(self):
        assert longest_streak([]) == 0


class TestWorkoutStats:
    """Tests for workout_stats."""

    def test_totals(self):
        workouts = [
            workout(date(2024, 6, 14), reps('bench', 10), reps('bench', 8)),
            workout(TODAY, reps('squat', 12), timed('plank', 60), timed(PLANK.id, 45)),
        ]
        stats = workout_stats(workouts, TODAY)

        assert stats.total_workouts == 2
        assert stats.total_sets == 5
        assert stats.total_reps == 30
        assert stats.total_duration_seconds == 105
        assert stats.current_streak == 2
        assert stats.longest_streak == 2

    def test_empty_log(self):
        stats = workout_stats([], TODAY)
        assert stats.total_workouts == 0
        assert stats.current_streak == 0
