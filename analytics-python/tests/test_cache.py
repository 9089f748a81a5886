"""Tests for the analytics cache and the in-memory log provider."""

from datetime import date

from services.cache import AnalyticsCache
from services.log_provider import InMemoryWorkoutLog
from services.models import ExerciseCategory, ExerciseDefinition, WorkoutRecord
from services.periods import Period, training_percentage
from factories import BENCH, SQUAT, TODAY, reps, workout


class Counter:
    """Callable that counts how often it was computed."""

    def __init__(self, value):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


class TestAnalyticsCache:
    """Tests for AnalyticsCache."""

    def test_hit_after_miss(self):
        cache = AnalyticsCache()
        compute = Counter(42)

        assert cache.get_or_compute(1, 'overview', (TODAY,), compute) == 42
        assert cache.get_or_compute(1, 'overview', (TODAY,), compute) == 42
        assert compute.calls == 1
        assert cache.hits == 1
        assert cache.misses == 1

    def test_new_version_recomputes(self):
        cache = AnalyticsCache()
        compute = Counter('x')

        cache.get_or_compute(1, 'overview', (), compute)
        cache.get_or_compute(2, 'overview', (), compute)
        assert compute.calls == 2

    def test_params_are_part_of_the_key(self):
        cache = AnalyticsCache()
        compute = Counter('x')

        cache.get_or_compute(1, 'consistency', ('bench', Period.WEEKLY), compute)
        cache.get_or_compute(1, 'consistency', ('bench', Period.MONTHLY), compute)
        assert compute.calls == 2

    def test_least_recently_used_is_evicted(self):
        cache = AnalyticsCache(max_entries=2)
        cache.get_or_compute(1, 'a', (), Counter(1))
        cache.get_or_compute(1, 'b', (), Counter(2))
        cache.get_or_compute(1, 'a', (), Counter(1))
        cache.get_or_compute(1, 'c', (), Counter(3))

        again = Counter(2)
        cache.get_or_compute(1, 'b', (), again)
        assert len(cache) == 2
        assert again.calls == 1

    def test_disabled_cache_always_computes(self):
        cache = AnalyticsCache(enabled=False)
        compute = Counter(1)

        cache.get_or_compute(1, 'overview', (), compute)
        cache.get_or_compute(1, 'overview', (), compute)
        assert compute.calls == 2
        assert len(cache) == 0


class TestInMemoryWorkoutLog:
    """Tests for InMemoryWorkoutLog."""

    def test_mutations_bump_version_and_invalidate(self):
        cache = AnalyticsCache()
        log = InMemoryWorkoutLog(exercises=[BENCH], cache=cache)
        cache.get_or_compute(log.version, 'overview', (), Counter(1))

        first = log.snapshot()
        log.add_workout(workout(date(2024, 6, 14), reps('bench', 10)))
        second = log.snapshot()

        assert second.version > first.version
        assert len(cache) == 0
        assert len(first.workouts) == 0
        assert len(second.workouts) == 1

    def test_replace_and_remove(self):
        log = InMemoryWorkoutLog(exercises=[BENCH, SQUAT])
        original = workout(date(2024, 6, 14), reps('bench', 10))
        log.add_workout(original)

        log.replace_workout(WorkoutRecord(id=original.id, timestamp=date(2024, 6, 1),
                                          sets=(reps('squat', 5),)))
        assert log.snapshot().workouts[0].sets[0].exercise_id == 'squat'

        log.remove_workout(original.id)
        assert log.snapshot().workouts == ()
        assert log.version == 3

    def test_results_are_recomputed_from_snapshots(self):
        log = InMemoryWorkoutLog(exercises=[BENCH])
        log.add_workout(workout(date(2024, 6, 14), reps('bench', 10)))
        before = training_percentage(log.snapshot().workouts, Period.WEEKLY, TODAY)

        log.add_workout(workout(date(2024, 6, 15), reps('bench', 10)))
        after = training_percentage(log.snapshot().workouts, Period.WEEKLY, TODAY)

        assert before == 17
        assert after == 33
        assert training_percentage(log.snapshot().workouts, Period.WEEKLY, TODAY) == after

    def test_add_exercise_replaces_definition(self):
        log = InMemoryWorkoutLog(exercises=[BENCH])
        log.add_exercise(ExerciseDefinition(id='bench', category=ExerciseCategory.CHEST, name='Bench'))
        assert log.snapshot().catalog.get('bench').name == 'Bench'
        assert len(log.snapshot().catalog) == 1
