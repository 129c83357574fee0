"""Tests for planned-workout de-duplication across calendars."""

from app.models.planned import PlannedWorkout, WorkoutSource
from app.utils.workout_utils import are_workouts_similar, merge_planned_workouts


def _planned(
    workout_id: str,
    name: str,
    scheduled_for: str = "2024-12-30T06:00:00-05:00",
    tss: float | None = None,
    source: WorkoutSource = WorkoutSource.TRAINERROAD,
    external_id: str | None = None,
) -> PlannedWorkout:
    return PlannedWorkout(
        id=workout_id,
        name=name,
        scheduled_for=scheduled_for,
        expected_tss=tss,
        source=source,
        external_id=external_id,
    )


def test_different_days_are_never_similar():
    first = _planned("tr-1", "Gibbs")
    second = _planned("77", "Gibbs", scheduled_for="2024-12-31T06:00:00-05:00")
    assert not are_workouts_similar(first, second)


def test_name_containment_ignores_case_and_punctuation():
    first = _planned("tr-1", "Gibbs")
    second = _planned("77", "TR: gibbs -1", source=WorkoutSource.INTERVALS)
    assert are_workouts_similar(first, second)


def test_linked_external_id():
    first = _planned("tr-1", "Gibbs")
    second = _planned("77", "Morning session", external_id="tr-1", source=WorkoutSource.INTERVALS)
    assert are_workouts_similar(first, second)


def test_tss_within_threshold():
    first = _planned("tr-1", "Gibbs", tss=85)
    close = _planned("77", "Sweet spot", tss=88, source=WorkoutSource.INTERVALS)
    far = _planned("78", "Sweet spot", tss=90, source=WorkoutSource.INTERVALS)
    assert are_workouts_similar(first, close)
    assert not are_workouts_similar(first, far)


def test_unrelated_workouts_without_tss_are_distinct():
    assert not are_workouts_similar(_planned("tr-1", "Gibbs"), _planned("77", "Easy Run"))


def test_merge_prefers_first_list_and_sorts_by_start():
    trainerroad = [
        _planned("tr-2", "Pettit", scheduled_for="2024-12-31T06:00:00-05:00"),
        _planned("tr-1", "Gibbs", scheduled_for="2024-12-30T06:00:00-05:00"),
    ]
    intervals = [
        _planned("77", "Gibbs", scheduled_for="2024-12-30T00:00:00-05:00", source=WorkoutSource.INTERVALS),
        _planned("78", "Long Run", scheduled_for="2024-12-29T00:00:00-05:00", source=WorkoutSource.INTERVALS),
    ]

    merged = merge_planned_workouts(trainerroad, intervals)

    assert [w.id for w in merged] == ["78", "tr-1", "tr-2"]


def test_merge_compares_instants_across_offsets():
    first = _planned("a", "Openers", scheduled_for="2024-12-30T10:00:00+01:00")
    second = _planned("b", "Run", scheduled_for="2024-12-30T08:30:00Z", source=WorkoutSource.INTERVALS)
    assert [w.id for w in merge_planned_workouts([first], [second])] == ["b", "a"]
