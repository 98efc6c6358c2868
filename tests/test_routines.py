from models import Habit, Routine
from routines import DUPLICATE_NAME, NOT_FOUND, RoutineBook, parse_habit_lines


def make_book():
    book = RoutineBook([])
    routine, error = book.add_routine("Morning", [{"title": "Run", "time": "06:30"}])
    assert error is None
    return book, routine


def test_add_assigns_ids_and_fresh_streaks():
    book, routine = make_book()
    assert routine.id.startswith("routine-")
    habit = routine.habits[0]
    assert habit.id.startswith("habit-")
    assert (habit.streak, habit.last_completed_date) == (0, "")


def test_duplicate_name_any_case_is_rejected():
    book, _ = make_book()
    routine, error = book.add_routine("  mORNING ", [])
    assert routine is None
    assert error == DUPLICATE_NAME
    assert len(book.routines) == 1


def test_habit_validation():
    book = RoutineBook([])
    assert book.add_routine("Evening", [{"title": "", "time": "20:00"}])[1] == "Habit 1 needs a title."
    assert book.add_routine("Evening", [{"title": "Read", "time": "25:00"}])[1] == (
        "Habit 1 needs a time as HH:MM."
    )
    assert book.add_routine("", [])[1] == "Routine name is required."
    assert book.routines == []


def test_rename_checks_other_routines_only():
    book, morning = make_book()
    evening, _ = book.add_routine("Evening", [])
    assert book.update_routine(evening.id, name="morning") == (None, DUPLICATE_NAME)
    routine, error = book.update_routine(morning.id, name="MORNING")
    assert error is None
    assert routine.name == "MORNING"
    assert book.name_taken("morning")


def test_update_keeps_streak_for_known_habit_ids():
    run = Habit(title="Run", time="06:30", streak=4, last_completed_date="2025-01-09")
    book = RoutineBook([Routine(id="routine-1", name="Morning", habits=[run])])
    routine, error = book.update_routine(
        "routine-1",
        habits=[
            {"title": "Yoga", "time": "06:00"},
            {"id": run.id, "title": "Run far", "time": "06:45"},
        ],
    )
    assert error is None
    assert [h.title for h in routine.habits] == ["Yoga", "Run far"]
    assert routine.habits[1].id == run.id
    assert routine.habits[1].streak == 4
    assert routine.habits[0].streak == 0


def test_update_unknown_routine():
    book, _ = make_book()
    assert book.update_routine("routine-missing", name="x") == (None, NOT_FOUND)


def test_delete_frees_the_name():
    book, routine = make_book()
    assert book.delete_routine(routine.id)
    assert not book.delete_routine(routine.id)
    assert book.add_routine("Morning", [])[1] is None


def editor_text(routine):
    return "\n".join(f"{h.time} {h.title}" for h in routine.habits)


def test_unchanged_editor_text_keeps_every_id():
    sets = [Habit(title="Set", time="18:00", streak=3), Habit(title="Set", time="18:10")]
    routine = Routine(id="routine-1", name="Gym", habits=sets)
    parsed = parse_habit_lines(editor_text(routine), routine.habits)
    assert [h["id"] for h in parsed] == [sets[0].id, sets[1].id]


def test_edited_title_keeps_its_habit():
    water = Habit(title="Drink water", time="07:00", streak=5)
    stretch = Habit(title="Stretch", time="07:15")
    parsed = parse_habit_lines("07:00 Drink more water\n07:15 Stretch", [water, stretch])
    assert parsed == [
        {"time": "07:00", "title": "Drink more water", "id": water.id},
        {"time": "07:15", "title": "Stretch", "id": stretch.id},
    ]


def test_reordered_lines_follow_their_titles():
    water = Habit(title="Drink water", time="07:00")
    stretch = Habit(title="Stretch", time="07:15")
    parsed = parse_habit_lines("07:15 Stretch\n07:00 Drink water", [water, stretch])
    assert [h["id"] for h in parsed] == [stretch.id, water.id]


def test_removed_and_added_lines():
    water = Habit(title="Drink water", time="07:00")
    stretch = Habit(title="Stretch", time="07:15")
    parsed = parse_habit_lines("\n07:15 Stretch\n\n07:30 Journal\n08:00 Walk", [water, stretch])
    assert parsed[0]["id"] == stretch.id
    # Journal sits where Stretch used to be, which is already claimed
    assert "id" not in parsed[1]
    assert "id" not in parsed[2]


def test_new_routine_lines_have_no_ids():
    assert parse_habit_lines("07:00 Drink water\n 07:15   Stretch ") == [
        {"time": "07:00", "title": "Drink water"},
        {"time": "07:15", "title": "Stretch"},
    ]


def test_corrupt_stored_streak_loads_as_zero():
    assert Habit.from_dict({"title": "Run", "time": "06:00", "streak": "lots"}).streak == 0
    assert Habit.from_dict({"title": "Run", "time": "06:00", "streak": None}).streak == 0
    assert Habit.from_dict({"title": "Run", "time": "06:00", "streak": -4}).streak == 0
