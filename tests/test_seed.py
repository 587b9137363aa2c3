"""Tests for demo data seeding."""

import random

from advisor_desk.models.student import STATUS_OPTIONS
from advisor_desk.services.seed import DemoDataGenerator, seed_activity, seed_students


def test_generated_student_is_valid(now):
    generator = DemoDataGenerator(random.Random(1), now)
    for _ in range(20):
        student = generator.student()
        assert student.status in STATUS_OPTIONS
        assert 9 <= int(student.grade) <= 12
        assert student.last_active <= now
        assert set(student.tags) <= set(DemoDataGenerator.TAGS)
        assert student.email.endswith("@example.com")


def test_seed_students(store):
    assert seed_students(store, 12, random.Random(3)) == 12
    assert len(store.list_students()) == 12


def test_seed_activity_writes_sub_records(store):
    seed_students(store, 5, random.Random(3))
    writes = seed_activity(store, rng=random.Random(4))

    students = store.list_students()
    written = sum(
        len(store.list_interactions(s.id)) + len(store.list_communications(s.id))
        + len(store.list_notes(s.id)) + len(store.list_tasks(s.id))
        for s in students
    )
    assert writes == written
    # every student gets at least two interactions
    assert all(len(store.list_interactions(s.id)) >= 2 for s in students)


def test_seed_activity_on_empty_store(store):
    assert seed_activity(store, rng=random.Random(0)) == 0
