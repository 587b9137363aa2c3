# advisor_desk/services/seed.py
"""Generate demo students and activity for local development."""

import random
from datetime import datetime, timedelta, timezone
from typing import Optional

from advisor_desk.config import ADVISOR_AUTHOR_ID
from advisor_desk.logger import get_logger
from advisor_desk.models.student import StudentRecord, STATUS_OPTIONS
from advisor_desk.models.activity import (
    Interaction, InteractionKind, Communication, Channel, Direction, Note, Task,
)
from advisor_desk.services.store import StudentStore
from advisor_desk.services.summarize import outreach_message

logger = get_logger(__name__)


class DemoDataGenerator:
    """Synthetic prospective students and their advisor activity."""

    FIRST_NAMES = [
        'Emma', 'Liam', 'Olivia', 'Noah', 'Ava', 'Ethan', 'Sophia', 'Mason',
        'Isabella', 'William', 'Mia', 'James', 'Charlotte', 'Benjamin', 'Amelia',
        'Lucas', 'Harper', 'Henry', 'Aarav', 'Priya', 'Wei', 'Yuki', 'Omar', 'Fatima',
    ]

    LAST_NAMES = [
        'Smith', 'Johnson', 'Williams', 'Brown', 'Garcia', 'Miller', 'Davis',
        'Martinez', 'Lopez', 'Wilson', 'Anderson', 'Taylor', 'Lee', 'Patel',
        'Chen', 'Tanaka', 'Haddad', 'Okafor', 'Kim', 'Nguyen',
    ]

    COUNTRIES = [
        'India', 'China', 'Vietnam', 'Nigeria', 'Brazil', 'Mexico', 'Japan',
        'South Korea', 'United Arab Emirates', 'Kenya', 'Canada', 'Germany',
    ]

    TAGS = ['SAT', 'TOEFL', 'Essay', 'Scholarship', 'STEM']

    TASK_TITLES = ['Essay outline', 'Shortlist review', 'Scholarship eligibility', 'SAT prep plan']

    INTERACTION_DETAILS = {
        InteractionKind.LOGIN: ["Signed in from mobile", "Signed in from web"],
        InteractionKind.AI_QUESTION: [
            "Asked how many schools to apply to",
            "Asked about scholarship deadlines",
            "Asked what makes a strong personal essay",
            "Asked whether to send SAT scores",
        ],
        InteractionKind.DOC_UPLOAD: ["Uploaded transcript", "Uploaded essay draft", "Uploaded TOEFL report"],
    }

    def __init__(self, rng: Optional[random.Random] = None, now: Optional[datetime] = None):
        self.rng = rng or random.Random()
        self.now = now or datetime.now(timezone.utc)

    def recent(self, days: int) -> datetime:
        return self.now - timedelta(seconds=self.rng.uniform(0, days * 24 * 3600))

    def student(self) -> StudentRecord:
        first = self.rng.choice(self.FIRST_NAMES)
        last = self.rng.choice(self.LAST_NAMES)
        tags = self.rng.sample(self.TAGS, self.rng.randint(0, 3))
        return StudentRecord(
            name=f"{first} {last}",
            email=f"{first}.{last}{self.rng.randint(1, 999)}@example.com".lower(),
            phone=f"+1-555-{self.rng.randint(100, 999)}-{self.rng.randint(1000, 9999)}",
            grade=str(self.rng.randint(9, 12)),
            country=self.rng.choice(self.COUNTRIES),
            status=self.rng.choice(STATUS_OPTIONS),
            last_active=self.recent(14),
            high_intent=self.rng.random() < 0.5,
            needs_essay_help=self.rng.random() < 0.5,
            tags=tags,
            last_communication_at=self.recent(10),
        )

    def interaction(self, student_id: str) -> Interaction:
        kind = self.rng.choice(list(InteractionKind))
        return Interaction(
            student_id=student_id,
            kind=kind,
            detail=self.rng.choice(self.INTERACTION_DETAILS[kind]),
            timestamp=self.recent(14),
        )

    def communication(self, student: StudentRecord) -> Communication:
        channel = self.rng.choice([Channel.EMAIL, Channel.SMS, Channel.CALL])
        message = outreach_message(student.name, channel, student.status, student.tags, self.rng)
        return Communication(
            student_id=student.id,
            channel=channel,
            direction=Direction.OUTBOUND,
            subject=message.subject,
            body=message.body,
            timestamp=self.recent(10),
            author_id=ADVISOR_AUTHOR_ID,
        )


def seed_students(store: StudentStore, count: int = 50, rng: Optional[random.Random] = None) -> int:
    generator = DemoDataGenerator(rng)
    for _ in range(count):
        store.create_student(generator.student())
    logger.info(f"Seeded {count} students")
    return count


def seed_activity(store: StudentStore, limit: int = 100, rng: Optional[random.Random] = None) -> int:
    """Add interactions, communications, notes and tasks to existing students.

    Returns the number of writes made.
    """
    generator = DemoDataGenerator(rng)
    rng = generator.rng
    writes = 0

    students = store.list_students(limit=limit)
    for student in students:
        for _ in range(rng.randint(2, 4)):
            store.add_interaction(generator.interaction(student.id))
            writes += 1

        # add_communication keeps last_communication_at current
        for _ in range(rng.randint(0, 2)):
            store.add_communication(generator.communication(student))
            writes += 1

        if rng.random() < 0.5:
            store.add_note(Note(
                student_id=student.id,
                text=f"Advisor note: {rng.choice(generator.INTERACTION_DETAILS[InteractionKind.AI_QUESTION])}.",
                author_id=ADVISOR_AUTHOR_ID,
                created_at=generator.recent(7),
            ))
            writes += 1

        if rng.random() < 0.5:
            store.add_task(Task(
                student_id=student.id,
                title=f"Reminder: {rng.choice(generator.TASK_TITLES)}",
            ))
            writes += 1

    logger.info(f"Seeded activity for {len(students)} students ({writes} writes)")
    return writes
