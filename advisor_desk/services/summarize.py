# advisor_desk/services/summarize.py
"""Template-based advisor briefs and outreach messages.

Nothing here calls a model: each text is assembled from fixed sentence
pools with a random choice among equivalent phrasings, so two calls with
the same inputs can read differently.
"""
import random
from pydantic import BaseModel, Field
from typing import List, Optional, Sequence, TypeVar, Union
from datetime import datetime

from advisor_desk.models.student import AppStatus, StudentRecord
from advisor_desk.models.activity import Channel, InteractionKind, Interaction
from advisor_desk.utils.timefmt import time_ago
from advisor_desk.utils import templates

T = TypeVar("T")

# How many recent interactions feed the brief
RECENT_INTERACTIONS = 10


def pick(pool: Sequence[T], rng: Optional[random.Random] = None) -> T:
    """Uniform choice; not for anything security related"""
    return (rng or random).choice(pool)


def first_name_of(name: Optional[str], default: str = "there") -> str:
    parts = (name or "").split()
    return parts[0] if parts else default


def as_sentence(text: str) -> str:
    text = text.strip()
    return text if text.endswith(".") else text + "."


class SummaryInputs(BaseModel):
    name: Optional[str] = None
    country: Optional[str] = None
    grade: Optional[str] = None
    status: Optional[AppStatus] = None
    tags: List[str] = Field(default_factory=list)
    last_active: Optional[datetime] = None
    last_communication_at: Optional[datetime] = None
    interactions: List[InteractionKind] = Field(default_factory=list)

    @classmethod
    def for_student(cls,
                    student: StudentRecord,
                    interactions: Sequence[Interaction] = (),
                    last_communication_at: Optional[datetime] = None) -> "SummaryInputs":
        return cls(
            name=student.name,
            country=student.country or None,
            grade=student.grade,
            status=student.status,
            tags=student.tags,
            last_active=student.last_active,
            last_communication_at=last_communication_at or student.last_communication_at,
            interactions=[i.kind for i in interactions[:RECENT_INTERACTIONS]],
        )


class OutreachMessage(BaseModel):
    subject: str
    body: str


def _location_line(country: Optional[str], grade: Optional[str]) -> str:
    if country:
        return f"Based in {country}, grade {grade}." if grade else f"Based in {country}."
    if grade:
        return f"Currently in grade {grade}."
    return ""


def build_summary(inputs: SummaryInputs,
                  rng: Optional[random.Random] = None,
                  now: Optional[datetime] = None) -> str:
    """Short advisor brief: one opener line, then the non-empty clauses"""
    first = first_name_of(inputs.name, "The student")
    stage = (inputs.status or AppStatus.EXPLORING).value
    tags = set(inputs.tags)

    tag_hints = [hint for tag, hint in templates.TAG_HINTS.items() if tag in tags]
    intent_hints = []
    ai_questions = sum(1 for kind in inputs.interactions if kind == InteractionKind.AI_QUESTION)
    if ai_questions >= 2:
        intent_hints.append(templates.AI_QUESTION_HINT)

    clauses = [
        templates.SUMMARY_STATUS_LINE.format(
            first=first,
            stage=stage,
            last_seen=time_ago(inputs.last_active, now, default="recently"),
            last_contact=time_ago(inputs.last_communication_at, now, default="unknown"),
        ),
        f"{first} {', '.join(tag_hints)}" if tag_hints else "",
        f"{first} {', '.join(intent_hints)}" if intent_hints else "",
        _location_line(inputs.country, inputs.grade),
        templates.NEXT_STEPS.get(stage, templates.DEFAULT_NEXT_STEP),
    ]
    body = " ".join(as_sentence(c) for c in clauses if c)

    opener = pick(templates.SUMMARY_OPENERS, rng).format(first=first)
    return f"{opener}\n\n{body}"


def outreach_candidates(name: Optional[str],
                        channel: Union[Channel, str],
                        status: Optional[Union[AppStatus, str]] = None,
                        tags: Sequence[str] = ()) -> List[str]:
    """Every body the outreach generator may choose from, most specific first"""
    first = first_name_of(name)
    channel = Channel(channel)

    if channel == Channel.SMS:
        pool = list(templates.SMS_BODIES)
    elif channel in (Channel.CALL, Channel.NOTE):
        pool = list(templates.CALL_NOTES)
    else:
        pool = list(templates.EMAIL_BODIES)
        stage = status.value if isinstance(status, AppStatus) else (status or AppStatus.EXPLORING.value)
        # Prepending only raises the odds; the pick stays uniform
        if "Essay" in tags:
            pool.insert(0, templates.ESSAY_EMAIL_BODY)
        if stage in templates.STAGE_EMAIL_BODIES:
            pool.insert(0, templates.STAGE_EMAIL_BODIES[stage])

    return [body.format(first=first) for body in pool]


def outreach_message(name: Optional[str],
                     channel: Union[Channel, str],
                     status: Optional[Union[AppStatus, str]] = None,
                     tags: Sequence[str] = (),
                     rng: Optional[random.Random] = None) -> OutreachMessage:
    body = pick(outreach_candidates(name, channel, status, tags), rng)
    if Channel(channel) == Channel.EMAIL:
        return OutreachMessage(subject=pick(templates.EMAIL_SUBJECTS, rng), body=body)
    return OutreachMessage(subject=templates.FOLLOW_UP_SUBJECT, body=body)


def follow_up_email(name: Optional[str], rng: Optional[random.Random] = None) -> OutreachMessage:
    first = first_name_of(name)
    return OutreachMessage(
        subject=pick(templates.FOLLOW_UP_SUBJECTS, rng),
        body=pick(templates.FOLLOW_UP_BODIES, rng).format(first=first),
    )
