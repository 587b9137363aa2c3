# advisor_desk/utils/templates.py

# Candidate phrasings; "{first}" is the student's first name.

SUMMARY_OPENERS = [
    "Here’s a quick read on {first}:",
    "Snapshot on {first}:",
    "Brief on {first}:",
]

SUMMARY_STATUS_LINE = (
    "{first} is in the **{stage}** stage and last active {last_seen}. "
    "Latest advisor contact was {last_contact}."
)

TAG_HINTS = {
    "Essay": "needs essay support",
    "Scholarship": "is tracking scholarships",
    "STEM": "has STEM leaning",
    "SAT": "is preparing for SAT",
    "TOEFL": "is preparing for TOEFL",
}

AI_QUESTION_HINT = "is actively exploring via AI Q&A"

NEXT_STEPS = {
    "Applying": "Focus next on locking recommenders and finalizing the activity list.",
    "Shortlisting": "Focus next on narrowing to 3–4 target programs and checking deadlines.",
    "Submitted": "Next steps: interview prep and scholarship follow-ups.",
}
DEFAULT_NEXT_STEP = "Encourage deeper exploration and a first draft college list."

EMAIL_SUBJECTS = [
    "Next steps on your college list",
    "Quick check-in on your applications",
    "Your shortlist looks solid: feedback inside",
    "Essay pointers you can use today",
    "Deadlines coming up, let’s align",
]

EMAIL_BODIES = [
    "Hi {first}, I reviewed your interests and shortlisted a few programs that match your profile. "
    "Do you have 10 minutes this week to review together?",
    "Hi {first}, based on your activity I suggested two schools that match your GPA and goals. "
    "Want me to walk you through the trade-offs?",
    "Hi {first}, nice progress so far. I left comments on your shortlist about fit and deadlines. "
    "Shall we finalize 3–4 targets this week?",
    "Hi {first}, I added some essay prompts tied to your strengths. "
    "If you share a rough outline, I can give feedback within a day.",
    "Hi {first}, a few deadlines are within the next 2–3 weeks. "
    "I can help prioritize requirements so you aren’t rushing last minute.",
]

ESSAY_EMAIL_BODY = (
    "Hi {first}, I left notes on your essay outline. "
    "Let’s refine the narrative and tighten the opening paragraph."
)

STAGE_EMAIL_BODIES = {
    "Applying": "Hi {first}, since you’re in the Applying stage, I recommend we lock your recommenders "
                "and finalize the activity list this week.",
    "Submitted": "Hi {first}, great job submitting! Next we’ll prep for potential interviews and scholarship forms.",
}

SMS_BODIES = [
    "{first}, quick nudge: ready to pick 3 target schools? I can help you compare deadlines and scholarships.",
    "{first}, saw your progress. Want a 10-min call to finalize your shortlist?",
    "{first}, I dropped essay ideas in your notes. Ping me when you’re ready to draft.",
]

CALL_NOTES = [
    "Discussed shortlist trade-offs and agreed to narrow to 4 programs.",
    "Walked through application timeline; clarified test score reporting.",
    "Aligned on essay theme and next steps for a first draft.",
]

# Single-click follow-up from the profile header
FOLLOW_UP_SUBJECTS = [
    "Next steps on your college list",
    "Quick check-in on your applications",
    "Deadlines coming up, let’s align",
    "Essay pointers you can use today",
]

FOLLOW_UP_BODIES = [
    "Hi {first}, I reviewed your interests and shortlisted a few programs. "
    "Do you have 10 minutes this week to review together?",
    "Hi {first}, great progress so far. I suggested a couple schools that match your goals. "
    "Want me to walk you through them?",
    "Hi {first}, a few deadlines are approaching. I can help prioritize requirements so you aren’t rushed.",
    "Hi {first}, I added essay prompts tied to your strengths. "
    "Share a rough outline when ready and I’ll give feedback.",
]

FOLLOW_UP_SUBJECT = "Follow-up"
