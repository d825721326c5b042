from datetime import timedelta

import pytest

from classification.task_classifier import (
    TaskClassifier,
    determine_task_category,
    determine_task_priority,
    extract_tags,
)
from taskflow.models import TaskDraft, TimeContext


def _ctx(now, **delta):
    return TimeContext(scheduled_time=now + timedelta(**delta), is_sequential=False)


def test_priority_quadrants(fixed_now):
    soon = _ctx(fixed_now, hours=1)
    later = _ctx(fixed_now, days=3)

    assert determine_task_priority({"title": "Finish critical report"}, soon, now=fixed_now) == "urgent_important"
    assert determine_task_priority({"title": "Call mom"}, soon, now=fixed_now) == "urgent_not_important"
    assert determine_task_priority({"title": "Essential tax paperwork"}, later, now=fixed_now) == "not_urgent_important"
    assert determine_task_priority({"title": "Water plants"}, later, now=fixed_now) == "not_urgent_not_important"


def test_priority_uses_description_too(fixed_now):
    task = {"title": "Email", "description": "this one is crucial"}
    assert determine_task_priority(task, _ctx(fixed_now, days=2), now=fixed_now) == "not_urgent_important"


def test_priority_urgency_window_edges(fixed_now):
    assert determine_task_priority({}, _ctx(fixed_now, hours=24), now=fixed_now) == "urgent_not_important"
    assert determine_task_priority({}, _ctx(fixed_now, hours=24, seconds=1), now=fixed_now) == "not_urgent_not_important"
    # overdue still counts as urgent
    assert determine_task_priority({}, _ctx(fixed_now, hours=-3), now=fixed_now) == "urgent_not_important"


def test_priority_defaults_when_inputs_missing(fixed_now):
    assert determine_task_priority(None, _ctx(fixed_now, hours=1), now=fixed_now) == "not_urgent_not_important"
    assert determine_task_priority({"title": "critical"}, None, now=fixed_now) == "not_urgent_not_important"
    assert determine_task_priority({"title": "critical"}, TimeContext(), now=fixed_now) == "not_urgent_important"


@pytest.mark.parametrize("title, category", [
    ("Gym session", "Health"),
    ("Write quarterly report", "Work"),
    ("Study for the exam", "Study"),
    ("Buy groceries", "Errands"),
    ("Go shopping", "Personal"),
    ("Work out at the gym", "Work"),
    ("Call mom", "Other"),
    ("", "Other"),
])
def test_category(title, category):
    assert determine_task_category({"title": title}) == category


def test_category_of_non_task():
    assert determine_task_category(None) == "Other"
    assert determine_task_category("gym") == "Other"


def test_tags_start_with_own_category():
    assert extract_tags({"title": "Update website", "category": "Work"}) == ["work", "website"]


def test_tags_deduplicated_across_groups():
    assert extract_tags({"title": "Coding session with the team"}) == ["coding", "team"]


def test_tags_accept_draft_model():
    draft = TaskDraft(title="Badminton", description="with family", category="Health")
    assert extract_tags(draft) == ["health", "badminton", "family"]


def test_tags_of_non_task():
    assert extract_tags(None) == []
    assert extract_tags({"title": "Nap"}) == []


def test_classifier_bundles_all_rules(fixed_now):
    out = TaskClassifier(now=fixed_now).classify({"title": "Gym"}, _ctx(fixed_now, minutes=30))
    assert out == {"priority": "urgent_not_important", "category": "Health", "tags": []}
