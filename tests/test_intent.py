"""Tests for keyword intent matching."""

import pytest

from app.models.task import TaskCategoryEnum, TaskTypeEnum
from app.models.user import MemberStatusEnum, TeamMember
from app.services.intent import classify_intent, describe_category, select_recipients, task_template


class TestClassifyIntent:

    def test_grant_assignment(self):
        intent = classify_intent("Assign grant application tasks to all active members")
        assert intent.category == TaskCategoryEnum.GRANT_APPLICATION
        assert intent.task_type == TaskTypeEnum.WEEKLY
        assert intent.wants_assignment is True
        assert intent.wants_report is False

    def test_custom_one_time_partner(self):
        intent = classify_intent("Create custom one-time task for partner outreach")
        assert intent.category == TaskCategoryEnum.PARTNER_CONTACT
        assert intent.task_type == TaskTypeEnum.CUSTOM
        # "assign" is missing, so nothing would be created
        assert intent.wants_assignment is False

    def test_first_category_match_wins(self):
        intent = classify_intent("Assign sponsor and grant tasks")
        assert intent.category == TaskCategoryEnum.GRANT_APPLICATION

    def test_research_falls_back_to_other(self):
        intent = classify_intent("Assign research tasks to everyone")
        assert intent.category == TaskCategoryEnum.OTHER

    @pytest.mark.parametrize("prompt", ["Assign one_time tasks", "Assign tasks once"])
    def test_type_defaults_to_weekly(self, prompt):
        assert classify_intent(prompt).task_type == TaskTypeEnum.WEEKLY

    def test_matching_is_case_insensitive(self):
        intent = classify_intent("ASSIGN SPONSOR TASKS")
        assert intent.category == TaskCategoryEnum.SPONSOR_OUTREACH
        assert intent.wants_assignment is True

    @pytest.mark.parametrize("prompt", [
        "Generate this week's performance report for all members",
        "Create weekly task summary and send to all members",
    ])
    def test_report_requests(self, prompt):
        assert classify_intent(prompt).wants_report is True

    def test_advisory_text_is_not_parsed(self):
        intent = classify_intent("Assign tasks", advisory="I'm creating grant and sponsor tasks")
        assert intent.category == TaskCategoryEnum.OTHER

    def test_empty_prompt_never_fails(self):
        intent = classify_intent("")
        assert intent.category == TaskCategoryEnum.OTHER
        assert intent.task_type == TaskTypeEnum.WEEKLY
        assert not intent.wants_assignment


def test_recipients_are_active_members_only():
    members = [
        TeamMember(user_id="a", name="A", status=MemberStatusEnum.ACTIVE),
        TeamMember(user_id="b", name="B", status=MemberStatusEnum.ON_LEAVE),
        TeamMember(user_id="c", name="C", status=MemberStatusEnum.FLAGGED),
        TeamMember(user_id="d", name="D", status=MemberStatusEnum.REMOVED),
        TeamMember(user_id="e", name="E", status=MemberStatusEnum.ACTIVE),
    ]
    assert [m.user_id for m in select_recipients(members)] == ["a", "e"]


def test_names_in_prompt_do_not_narrow_recipients():
    members = [
        TeamMember(user_id="a", name="Sarah", status=MemberStatusEnum.ACTIVE),
        TeamMember(user_id="b", name="Alex", status=MemberStatusEnum.ACTIVE),
    ]
    assert classify_intent("Assign grant tasks to Sarah").wants_assignment
    assert len(select_recipients(members)) == 2


def test_templates():
    assert task_template(TaskCategoryEnum.GRANT_APPLICATION).title == "Weekly Grant Application Task"
    assert task_template(TaskCategoryEnum.SPONSOR_OUTREACH).title == "Weekly Sponsor Outreach Task"
    for category in (TaskCategoryEnum.PARTNER_CONTACT, TaskCategoryEnum.RESEARCH, TaskCategoryEnum.OTHER):
        assert task_template(category).title == "Weekly Team Task"


def test_describe_category():
    assert describe_category(TaskCategoryEnum.GRANT_APPLICATION) == "grant application"
    assert describe_category(TaskCategoryEnum.OTHER) == "other"
