import pytest
from django.core.management import call_command
from django.urls import reverse

from accounts.models import UserStatus
from review_app.models import ActionPlan, Assignment, AssignmentStatus
from review_app.services.action_plans import clamp_limit, generate_action_plans

pytestmark = pytest.mark.django_db


@pytest.fixture
def weak_target(create_user, evaluate):
    target = create_user(name="Tara", department="Sales")
    peer = create_user()
    evaluate(target, target, {"Planning": [4], "Ethics": [4]})
    evaluate(peer, target, {"Planning": [2], "Ethics": [3], "Speaking": [1], "Sales": [5]})
    return target


def test_clamp_limit():
    assert clamp_limit(None) == 200
    assert clamp_limit(1) == 10
    assert clamp_limit(10_000) == 400
    assert clamp_limit("abc") == 200


def test_creates_plan_from_weakest_peer_areas(organization, period, weak_target):
    result = generate_action_plans(organization.pk, period.pk)
    assert result == {"created": 1, "skipped": 0}

    plan = ActionPlan.objects.get(user=weak_target, period=period)
    assert plan.title == "Action Plan"
    assert plan.department == "Sales"
    assert plan.due_at is not None
    assert [i["area"] for i in plan.items] == ["Speaking", "Planning", "Ethics"]
    assert plan.items[0] == {
        "sort_order": 1,
        "area": "Speaking",
        "label": "Speaking",
        "description": 'Start a development plan for "Speaking"',
        "status": "pending",
        "baseline_score": 1.0,
        "target_score": 2.0,
    }


def test_existing_plans_are_skipped(organization, period, weak_target):
    generate_action_plans(organization.pk, period.pk)
    assert generate_action_plans(organization.pk) == {"created": 0, "skipped": 1}
    assert ActionPlan.objects.count() == 1


def test_inactive_targets_are_ignored(organization, period, weak_target):
    weak_target.status = UserStatus.INACTIVE
    weak_target.save()
    assert generate_action_plans(organization.pk, period.pk) == {"created": 0, "skipped": 0}


def test_target_without_weak_area_is_skipped(organization, period, create_user, evaluate):
    target = create_user()
    evaluate(create_user(), target, {"Ethics": [4.5]})
    assert generate_action_plans(organization.pk, period.pk) == {"created": 0, "skipped": 1}


def test_plan_in_preferred_language(organization, period, weak_target):
    weak_target.preferred_language = "fr"
    weak_target.save()
    generate_action_plans(organization.pk, period.pk)
    assert ActionPlan.objects.get().title == "Plan d'action"


def test_generate_endpoint_and_listing(client_for, org_admin, period, weak_target):
    resp = client_for(org_admin).post(reverse("action-plan-generate"), {}, format="json")
    assert resp.status_code == 200
    assert resp.json() == {"created": 1, "skipped": 0}

    own = client_for(weak_target).get(reverse("action-plan-list")).json()
    assert [p["user_id"] for p in own] == [str(weak_target.pk)]


def test_owner_updates_status(client_for, organization, period, weak_target):
    generate_action_plans(organization.pk, period.pk)
    plan = ActionPlan.objects.get()
    url = reverse("action-plan-detail", kwargs={"action_plan_id": plan.pk})
    resp = client_for(weak_target).patch(url, {"status": "in_progress"}, format="json")
    assert resp.status_code == 200
    plan.refresh_from_db()
    assert plan.status == "in_progress"


def test_completed_at_follows_status(create_user, period):
    a = Assignment.objects.create(period=period, evaluator=create_user(), target=create_user())
    assert a.completed_at is None
    a.status = AssignmentStatus.COMPLETED
    a.save()
    assert a.completed_at is not None
    a.status = AssignmentStatus.PENDING
    a.save()
    assert a.completed_at is None


def test_generate_command(organization, period, weak_target):
    call_command("generate_action_plans", str(organization.pk), "--period", str(period.pk))
    assert ActionPlan.objects.filter(user=weak_target).count() == 1
