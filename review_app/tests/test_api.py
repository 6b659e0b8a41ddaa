import pytest
from django.urls import reverse

from accounts.models import Organization
from review_app.models import (
    AssignmentStatus, EvaluatorWeight, PeriodScoringSettings, QuestionCategory,
)

pytestmark = pytest.mark.django_db


@pytest.fixture
def team(create_user, evaluate):
    """One target rated by itself and two peers, Leadership only."""
    target = create_user(name="Tara", department="Sales")
    peer1 = create_user(name="Pia")
    peer2 = create_user(name="Pat", position_level="manager")
    evaluate(target, target, {"Leadership": [4]})
    evaluate(peer1, target, {"Leadership": [3]})
    evaluate(peer2, target, {"Leadership": [5]})
    return target, peer1, peer2


class TestAdminResults:
    url = reverse("results-list")

    def test_org_admin_gets_scored_targets(self, client_for, org_admin, period, team):
        target, *_ = team
        EvaluatorWeight.objects.create(organization=org_admin.organization, position_level="manager", weight=2)
        resp = client_for(org_admin).post(self.url, {"period_id": str(period.pk)}, format="json")

        assert resp.status_code == 200
        body = resp.json()
        assert body["period_name"] == "2025 H1"
        (row,) = body["results"]
        assert row["target_id"] == str(target.pk)
        # (4 + 3 + 2*5) / 4
        assert row["overall_avg"] == 4.3
        assert row["self_score"] == 4.0
        assert row["peer_avg"] == 4.0
        assert row["evaluator_count"] == 3
        assert row["category_compare"][0]["label"] == "Leadership"
        assert len(row["evaluations"]) == 3

    def test_plain_user_is_forbidden(self, client_for, create_user, period):
        resp = client_for(create_user()).post(self.url, {"period_id": str(period.pk)}, format="json")
        assert resp.status_code == 403
        assert resp.json()["kind"] == "forbidden"

    def test_bad_period_id(self, client_for, org_admin):
        resp = client_for(org_admin).post(self.url, {"period_id": "nope"}, format="json")
        assert resp.status_code == 400
        body = resp.json()
        assert body["kind"] == "validation_error"
        assert "period_id" in body["fields"]

    def test_unknown_period_is_not_found(self, client_for, org_admin):
        resp = client_for(org_admin).post(
            self.url, {"period_id": "00000000-0000-0000-0000-000000000000"}, format="json",
        )
        assert resp.status_code == 404
        assert resp.json()["kind"] == "not_found"

    def test_super_admin_must_name_org(self, client_for, super_admin, period):
        resp = client_for(super_admin).post(self.url, {"period_id": str(period.pk)}, format="json")
        assert resp.status_code == 400
        assert resp.json()["hint"]

    def test_org_admin_cannot_read_other_org(self, client_for, create_user, period, team):
        other = Organization.objects.create(name="Other")
        admin = create_user(role="ORG_ADMIN", organization=other)
        resp = client_for(admin).post(self.url, {"period_id": str(period.pk)}, format="json")
        assert resp.status_code == 404


class TestMyResults:
    url = reverse("results-mine")

    def test_team_row_once_all_peers_answered(self, client_for, team):
        target, *_ = team
        resp = client_for(target).get(self.url)
        assert resp.status_code == 200
        (period_row,) = resp.json()["results"]
        names = [e["evaluator_name"] for e in period_row["evaluations"]]
        assert names == ["Self Evaluation", "Team (Average)"]
        assert period_row["peer_expected_count"] == 2
        assert period_row["peer_completed_count"] == 2
        assert period_row["confidence"]["label"] == "Low"

    def test_team_row_hidden_while_peers_pending(self, client_for, create_user, evaluate, team):
        target, *_ = team
        evaluate(create_user(), target, {}, status=AssignmentStatus.PENDING)
        (period_row,) = client_for(target).get(self.url).json()["results"]
        assert [e["is_self"] for e in period_row["evaluations"]] == [True]
        assert period_row["peer_expected_count"] == 3

    def test_language_switch(self, client_for, team):
        QuestionCategory.objects.filter(name="Leadership").update(name_fr="Leadership FR")
        target, *_ = team
        (period_row,) = client_for(target).get(self.url, {"lang": "fr"}).json()["results"]
        assert period_row["category_compare"][0]["label"] == "Leadership FR"
        assert period_row["evaluations"][0]["evaluator_name"] == "Auto-évaluation"

    def test_nothing_received(self, client_for, create_user):
        assert client_for(create_user()).get(self.url).json() == {"results": []}


class TestDevelopment:
    url = reverse("results-development")

    def test_periods_only(self, client_for, period, team):
        target, *_ = team
        body = client_for(target).get(self.url).json()
        assert body == {"periods": [{"id": str(period.pk), "name": "2025 H1"}]}

    def test_plan_for_period(self, client_for, period, team):
        target, *_ = team
        body = client_for(target).get(self.url, {"period_id": str(period.pk)}).json()
        assert body["period_name"] == "2025 H1"
        assert [s["name"] for s in body["plan"]["strengths"]] == ["Leadership"]
        assert body["plan"]["improvements"] == []


class TestCompensation:
    url = reverse("compensation-recommendations")

    def test_disabled_by_default(self, client_for, org_admin, period):
        resp = client_for(org_admin).get(self.url, {"period_id": str(period.pk)})
        assert resp.status_code == 404
        assert resp.json()["kind"] == "not_found"

    def test_rows_when_enabled(self, settings, client_for, org_admin, period, team):
        settings.COMPENSATION_ENABLED = True
        resp = client_for(org_admin).get(self.url, {"period_id": str(period.pk), "min": 20, "max": 30})
        assert resp.status_code == 200
        body = resp.json()
        assert body["pool"] == "org"
        (row,) = body["rows"]
        assert row["recommended_pct"] == 25.0
        assert row["action_plan"] == ["Development in Leadership: target 4.0 → 5.0 (3 months)"]

    def test_manager_pool_needs_managers(self, settings, client_for, org_admin, period, team):
        settings.COMPENSATION_ENABLED = True
        resp = client_for(org_admin).get(self.url, {"period_id": str(period.pk), "scope": "manager"})
        assert resp.status_code == 400
        assert resp.json()["kind"] == "configuration_error"

    def test_max_below_min(self, settings, client_for, org_admin, period):
        settings.COMPENSATION_ENABLED = True
        resp = client_for(org_admin).get(self.url, {"period_id": str(period.pk), "min": 30, "max": 10})
        assert resp.status_code == 400
        assert resp.json()["kind"] == "validation_error"

    def test_plain_user_is_forbidden(self, settings, client_for, create_user, period):
        settings.COMPENSATION_ENABLED = True
        resp = client_for(create_user()).get(self.url, {"period_id": str(period.pk)})
        assert resp.status_code == 403


class TestPeriods:
    def test_snapshot_then_keep(self, client_for, org_admin, period):
        client = client_for(org_admin)
        url = reverse("period-snapshot-coefficients", kwargs={"period_id": period.pk})

        first = client.post(url, {}, format="json")
        assert first.status_code == 201
        assert first.json()["snapshotted"] is True

        again = client.post(url, {"overwrite": False}, format="json")
        assert again.status_code == 200
        assert again.json()["snapshotted"] is False
        assert PeriodScoringSettings.objects.filter(period=period).exists()

        listed = client.get(reverse("period-list")).json()
        assert listed[0]["snapshotted"] is True

    def test_coefficients(self, client_for, org_admin, period):
        url = reverse("period-coefficients", kwargs={"period_id": period.pk})
        body = client_for(org_admin).get(url).json()
        assert body["evaluator_weights"] == {"self": 1.0}
        assert body["snapshotted"] is False


class TestWeights:
    url = reverse("evaluator-weight-list")

    def test_org_admin_writes_into_own_org(self, client_for, org_admin):
        other = Organization.objects.create(name="Other")
        resp = client_for(org_admin).post(
            self.url, {"org_id": str(other.pk), "position_level": "Manager", "weight": "2.5"}, format="json",
        )
        assert resp.status_code == 201
        row = EvaluatorWeight.objects.get()
        assert row.organization_id == org_admin.organization_id
        assert row.position_level == "manager"

    def test_default_rows_are_super_admin_only(self, client_for, org_admin):
        default = EvaluatorWeight.objects.create(position_level="peer", weight=1)
        url = reverse("evaluator-weight-detail", kwargs={"pk": default.pk})
        resp = client_for(org_admin).patch(url, {"weight": "3"}, format="json")
        assert resp.status_code == 403

    def test_plain_user_reads_only(self, client_for, create_user):
        client = client_for(create_user())
        assert client.get(self.url).status_code == 200
        resp = client.post(self.url, {"position_level": "peer", "weight": "1"}, format="json")
        assert resp.status_code == 403

    def test_negative_weight_rejected(self, client_for, super_admin):
        resp = client_for(super_admin).post(
            reverse("category-weight-list"), {"category_name": "Ethics", "weight": "-1"}, format="json",
        )
        assert resp.status_code == 400
        assert "weight" in resp.json()["fields"]


class TestLogin:
    url = reverse("jwt-login")

    def test_email_login_returns_claims(self, api_client, create_user):
        user = create_user(email="tara@test.local")
        resp = api_client.post(self.url, {"email": "tara@test.local", "password": "pass12345"}, format="json")
        assert resp.status_code == 200
        body = resp.json()
        assert body["access"] and body["refresh"]
        assert body["org_id"] == str(user.organization_id)
        assert body["lang"] == "en"

    def test_inactive_user_cannot_log_in(self, api_client, create_user):
        create_user(email="gone@test.local", status="inactive")
        resp = api_client.post(self.url, {"email": "gone@test.local", "password": "pass12345"}, format="json")
        assert resp.status_code == 400
