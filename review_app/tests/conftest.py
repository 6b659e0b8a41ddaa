import pytest
from decimal import Decimal
from uuid import uuid4
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from accounts.models import Organization, Role
from review_app.models import (
    Assignment, AssignmentStatus, EvaluationPeriod, EvaluationResponse,
    Question, QuestionCategory,
)
from review_app.services.aggregation import CategoryScore, PerEvaluation
from review_app.services.coefficients import Coefficients, DeviationConfig


# ── pure helpers ──────────────────────────────────────────────────────────
@pytest.fixture
def make_coefficients():
    def _make(evaluator_weights=None, category_weights=None, min_high=5):
        return Coefficients(
            evaluator_weights=evaluator_weights or {"self": 1.0, "peer": 1.0},
            category_weights=category_weights or {},
            min_high_confidence=min_high,
            deviation=DeviationConfig(),
            standard_weight=0.15,
        )
    return _make


@pytest.fixture
def make_evaluation():
    def _make(avg, *, is_self=False, level="peer", evaluator_id=None, categories=None):
        cats = tuple(CategoryScore(name, score, 1) for name, score in (categories or {}).items())
        return PerEvaluation(
            assignment_id=uuid4().hex,
            evaluator_id=evaluator_id or uuid4().hex,
            is_self=is_self,
            evaluator_level="self" if is_self else level,
            avg_score=avg,
            categories=cats,
            response_count=len(cats) or (1 if avg else 0),
        )
    return _make


# ── database fixtures ─────────────────────────────────────────────────────
@pytest.fixture
def organization(db):
    return Organization.objects.create(name="Acme")


@pytest.fixture
def create_user(db, organization):
    User = get_user_model()
    def _create_user(**kw):
        data = {
            "username": f"u_{uuid4().hex[:8]}",
            "email": f"{uuid4().hex[:8]}@test.local",
            "password": "pass12345",
            "name": "Test User",
            "organization": organization,
            "role": Role.USER,
        }
        data.update(kw)
        return User.objects.create_user(**data)
    return _create_user


@pytest.fixture
def period(db, organization):
    return EvaluationPeriod.objects.create(organization=organization, name="2025H1", name_en="2025 H1")


@pytest.fixture
def category(db):
    def _category(name, **kw):
        return QuestionCategory.objects.get_or_create(name=name, defaults=kw)[0]
    return _category


@pytest.fixture
def evaluate(db, period, category):
    """
    evaluate(evaluator, target, {"Leadership": [4, 5], ...}) creates a
    completed assignment with one response per score.
    """
    def _evaluate(evaluator, target, scores, *, in_period=None, status=AssignmentStatus.COMPLETED):
        assignment = Assignment.objects.create(
            period=in_period or period, evaluator=evaluator, target=target, status=status,
        )
        for name, values in scores.items():
            cat = category(name)
            question = Question.objects.create(category=cat, text=f"{name} question")
            for value in values:
                EvaluationResponse.objects.create(
                    assignment=assignment,
                    question=question,
                    category=cat,
                    category_name=name,
                    std_score=Decimal(str(value)),
                )
        return assignment
    return _evaluate


@pytest.fixture
def super_admin(create_user):
    return create_user(role=Role.SUPER_ADMIN, name="Super Admin", organization=None)


@pytest.fixture
def org_admin(create_user):
    return create_user(role=Role.ORG_ADMIN, name="Org Admin")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for(api_client):
    def _client_for(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _client_for
