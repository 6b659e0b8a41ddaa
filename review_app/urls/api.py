# review_app/urls/api.py
from django.urls import path
from rest_framework.routers import DefaultRouter
from rest_framework_simplejwt.views import TokenRefreshView

from review_app.views.action_plans import ActionPlanViewSet
from review_app.views.auth import EmailLoginView
from review_app.views.compensation import CompensationViewSet
from review_app.views.periods import PeriodViewSet
from review_app.views.results import ResultsViewSet
from review_app.views.weights import CategoryWeightViewSet, EvaluatorWeightViewSet

router = DefaultRouter()

router.register("results", ResultsViewSet, basename="results")                  # POST /api/results/, GET /api/results/mine/
router.register("compensation", CompensationViewSet, basename="compensation")   # GET /api/compensation/recommendations/
router.register("evaluator-weights", EvaluatorWeightViewSet, basename="evaluator-weight")
router.register("category-weights", CategoryWeightViewSet, basename="category-weight")
router.register("periods", PeriodViewSet, basename="period")                    # POST /api/periods/{id}/snapshot-coefficients/
router.register("action-plans", ActionPlanViewSet, basename="action-plan")      # POST /api/action-plans/generate/

urlpatterns = [
    # JWT
    path("auth/login/",   EmailLoginView.as_view(),   name="jwt-login"),
    path("auth/refresh/", TokenRefreshView.as_view(), name="jwt-refresh"),
    # REST resources
    *router.urls
]
