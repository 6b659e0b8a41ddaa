import uuid
from decimal import Decimal

import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models

LEVELS = [
    ("self", "Self"),
    ("executive", "Executive"),
    ("manager", "Manager"),
    ("peer", "Peer"),
    ("subordinate", "Subordinate"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("accounts", "0001_initial"),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="EvaluationPeriod",
            fields=[
                ("period_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=120)),
                ("name_en", models.CharField(blank=True, max_length=120, null=True)),
                ("name_fr", models.CharField(blank=True, max_length=120, null=True)),
                ("start_date", models.DateField(blank=True, null=True)),
                ("end_date", models.DateField(blank=True, null=True)),
                ("status", models.CharField(choices=[("active", "Active"), ("inactive", "Inactive"), ("completed", "Completed")], default="active", max_length=10)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("organization", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="periods", to="accounts.organization")),
            ],
        ),
        migrations.AddConstraint(
            model_name="evaluationperiod",
            constraint=models.UniqueConstraint(fields=("organization", "name"), name="uniq_period_name_per_org"),
        ),
        migrations.CreateModel(
            name="MainCategory",
            fields=[
                ("main_category_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=120)),
                ("name_en", models.CharField(blank=True, max_length=120, null=True)),
                ("name_fr", models.CharField(blank=True, max_length=120, null=True)),
                ("is_active", models.BooleanField(default=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
            ],
            options={"verbose_name_plural": "Main categories"},
        ),
        migrations.CreateModel(
            name="QuestionCategory",
            fields=[
                ("category_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=120)),
                ("name_en", models.CharField(blank=True, max_length=120, null=True)),
                ("name_fr", models.CharField(blank=True, max_length=120, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("main_category", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="categories", to="review_app.maincategory")),
            ],
            options={"verbose_name_plural": "Question categories"},
        ),
        migrations.CreateModel(
            name="Question",
            fields=[
                ("question_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("text", models.TextField()),
                ("order_num", models.PositiveIntegerField(default=0)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("category", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="questions", to="review_app.questioncategory")),
            ],
        ),
        migrations.CreateModel(
            name="Assignment",
            fields=[
                ("assignment_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("status", models.CharField(choices=[("pending", "Pending"), ("completed", "Completed")], default="pending", max_length=10)),
                ("completed_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("evaluator", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="given_assignments", to=settings.AUTH_USER_MODEL)),
                ("period", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="assignments", to="review_app.evaluationperiod")),
                ("target", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="received_assignments", to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.AddConstraint(
            model_name="assignment",
            constraint=models.UniqueConstraint(fields=("period", "evaluator", "target"), name="uniq_assignment_per_period"),
        ),
        migrations.CreateModel(
            name="EvaluationResponse",
            fields=[
                ("response_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("category_name", models.CharField(blank=True, max_length=120, null=True)),
                ("std_score", models.DecimalField(blank=True, decimal_places=2, max_digits=4, null=True)),
                ("reel_score", models.DecimalField(blank=True, decimal_places=2, max_digits=4, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("assignment", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="responses", to="review_app.assignment")),
                ("category", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="responses", to="review_app.questioncategory")),
                ("question", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.SET_NULL, related_name="responses", to="review_app.question")),
            ],
        ),
        migrations.CreateModel(
            name="EvaluatorWeight",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position_level", models.CharField(choices=LEVELS, max_length=12)),
                ("weight", models.DecimalField(decimal_places=3, default=1, max_digits=6)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("organization", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="evaluator_weights", to="accounts.organization")),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="CategoryWeight",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category_name", models.CharField(max_length=120)),
                ("weight", models.DecimalField(decimal_places=3, default=1, max_digits=6)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("organization", models.ForeignKey(blank=True, null=True, on_delete=django.db.models.deletion.CASCADE, related_name="category_weights", to="accounts.organization")),
            ],
            options={"ordering": ["-created_at"]},
        ),
        migrations.CreateModel(
            name="ConfidenceSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("min_high_confidence_evaluator_count", models.PositiveSmallIntegerField(default=5)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("organization", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="confidence_settings", to="accounts.organization")),
            ],
            options={"verbose_name_plural": "Confidence settings"},
        ),
        migrations.CreateModel(
            name="DeviationSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("lenient_diff_threshold", models.DecimalField(decimal_places=3, default=Decimal("0.75"), max_digits=5)),
                ("harsh_diff_threshold", models.DecimalField(decimal_places=3, default=Decimal("0.75"), max_digits=5)),
                ("lenient_multiplier", models.DecimalField(decimal_places=3, default=Decimal("0.85"), max_digits=5)),
                ("harsh_multiplier", models.DecimalField(decimal_places=3, default=Decimal("1.15"), max_digits=5)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("organization", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="deviation_settings", to="accounts.organization")),
            ],
            options={"verbose_name_plural": "Deviation settings"},
        ),
        migrations.CreateModel(
            name="PeriodScoringSettings",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("min_high_confidence_evaluator_count", models.PositiveSmallIntegerField(default=5)),
                ("lenient_diff_threshold", models.DecimalField(decimal_places=3, default=Decimal("0.75"), max_digits=5)),
                ("harsh_diff_threshold", models.DecimalField(decimal_places=3, default=Decimal("0.75"), max_digits=5)),
                ("lenient_multiplier", models.DecimalField(decimal_places=3, default=Decimal("0.85"), max_digits=5)),
                ("harsh_multiplier", models.DecimalField(decimal_places=3, default=Decimal("1.15"), max_digits=5)),
                ("standard_weight", models.DecimalField(decimal_places=3, default=Decimal("0.15"), max_digits=5)),
                ("snapshotted_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("period", models.OneToOneField(on_delete=django.db.models.deletion.CASCADE, related_name="scoring_settings", to="review_app.evaluationperiod")),
            ],
            options={"verbose_name_plural": "Period scoring settings"},
        ),
        migrations.CreateModel(
            name="PeriodEvaluatorWeight",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("position_level", models.CharField(choices=LEVELS, max_length=12)),
                ("weight", models.DecimalField(decimal_places=3, default=1, max_digits=6)),
                ("period", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="evaluator_weights", to="review_app.evaluationperiod")),
            ],
        ),
        migrations.AddConstraint(
            model_name="periodevaluatorweight",
            constraint=models.UniqueConstraint(fields=("period", "position_level"), name="uniq_period_evaluator_level"),
        ),
        migrations.CreateModel(
            name="PeriodCategoryWeight",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("category_name", models.CharField(max_length=120)),
                ("weight", models.DecimalField(decimal_places=3, default=1, max_digits=6)),
                ("period", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="category_weights", to="review_app.evaluationperiod")),
            ],
        ),
        migrations.AddConstraint(
            model_name="periodcategoryweight",
            constraint=models.UniqueConstraint(fields=("period", "category_name"), name="uniq_period_category"),
        ),
        migrations.CreateModel(
            name="ActionPlan",
            fields=[
                ("action_plan_id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("source", models.CharField(default="development", max_length=20)),
                ("status", models.CharField(choices=[("draft", "Draft"), ("in_progress", "In progress"), ("done", "Done")], default="draft", max_length=12)),
                ("title", models.CharField(blank=True, max_length=160)),
                ("department", models.CharField(blank=True, max_length=120)),
                ("items", models.JSONField(blank=True, default=list)),
                ("due_at", models.DateTimeField(blank=True, null=True)),
                ("created_at", models.DateTimeField(default=django.utils.timezone.now)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("period", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="action_plans", to="review_app.evaluationperiod")),
                ("user", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="action_plans", to=settings.AUTH_USER_MODEL)),
            ],
        ),
        migrations.AddConstraint(
            model_name="actionplan",
            constraint=models.UniqueConstraint(fields=("user", "period", "source"), name="uniq_action_plan_per_source"),
        ),
    ]
