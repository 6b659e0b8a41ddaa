from django.core.exceptions import ValidationError as DjangoValidationError
from django.core.management.base import BaseCommand, CommandError

from review_app.models import EvaluationPeriod
from review_app.services.coefficients import snapshot_period_coefficients
from review_app.services.errors import ScoringError


class Command(BaseCommand):
    help = "Freeze the current evaluator/category weights and scoring settings into a period."

    def add_arguments(self, parser):
        parser.add_argument("period_id", help="UUID of the evaluation period")
        parser.add_argument("--keep", action="store_true", help="Keep an existing snapshot instead of overwriting it")

    def handle(self, *args, **options):
        try:
            period = EvaluationPeriod.objects.get(pk=options["period_id"])
        except (EvaluationPeriod.DoesNotExist, DjangoValidationError) as exc:
            raise CommandError(f"Period {options['period_id']} not found") from exc
        try:
            result = snapshot_period_coefficients(period, overwrite=not options["keep"])
        except ScoringError as exc:
            raise CommandError(f"{exc.message} {exc.hint}") from exc

        if result["snapshotted"]:
            self.stdout.write(self.style.SUCCESS(
                f"Snapshotted {period}: {result['evaluator_weights']} evaluator weights, "
                f"{result['category_weights']} category weights."
            ))
        else:
            self.stdout.write(self.style.WARNING(f"{period} already snapshotted; left unchanged."))
