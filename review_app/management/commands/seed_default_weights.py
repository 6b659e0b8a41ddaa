from decimal import Decimal

from django.core.management.base import BaseCommand

from review_app.models import EvaluatorLevel, EvaluatorWeight

DEFAULT_WEIGHTS = {
    EvaluatorLevel.SELF: Decimal("1.0"),
    EvaluatorLevel.EXECUTIVE: Decimal("1.0"),
    EvaluatorLevel.MANAGER: Decimal("1.0"),
    EvaluatorLevel.PEER: Decimal("1.0"),
    EvaluatorLevel.SUBORDINATE: Decimal("1.0"),
}


class Command(BaseCommand):
    help = "Add system default evaluator weights (organization = NULL) for missing levels."

    def handle(self, *args, **options):
        for level, weight in DEFAULT_WEIGHTS.items():
            exists = EvaluatorWeight.objects.filter(organization__isnull=True, position_level=level).exists()
            if exists:
                self.stdout.write(self.style.WARNING(f"{level} default weight already exists"))
                continue
            EvaluatorWeight.objects.create(organization=None, position_level=level, weight=weight)
            self.stdout.write(self.style.SUCCESS(f"✓ {level} default weight added"))
