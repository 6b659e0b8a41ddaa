from django.core.management.base import BaseCommand, CommandError

from review_app.services.action_plans import DEFAULT_LIMIT, generate_action_plans
from review_app.services.errors import ScoringError


class Command(BaseCommand):
    help = "Create draft development action plans for an organization."

    def add_arguments(self, parser):
        parser.add_argument("org_id", help="UUID of the organization")
        parser.add_argument("--period", dest="period_id", default=None, help="Limit to one period")
        parser.add_argument("--limit", type=int, default=DEFAULT_LIMIT, help="Max (user, period) pairs, 10..400")

    def handle(self, *args, **options):
        try:
            result = generate_action_plans(options["org_id"], options["period_id"], options["limit"])
        except ScoringError as exc:
            raise CommandError(f"{exc.message} {exc.hint}") from exc
        self.stdout.write(self.style.SUCCESS(
            f"Created {result['created']} plan(s), skipped {result['skipped']}."
        ))
