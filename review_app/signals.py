from django.db.models.signals import pre_save
from django.dispatch import receiver
from django.utils import timezone

from review_app.models import Assignment, AssignmentStatus


# ----assignment completion----
@receiver(pre_save, sender=Assignment)
def _stamp_completed_at(sender, instance, **kwargs):
    if instance.status == AssignmentStatus.COMPLETED:
        if instance.completed_at is None:
            instance.completed_at = timezone.now()
    else:
        instance.completed_at = None
