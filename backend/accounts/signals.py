"""Kick off provisioning once a new user is committed."""

import logging
from functools import partial

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction
from django.db.models.signals import post_save
from django.dispatch import receiver

logger = logging.getLogger(__name__)


def _dispatch_provisioning(user_id: int) -> None:
    if settings.PROVISIONING_SYNC:
        from accounts.models import User
        from accounts.provisioning import provision_user

        provision_user(User.all_objects.get(pk=user_id))
        return

    from accounts.tasks import provision_user_task

    provision_user_task.delay(user_id)
    logger.debug("Provisioning queued", extra={"user_id": user_id})


@receiver(post_save, sender=get_user_model(), dispatch_uid="accounts_provision_new_user")
def provision_new_user(sender, instance, created, raw=False, **kwargs):
    if not created or raw:
        return
    transaction.on_commit(partial(_dispatch_provisioning, instance.pk))
