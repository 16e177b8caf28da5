"""
Celery tasks for account provisioning.

Usage:
    from accounts.tasks import provision_user_task
    provision_user_task.delay(user_id)

The post_save signal in accounts.signals enqueues this after the user row
commits. Failures retry with backoff; every attempt is logged.
"""
import logging

from celery import shared_task

logger = logging.getLogger(__name__)


@shared_task(
    bind=True,
    max_retries=3,
    default_retry_delay=30,
    autoretry_for=(Exception,),
    retry_backoff=True,
)
def provision_user_task(self, user_id: int) -> dict:
    """
    Attach a newly registered user to the sentinel company.

    Args:
        user_id: Primary key of the user to provision

    Returns:
        Dict with the grant and company ids
    """
    from accounts.models import User
    from accounts.provisioning import provision_user

    try:
        user = User.all_objects.get(pk=user_id)
    except User.DoesNotExist:
        logger.error("User not found for provisioning", extra={"user_id": user_id})
        return {"error": f"User {user_id} not found"}

    grant = provision_user(user)
    return {"user_id": user_id, "grant_id": grant.pk, "company_id": grant.target_id}
