"""
New-user provisioning.

Every new user is attached to the sentinel company (``Company.is_main``).
The first user ever provisioned also creates that company. Both steps run
in one transaction, so a user never ends up half provisioned.
"""

import logging

from django.conf import settings
from django.db import IntegrityError, transaction

from accounts import grants
from accounts.models import Company, Grant, TargetKind

logger = logging.getLogger(__name__)

SENTINEL_ATTEMPTS = 3


def get_sentinel_company() -> Company:
    """
    Return the sentinel company, creating or restoring it when needed.

    Concurrent creators race on the partial unique constraint; the loser
    re-reads the winner's row.
    """
    for attempt in range(1, SENTINEL_ATTEMPTS + 1):
        try:
            with transaction.atomic():
                company, created = Company.all_objects.get_or_create(
                    is_main=True,
                    defaults={"name": settings.SENTINEL_COMPANY_NAME},
                )
        except IntegrityError:
            logger.warning(
                "Sentinel company creation raced, retrying",
                extra={"attempt": attempt},
            )
            continue

        if created:
            logger.info(
                "Main company created for first user",
                extra={"company_id": company.pk},
            )
        elif company.is_trashed:
            company.restore()
            logger.info("Main company restored", extra={"company_id": company.pk})
        return company

    return Company.all_objects.get(is_main=True)


def provision_user(user) -> Grant:
    """Give ``user`` a live company grant on the sentinel company."""
    try:
        with transaction.atomic():
            company = get_sentinel_company()
            grant = grants.grant(user, TargetKind.COMPANY, company.pk)
    except Exception:
        logger.exception("User provisioning failed", extra={"user_id": user.pk})
        raise

    logger.info(
        "Company access assigned to user",
        extra={"user_id": user.pk, "company_id": company.pk},
    )
    return grant
