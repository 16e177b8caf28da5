from django.utils.text import slugify

MAX_SLUG_LENGTH = 50


def unique_slug(model, value: str, field: str = "slug", max_length: int = MAX_SLUG_LENGTH) -> str:
    """
    Build a slug from ``value`` that is not taken by any row of ``model``.

    Trashed rows keep their slugs, so collisions are checked against
    ``all_objects`` when the model has one. Collisions get a numeric suffix.
    """
    manager = getattr(model, "all_objects", model._default_manager)
    base_slug = slugify(value or "")[:max_length].strip("-") or model._meta.model_name

    slug = base_slug
    attempt = 1
    while manager.filter(**{field: slug}).exists():
        suffix = f"-{attempt}"
        slug = f"{base_slug[:max_length - len(suffix)]}{suffix}"
        attempt += 1
    return slug
