"""Django signals for cache invalidation.

Seeding rewrites festivals, stages and sets; plan mutations add and delete
plan items. Either way the cached pages that show them are dropped so the
next request rebuilds them. Plan pages embed the festival and its lineup,
so lineup changes drop the plan pages of that festival too.
"""

from django.core.cache import cache
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from festivals.cache_keys import FESTIVAL_LIST_KEY, festival_key, plan_index_key, schedule_index_key
from festivals.models import Festival, Plan, PlanItem, Set, Stage
from festivals.page_cache import drop_pages


def drop_festival_pages(festival_id, slug: str) -> None:
    cache.delete(festival_key(slug))
    plan_ids = Plan.objects.filter(festival_id=festival_id).values_list("pk", flat=True)
    drop_pages(schedule_index_key(slug), *(plan_index_key(pk) for pk in plan_ids))


@receiver([post_save, post_delete], sender=Festival)
def invalidate_festival_cache(sender, instance, **kwargs):
    """Invalidate caches when a festival is saved or deleted."""
    cache.delete(FESTIVAL_LIST_KEY)
    drop_festival_pages(instance.pk, instance.slug)


@receiver([post_save, post_delete], sender=Stage)
@receiver([post_save, post_delete], sender=Set)
def invalidate_lineup_cache(sender, instance, **kwargs):
    """Invalidate the festival pages when its lineup changes."""
    slug = Festival.objects.filter(pk=instance.festival_id).values_list("slug", flat=True).first()
    if slug:
        drop_festival_pages(instance.festival_id, slug)


@receiver([post_save, post_delete], sender=Plan)
def invalidate_plan_cache(sender, instance, **kwargs):
    """Invalidate the plan pages when a plan is renamed or deleted."""
    drop_pages(plan_index_key(instance.pk))


@receiver([post_save, post_delete], sender=PlanItem)
def invalidate_plan_item_cache(sender, instance, **kwargs):
    """Invalidate the plan pages when a set is added or removed."""
    drop_pages(plan_index_key(instance.plan_id))
