"""Django signals that remove stored assets when their row is deleted.

Fired for single-row and queryset deletes alike, so cascaded and forced
deletes clean up too. Files are removed only once the deleting transaction
commits. Failures are logged by discard_asset.
"""

from django.db import transaction
from django.db.models.signals import post_delete
from django.dispatch import receiver

from marketplace.models import Banner, Event, Rental, RentalProduct, Vendor
from marketplace.stores.assets import discard_asset
from marketplace.stores.django_store import DjangoAssetStorage


def discard_on_commit(*urls: str | None) -> None:
    storage = DjangoAssetStorage()
    for url in urls:
        if url:
            transaction.on_commit(lambda url=url: discard_asset(storage, url))


@receiver(post_delete, sender=Event)
def discard_event_assets(sender, instance, **kwargs):
    """Remove an event's banner and permit document."""
    discard_on_commit(instance.banner, instance.permit_img)


@receiver(post_delete, sender=Vendor)
@receiver(post_delete, sender=Banner)
@receiver(post_delete, sender=Rental)
@receiver(post_delete, sender=RentalProduct)
def discard_banner_asset(sender, instance, **kwargs):
    """Remove the banner image of a vendor, banner, rental or rental product."""
    discard_on_commit(instance.banner)
