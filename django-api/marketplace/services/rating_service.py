"""Rating service: event reviews and their per-event aggregates."""

import logging
from collections.abc import Mapping
from typing import Any

from marketplace.domain import EventId, Page, Rating, RatingId
from marketplace.domain.errors import NotFoundError, ReferenceNotFoundError, ValidationError
from marketplace.domain.ratings import RatingStats, aggregate_ratings, parse_star
from marketplace.services.base import (
    is_present,
    normalize_listing,
    require_fields,
    require_found,
    supplied,
)
from marketplace.stores.interfaces import EventStore, Listing, RatingStore

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "event_id", "rating_star")
EDITABLE_FIELDS = ("name", "event_id", "review", "rating_star")
SORT_FIELDS = ("created_at", "rating_star", "name")


class RatingService:
    """Service for event ratings."""

    def __init__(self, ratings: RatingStore, events: EventStore) -> None:
        self._ratings = ratings
        self._events = events

    def create_rating(self, data: Mapping[str, Any]) -> Rating:
        """Raises ValidationError, InvalidIdError or ReferenceNotFoundError on bad input."""
        require_fields(data, REQUIRED_FIELDS)
        star = parse_star(data["rating_star"])
        event_id = self._existing_event(data["event_id"])
        review = data.get("review")
        rating = self._ratings.create_rating(
            event_id,
            str(data["name"]).strip(),
            review.strip() if isinstance(review, str) and review.strip() else None,
            star,
        )
        logger.info("Rating %s (%d stars) added to event %s", rating.id, star, event_id)
        return rating

    def list_ratings(
        self,
        listing: Listing,
        event_id: str | None = None,
        rating_star: Any = None,
    ) -> Page[Rating]:
        listing = normalize_listing(listing, SORT_FIELDS, "created_at")
        return self._ratings.list_ratings(
            EventId.parse(event_id) if is_present(event_id) else None,
            parse_star(rating_star) if is_present(rating_star) else None,
            listing,
        )

    def list_event_ratings(self, event_id: str, listing: Listing) -> Page[Rating]:
        """Raises InvalidIdError or NotFoundError for a bad event id."""
        parsed = self._require_event(event_id)
        listing = normalize_listing(listing, SORT_FIELDS, "created_at")
        return self._ratings.list_ratings(parsed, None, listing)

    def get_rating(self, rating_id: str) -> Rating:
        return require_found(self._ratings.get_rating(RatingId.parse(rating_id)), "Rating")

    def get_event_rating_stats(self, event_id: str) -> RatingStats:
        """Aggregate one event's ratings.

        Raises:
            InvalidIdError: If the event_id is not a valid UUID.
            NotFoundError: If the event does not exist.
        """
        parsed = self._require_event(event_id)
        stars = self._ratings.stars_by_event([parsed]).get(parsed, [])
        return aggregate_ratings(stars)

    def update_rating(self, rating_id: str, data: Mapping[str, Any]) -> Rating:
        """Validate only the supplied fields, as on creation.

        Raises:
            ValidationError: If the patch is empty or a value is invalid.
            ReferenceNotFoundError: If a new event reference does not exist.
        """
        rating = self.get_rating(rating_id)
        changes = supplied(data, EDITABLE_FIELDS)
        if not changes:
            raise ValidationError("At least one field is required to update")
        if "name" in changes:
            name = str(changes["name"]).strip()
            if not name:
                raise ValidationError("Name cannot be empty")
            changes["name"] = name
        if "rating_star" in changes:
            changes["rating_star"] = parse_star(changes["rating_star"])
        if "event_id" in changes:
            changes["event_id"] = self._existing_event(changes["event_id"])
        if "review" in changes:
            changes["review"] = str(changes["review"]).strip() or None
        return self._ratings.update_rating(rating.id, changes)

    def delete_rating(self, rating_id: str) -> int:
        rating = self.get_rating(rating_id)
        self._ratings.delete_rating(rating.id)
        logger.info("Deleted rating %s", rating.id)
        return 1

    def delete_event_ratings(self, event_id: str) -> int:
        """Delete every rating of an event and return the count removed."""
        parsed = self._require_event(event_id)
        deleted = self._ratings.delete_for_event(parsed)
        logger.info("Deleted %d ratings of event %s", deleted, parsed)
        return deleted

    def _existing_event(self, value: Any) -> EventId:
        event_id = EventId.parse(value)
        if not self._events.event_exists(event_id):
            raise ReferenceNotFoundError("Event")
        return event_id

    def _require_event(self, value: Any) -> EventId:
        event_id = EventId.parse(value)
        if not self._events.event_exists(event_id):
            raise NotFoundError("Event")
        return event_id
