"""Event processor for enriching feed events for display."""
import logging
from dataclasses import replace
from typing import List

from processor.models import TeskertiApiResponse, TeskertiEvent

logger = logging.getLogger(__name__)


class EventProcessor:
    """Processor for adding presentation data to feed events."""

    CATEGORY_IMAGES = [
        (
            ('cinéma', 'cinema'),
            "https://images.unsplash.com/photo-1536440136628-849c177e76a1"
            "?q=80&w=800&auto=format&fit=crop"
        ),
        (
            ('théâtre', 'theatre', 'spectacle'),
            "https://images.unsplash.com/photo-1503095392237-736213917042"
            "?q=80&w=800&auto=format&fit=crop"
        ),
        (
            ('musique', 'concert', 'festival', 'song'),
            "https://images.unsplash.com/photo-1501612766622-27c7f65d6208"
            "?q=80&w=800&auto=format&fit=crop"
        ),
        (
            ('ramadan',),
            "https://images.unsplash.com/photo-1555400038-63f5ba517a47"
            "?q=80&w=800&auto=format&fit=crop"
        ),
    ]
    DEFAULT_IMAGE = (
        "https://images.unsplash.com/photo-1492684223066-81342ee5ff30"
        "?q=80&w=800&auto=format&fit=crop"
    )

    def enrich_events(self, events: List[TeskertiEvent]) -> List[TeskertiEvent]:
        """
        Attach a category image to events that have none.

        Args:
            events: Events from the feed

        Returns:
            New list of events; the input events are left untouched
        """
        enriched = []

        for event in events:
            if event.image_url:
                enriched.append(event)
            else:
                enriched.append(
                    replace(event, image_url=self.image_for_category(event.category))
                )

        logger.info(f"Enriched {len(enriched)} events with category images")
        return enriched

    def enrich_response(self, response: TeskertiApiResponse) -> TeskertiApiResponse:
        """Return a copy of a successful envelope with enriched events."""
        if not response.success:
            return response
        return replace(response, events=self.enrich_events(response.events))

    def image_for_category(self, category: str) -> str:
        """
        Pick an illustrative image for a category.

        Args:
            category: Display category (e.g. "Cinéma", "Concert")

        Returns:
            Image URL
        """
        term = category.lower()

        for keywords, image in self.CATEGORY_IMAGES:
            if any(keyword in term for keyword in keywords):
                return image

        return self.DEFAULT_IMAGE
