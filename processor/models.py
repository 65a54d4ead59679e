"""Data models for the Teskerti event feed."""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class TeskertiEvent:
    """Event as served by the aggregation endpoint."""
    id: str
    title: str
    date: str
    location: str
    category: str
    url: str
    price: Optional[str] = None
    image_url: Optional[str] = None

    REQUIRED_FIELDS = ('id', 'title', 'date', 'location', 'category', 'url')

    @classmethod
    def from_dict(cls, data: Any) -> 'TeskertiEvent':
        """
        Build an event from its wire representation.

        Args:
            data: Decoded JSON object for a single event

        Returns:
            TeskertiEvent object

        Raises:
            ValueError: If the object does not have the event shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"Event must be an object, got {type(data).__name__}")

        for name in cls.REQUIRED_FIELDS:
            if not isinstance(data.get(name), str):
                raise ValueError(f"Event field '{name}' must be a string")

        for name in ('price', 'imageUrl'):
            if data.get(name) is not None and not isinstance(data[name], str):
                raise ValueError(f"Event field '{name}' must be a string")

        return cls(
            id=data['id'],
            title=data['title'],
            date=data['date'],
            location=data['location'],
            category=data['category'],
            url=data['url'],
            price=data.get('price'),
            image_url=data.get('imageUrl')
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire representation, omitting absent fields."""
        item = {
            'id': self.id,
            'title': self.title,
            'date': self.date,
            'location': self.location,
            'category': self.category,
            'url': self.url
        }

        if self.price is not None:
            item['price'] = self.price
        if self.image_url is not None:
            item['imageUrl'] = self.image_url

        return item


@dataclass
class TeskertiApiResponse:
    """Uniform success/failure envelope returned by the feed client."""
    success: bool
    events: List[TeskertiEvent] = field(default_factory=list)
    last_sync: Optional[int] = None
    from_cache: Optional[bool] = None
    error: Optional[str] = None
    warning: Optional[str] = None

    @classmethod
    def failure(cls, message: str) -> 'TeskertiApiResponse':
        """Build a failure envelope with an empty event list."""
        return cls(success=False, events=[], error=message)

    @classmethod
    def from_dict(cls, data: Any) -> 'TeskertiApiResponse':
        """
        Parse and structurally validate a response body.

        A body reporting success must carry an event list and no error. A
        body reporting failure may omit the list but must not fill it.

        Args:
            data: Decoded JSON body

        Returns:
            TeskertiApiResponse object

        Raises:
            ValueError: If the body does not have the envelope shape
        """
        if not isinstance(data, dict):
            raise ValueError(
                f"Response body must be an object, got {type(data).__name__}"
            )

        success = data.get('success')
        if not isinstance(success, bool):
            raise ValueError("Response field 'success' must be a boolean")

        raw_events = data.get('events')
        if raw_events is None and not success:
            raw_events = []
        if not isinstance(raw_events, list):
            raise ValueError("Response field 'events' must be a list")
        if not success and raw_events:
            raise ValueError("Failed response must not carry events")
        if success and data.get('error') is not None:
            raise ValueError("Successful response must not carry an error")

        last_sync = data.get('lastSync')
        # bool is a subclass of int
        if last_sync is not None and (
            isinstance(last_sync, bool) or not isinstance(last_sync, int)
        ):
            raise ValueError("Response field 'lastSync' must be an integer")

        from_cache = data.get('fromCache')
        if from_cache is not None and not isinstance(from_cache, bool):
            raise ValueError("Response field 'fromCache' must be a boolean")

        for name in ('error', 'warning'):
            if data.get(name) is not None and not isinstance(data[name], str):
                raise ValueError(f"Response field '{name}' must be a string")

        return cls(
            success=success,
            events=[TeskertiEvent.from_dict(item) for item in raw_events],
            last_sync=last_sync,
            from_cache=from_cache,
            error=data.get('error'),
            warning=data.get('warning')
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the wire representation, omitting absent fields."""
        body = {
            'success': self.success,
            'events': [event.to_dict() for event in self.events]
        }

        if self.last_sync is not None:
            body['lastSync'] = self.last_sync
        if self.from_cache is not None:
            body['fromCache'] = self.from_cache
        if self.error is not None:
            body['error'] = self.error
        if self.warning is not None:
            body['warning'] = self.warning

        return body
