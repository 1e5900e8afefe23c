"""Event model definition."""

from datetime import datetime
from typing import Dict, Any, Optional
from sqlalchemy import Column, Integer, String, Text, Float, DateTime

from .base import Base
from ..utils.timezone import ensure_utc_timezone, now_utc

# Fields a client may set; everything else is owned by the store
MUTABLE_FIELDS = (
    'title',
    'short_description',
    'full_description',
    'date',
    'time',
    'location',
    'category',
    'image',
    'price',
    'priority',
)

# Model attribute -> wire key
WIRE_NAMES = {
    'id': 'id',
    'title': 'title',
    'short_description': 'shortDescription',
    'full_description': 'fullDescription',
    'date': 'date',
    'time': 'time',
    'location': 'location',
    'category': 'category',
    'image': 'image',
    'price': 'price',
    'priority': 'priority',
    'owner_id': 'userId',
    'created_at': 'createdAt',
}

class Event(Base):
    """
    Event listed by a signed-in user.
    
    Fields:
        id: Unique identifier (assigned by the database)
        title: Event title
        short_description: One-line summary shown on cards
        full_description: Long-form description (optional)
        date: Calendar date string as entered by the owner
        time: Time of day string (optional)
        location: Where the event takes place (optional)
        category: Free-form category label (optional)
        image: Absolute URL or path relative to the static image folder (optional)
        price: Ticket price, never negative
        priority: Free-form priority label (optional)
        owner_id: Identity of the user that created the event
        created_at: When the event was inserted; never modified afterwards
    """
    __tablename__ = 'events'
    
    # Required fields
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String, nullable=False)
    price = Column(Float, nullable=False, default=0.0)
    owner_id = Column(String, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=now_utc, index=True)
    
    # Optional fields
    short_description = Column(String)
    full_description = Column(Text)
    date = Column(String)
    time = Column(String)
    location = Column(String)
    category = Column(String)
    image = Column(String)
    priority = Column(String)
    
    def __init__(self, **kwargs):
        """Initialize Event with the given attributes."""
        # Ensure timezone-aware datetimes
        if 'created_at' in kwargs and kwargs['created_at'] is not None:
            kwargs['created_at'] = ensure_utc_timezone(kwargs['created_at'])
        
        super().__init__(**kwargs)
    
    @property
    def created_at_utc(self) -> Optional[datetime]:
        """Creation time with the UTC offset restored."""
        if self.created_at is None:
            return None
        return ensure_utc_timezone(self.created_at)
    
    def to_dict(self) -> Dict[str, Any]:
        """Convert to a dictionary keyed by wire names."""
        data = {
            wire: getattr(self, attr)
            for attr, wire in WIRE_NAMES.items()
        }
        data['createdAt'] = self.created_at_utc
        return data
    
    def __str__(self) -> str:
        """String representation."""
        return f"Event(id={self.id}, title={self.title}, owner_id={self.owner_id})"
