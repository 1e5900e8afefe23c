"""
Pydantic schemas for Event
"""
from typing import Any, Dict, Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class EventFields(BaseModel):
    """Fields a client may set on an event"""
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    title: str = Field(..., min_length=1, max_length=200, description="Event title")
    short_description: Optional[str] = Field(
        None,
        validation_alias=AliasChoices('shortDesc', 'shortDescription', 'short_description'),
        description="One-line summary"
    )
    full_description: Optional[str] = Field(
        None,
        validation_alias=AliasChoices('fullDesc', 'fullDescription', 'full_description'),
        description="Long-form description"
    )
    date: Optional[str] = Field(None, description="Calendar date, e.g. 2026-05-01")
    time: Optional[str] = Field(None, description="Time of day, e.g. 19:30")
    location: Optional[str] = None
    category: Optional[str] = None
    image: Optional[str] = Field(None, description="Absolute URL or path under the image folder")
    price: float = Field(..., ge=0, allow_inf_nan=False, description="Ticket price; numeric strings are coerced")
    priority: Optional[str] = None

    @field_validator('price', mode='before')
    @classmethod
    def reject_boolean_price(cls, value: Any) -> Any:
        """JSON true/false would otherwise pass as 1.0/0.0"""
        if isinstance(value, bool):
            raise ValueError("price must be a number")
        return value

    def to_model_fields(self) -> Dict[str, Any]:
        """Values keyed by Event model attribute names"""
        return self.model_dump(exclude={'user_id'})


class EventDraft(EventFields):
    """Schema for creating an event"""
    user_id: Optional[str] = Field(
        None,
        validation_alias=AliasChoices('userId', 'user_id'),
        description="Creating user; must match the caller identity when given"
    )


class EventUpdate(EventFields):
    """Schema for replacing an event; id, userId and createdAt are ignored"""


def serialize_event(record: Dict[str, Any]) -> Dict[str, Any]:
    """Render a store record for the wire: id and createdAt become strings."""
    created_at = record.get('createdAt')
    return {
        **record,
        'id': str(record['id']),
        'createdAt': created_at.isoformat() if created_at else None,
    }
