"""Book-now control shown on the public event page."""

from dataclasses import dataclass

@dataclass
class BookingControl:
    """
    One-way booking toggle.

    Booking only changes what the visitor sees; nothing is sent to the API
    or stored anywhere, and a booked control cannot be un-booked.
    """
    event_id: str
    event_title: str
    booked: bool = False

    def book(self) -> None:
        self.booked = True

    @property
    def disabled(self) -> bool:
        return self.booked

    @property
    def label(self) -> str:
        if self.booked:
            return "Booked ✓"
        return f'Book Now for "{self.event_title}"'
