from __future__ import annotations

from app.Enums.BaseEnum import StringEnum


class CalendarMethod(StringEnum):
    """
    iTIP methods for a VCalendar (RFC 2446, section 3.2).

    PUBLISH advertises an event. REQUEST invites attendees or updates an
    existing event. REPLY answers a request with a participation status.
    ADD adds instances to an existing event and CANCEL cancels them.
    REFRESH asks the organizer to resend the latest version. COUNTER proposes
    an alternative to a REQUEST and DECLINECOUNTER rejects that proposal.
    """

    PUBLISH = 'PUBLISH'
    REQUEST = 'REQUEST'
    REPLY = 'REPLY'
    ADD = 'ADD'
    CANCEL = 'CANCEL'
    REFRESH = 'REFRESH'
    COUNTER = 'COUNTER'
    DECLINECOUNTER = 'DECLINECOUNTER'


class EventStatus(StringEnum):
    """Confirmation status of a VEvent (RFC 2445, 4.8.1.11)."""

    TENTATIVE = 'TENTATIVE'
    CONFIRMED = 'CONFIRMED'
    CANCELLED = 'CANCELLED'
