from __future__ import annotations

import os
from typing import Dict

# Default Product Id
#
# Used as the "PRODID" of a VCalendar that does not set its own. PRODID
# identifies the product that created the calendar object and should be
# globally unique.
product_id: str = os.getenv('CALENDAR_PRODUCT_ID', '-//vendor//calendar v1.0//EN')

# Line terminators accepted for CALENDAR_LINE_ENDING
line_endings: Dict[str, str] = {
    'crlf': '\r\n',
    'lf': '\n',
}

line_ending: str = line_endings.get(os.getenv('CALENDAR_LINE_ENDING', 'crlf').lower(), '\r\n')
