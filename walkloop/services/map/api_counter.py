"""
API Call Counter - Simple call limiting implementation
"""
from datetime import date
from typing import Dict, Optional
from walkloop.config import settings


class APICounter:
    """API call counter"""

    def __init__(self, max_calls_per_day: Optional[int] = None):
        self.max_calls_per_day = (
            max_calls_per_day
            if max_calls_per_day is not None
            else settings.max_api_calls_per_day
        )
        self.call_count: Dict[str, int] = {}
        self.current_date = date.today()

    def can_make_call(self) -> bool:
        """Check if API can be called"""
        today = date.today()

        # Reset counter if date changes
        if today != self.current_date:
            self.call_count.clear()
            self.current_date = today

        return self.call_count.get(today.isoformat(), 0) < self.max_calls_per_day

    def record_call(self) -> None:
        """Record one API call"""
        today_key = date.today().isoformat()
        self.call_count[today_key] = self.call_count.get(today_key, 0) + 1

    def get_remaining_calls(self) -> int:
        """Get remaining call count"""
        current_calls = self.call_count.get(date.today().isoformat(), 0)
        return max(0, self.max_calls_per_day - current_calls)


# Global counter instance
api_counter = APICounter()
