"""Cleaner-booking matchmaking and time-placement engine."""
