"""Persistence core for scout groups, events, scouts and registrations."""
