"""Notification event routing and rate-limiting engine."""
