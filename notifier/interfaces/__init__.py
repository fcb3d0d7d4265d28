"""Adapters exposing the notifier to the outside world."""
