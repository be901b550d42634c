"""Notification infrastructure layer."""
