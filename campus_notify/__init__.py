"""Notification targeting and delivery service for the student portal."""
