"""Delivery mechanisms exposing the notification engine."""
