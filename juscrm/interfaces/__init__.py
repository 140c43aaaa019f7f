"""Delivery adapters: HTTP API and the notification client."""
