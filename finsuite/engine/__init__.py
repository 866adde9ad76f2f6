"""Aggregation and chart adaptation."""
