"""Persistent GUI models."""
