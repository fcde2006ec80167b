"""Wizard page widgets."""
