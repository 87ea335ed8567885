"""Helpers for authoring wizard configurations in Python."""
