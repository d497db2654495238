"""Smoke runner that drives a live Math API over HTTP."""
