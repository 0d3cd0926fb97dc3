"""Stateful scheduling flows built on the Porefect API."""
