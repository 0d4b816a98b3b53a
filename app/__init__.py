"""Taskboard backend."""
