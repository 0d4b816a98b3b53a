"""Shared cross-cutting helpers (datetimes, ids, logging). No business logic."""
