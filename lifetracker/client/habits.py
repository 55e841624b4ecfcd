"""Habit queries and mutations."""

from __future__ import annotations

from lifetracker.client.resources import ResourceHooks


class HabitHooks(ResourceHooks):
    resource = "habits"
    label = "Habit"
    path = "/api/habits"
    item_key = "habit"
