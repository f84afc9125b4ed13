"""
Utilities for the Chat Server

This module contains utility functions for validating inbound payloads.
"""

from .validation import clean_display_name, clean_room_id, require_string_field

__all__ = [
    "clean_display_name",
    "clean_room_id",
    "require_string_field",
]
