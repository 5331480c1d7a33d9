"""Test doubles for niri-single-output tests."""
