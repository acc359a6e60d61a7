"""
Pytest configuration for Django tests with SQLite.

Uses SQLite in-memory database for fast testing - no external database required.
"""

import os

# Set test settings module before importing Django
os.environ["DJANGO_SETTINGS_MODULE"] = "phoneme.settings_test"
