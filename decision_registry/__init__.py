"""Decision registry module.

This module keeps an in-memory catalog of tags and questions, validates that
questions only use registered tags, and records each question's decision
exactly once.
"""
