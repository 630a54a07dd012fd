"""
Services module for Charity Finder Backend.

Contains business logic and external service integrations.
"""
