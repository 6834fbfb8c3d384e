"""Core module for the knockout application."""

from .types import FirestoreDocument

__all__ = ["FirestoreDocument"]
