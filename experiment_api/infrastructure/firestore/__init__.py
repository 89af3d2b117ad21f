"""Firestore repository implementations."""

from .experiment_repository import FirestoreExperimentRepository

__all__ = ["FirestoreExperimentRepository"]
