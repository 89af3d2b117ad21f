"""Repository interfaces for the domain layer."""

from .experiment_repository import ExperimentRepositoryInterface

__all__ = ["ExperimentRepositoryInterface"]
