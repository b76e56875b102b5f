"""GymAPI: gym management REST service with AI workout suggestions."""

__version__ = "1.0.0"
