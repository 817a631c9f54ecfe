"""Application package for the course-management sample backend.

This package exposes the controller, repository and model modules used
by the FastAPI application. It is intentionally lightweight; individual
modules contain the concrete implementations and documentation.
"""
