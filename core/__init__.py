"""Dependency-free helpers shared by models and services."""
