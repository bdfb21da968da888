"""
Application layer for the coaching schedule API.

This package contains:
- ports/: Repository interfaces (what the services need from storage)
- exceptions: The error taxonomy shared by services and infrastructure
"""
