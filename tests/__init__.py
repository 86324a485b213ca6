"""
Test suite for the Clinic Portal.

Contains unit and integration tests for the portal's pages, components and
backend service wrappers.
"""
import os

# Set environment for testing
os.environ["TESTING"] = "1"
