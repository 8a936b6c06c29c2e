"""
Tests package - test suite for the secret access webhook.

Contains:
- unit/: Unit tests for individual components
- fixtures/: Sample pods, admission reviews and a recording access checker
"""
