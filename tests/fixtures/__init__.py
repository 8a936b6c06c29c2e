"""Test data and fakes for the webhook tests."""
