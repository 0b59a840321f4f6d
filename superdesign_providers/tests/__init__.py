"""Test suite for the providers base layer."""
