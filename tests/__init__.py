"""Test suite for the fake-cucumber package.

This package contains unit and integration tests validating step
matching, match resolution, action execution, and the protocol messages
produced by the execution core.
"""
