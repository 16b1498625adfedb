"""Test suite for the WebXR study backend."""
