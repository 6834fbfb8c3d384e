"""Shared test configuration."""

from .mock_utils import patch_mockfirestore

patch_mockfirestore()
