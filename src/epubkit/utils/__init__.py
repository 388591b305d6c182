"""Shared utilities for epubkit."""
