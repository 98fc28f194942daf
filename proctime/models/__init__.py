"""Data models for proctime."""
