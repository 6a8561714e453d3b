"""Shared building blocks: pagination, configuration, logging, errors, repositories."""
