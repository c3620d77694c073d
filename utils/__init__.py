"""Shared helpers: records, filters, aggregation, i18n and configuration."""
