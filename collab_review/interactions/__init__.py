"""Inbound interaction models, response correlation and routing."""
