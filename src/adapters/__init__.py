"""Adaptadores de I/O (HTTP contra Jira, exportación JSON)."""
