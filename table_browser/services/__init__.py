"""
Service layer: document API client, per-table fetching, export and session context.
"""
