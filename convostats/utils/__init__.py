"""
Utility modules for ConvoStats.

Cross-cutting concerns:
- Storage: atomic file writes for report persistence
"""
