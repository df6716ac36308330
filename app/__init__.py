"""MakeupAI analysis service."""
