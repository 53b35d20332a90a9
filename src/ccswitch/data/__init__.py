"""Data layer - models, repositories and database sessions."""
