"""Persistence: SQLAlchemy engine, models, repositories, unit of work."""
