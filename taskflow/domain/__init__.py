"""Domain layer: enums, exceptions, dependency-graph rules.

Pure domain logic; no ORM or persistence concerns.
"""
