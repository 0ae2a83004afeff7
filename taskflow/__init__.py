"""Taskflow: task-dependency workflow engine."""
