# petcare/infra/__init__.py
"""Инфраструктура: PostgreSQL, Redis."""
