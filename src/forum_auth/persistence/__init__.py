"""Persistence implementations for forum_auth.

This package contains database-specific implementations of the
repository interfaces defined in forum_auth.domain.user and
forum_auth.repositories.

Usage:
    from forum_auth.persistence.sqlalchemy import (
        SessionRepositorySQLAlchemy,
        UserRepositorySQLAlchemy,
        Base,
    )
"""
