"""
Database module for CampusOps

Contains seed data and the bootstrap admin helper.
"""
from app.db.seed_data import seed_all, clear_all, ensure_bootstrap_admin

__all__ = ["seed_all", "clear_all", "ensure_bootstrap_admin"]
