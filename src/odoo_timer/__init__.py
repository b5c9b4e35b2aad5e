# src/odoo_timer/__init__.py

"""Odoo task list client with a small console front end."""

__version__ = "0.1.0"
