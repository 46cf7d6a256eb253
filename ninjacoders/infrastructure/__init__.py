"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer: the SQL data store, SMTP mail,
Jinja2 receipt rendering, and local photo storage.
"""
