"""
Application Modules.

- backend/: Notes API, database, configuration, logging
"""
