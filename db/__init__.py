"""
db/ - Database Layer
====================
Handles the PostgreSQL connection pool and the translation of driver
errors into gateway errors.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
