"""
High-level use cases for labelhub.

Services orchestrate a storage backend to implement the accessor contracts
(project lookup, task listing, assignment resolution, name checks). Routers
call these services instead of talking to a backend directly.
"""
