"""
Pydantic schema definitions for records and API payloads.

Each domain (movies, customers, rentals) defines its own models.  The
rental models double as the records exchanged with the storage layer,
so the rental core never sees raw database rows.
"""
