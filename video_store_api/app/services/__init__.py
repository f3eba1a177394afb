"""
Service layer abstraction.

Each service encapsulates business logic for a domain.  The rental
service works against a ``RentalStore`` so it can be exercised without
the HTTP layer; the movie and customer services read the database
directly.
"""
