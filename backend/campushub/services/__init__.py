"""
CampusHub Backend — Services Layer
====================================

What:  Business logic between the routes (HTTP) and the database.

Service Inventory:
    - ProjectService: project listings; owner stamped from the session
    - ClubService:    club listings, poster validation and storage
    - ProfileService: the caller's own profile plus the public directory

Services receive the request's AsyncSession and, for writes, the session
Principal. They never read cookies or request bodies themselves.
"""
