"""
Service layer abstraction.

Services encapsulate business logic and talk to the record store, so
API handlers never touch the store file directly.
"""
