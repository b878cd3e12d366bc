"""Restaurant Manager package.

Feature modules (users, permissions, vacation, ...) sit behind a thin Flask
controller layer; business rules live in services and pure helpers, storage
behind repository protocols.
"""
