"""
kivtest - Test Suite Package.

Unit tests for the orchestrator, run entirely against the in-memory and
filesystem backends plus a mocked CouchDB HTTP session.
"""
