"""
Driver Factory — creates the appropriate backend client for a driver name.
"""

from __future__ import annotations

from loguru import logger

from kivtest.drivers.base import BackendClient

SUPPORTED_DRIVERS = ("couch", "memory", "fs")


def create_client(driver: str, dsn: str) -> BackendClient:
    """
    Factory function to create the correct backend client.

    Args:
        driver: One of "couch", "memory", "fs".
        dsn: Connection string for the target backend.

    Returns:
        An unconnected BackendClient instance.

    Raises:
        ValueError: If the driver is unknown or not available in Python.
    """
    if driver == "couch":
        from kivtest.drivers.couch_driver import CouchClient
        logger.debug("Creating CouchClient")
        return CouchClient(dsn)

    if driver == "memory":
        from kivtest.drivers.memory_driver import MemoryClient
        logger.debug("Creating MemoryClient")
        return MemoryClient(dsn)

    if driver == "fs":
        from kivtest.drivers.fs_driver import FilesystemClient
        logger.debug("Creating FilesystemClient")
        return FilesystemClient(dsn)

    raise ValueError(
        f"Unknown driver '{driver}'. "
        f"Supported drivers: {list(SUPPORTED_DRIVERS)}"
    )
