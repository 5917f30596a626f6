"""
Cleanup Agent — removes stray test databases left by earlier runs.

Cleanup is an explicit maintenance action, so the first failure aborts it
instead of being tolerated.
"""

from __future__ import annotations

from typing import List

from loguru import logger

from kivtest.drivers import BackendClient
from kivtest.errors import BackendError, DeleteFailed, ListFailed
from kivtest.suites import TEST_DB_PREFIX, is_test_db


class CleanupAgent:
    """
    Deletes every database carrying the reserved test prefix.

    Usage::

        agent = CleanupAgent(admin_client, verbose=True)
        deleted = agent.cleanup()
    """

    def __init__(self, client: BackendClient, verbose: bool = False) -> None:
        self._client = client
        self._verbose = verbose

    def find_test_dbs(self) -> List[str]:
        """
        List the databases that carry the test prefix.

        Raises:
            ListFailed: If the backend cannot list its databases.
        """
        try:
            all_dbs = self._client.all_dbs()
        except BackendError as e:
            raise ListFailed(f"Unable to list databases: {e}") from e
        return [name for name in all_dbs if is_test_db(name)]

    def cleanup(self) -> int:
        """
        Delete all test databases.

        Returns:
            Number of databases deleted.

        Raises:
            ListFailed: If the database list cannot be fetched.
            DeleteFailed: On the first database that cannot be deleted.
        """
        matches = self.find_test_dbs()
        logger.info(f"Found {len(matches)} database(s) with prefix '{TEST_DB_PREFIX}'")

        count = 0
        for name in matches:
            if self._verbose:
                logger.info(f"\t--- Deleting {name}")
            try:
                self._client.destroy_db(name)
            except BackendError as e:
                raise DeleteFailed(
                    f"Failed to delete {name} after {count} deletion(s): {e}",
                    db_name=name,
                ) from e
            count += 1

        logger.info(f"Deleted {count} test databases")
        return count
