"""
Compatibility Detector — maps a backend's self-reported identity to a suite.

Only consulted when the caller asks for the ``auto`` pseudo-suite. The
mapping is an exact-literal lookup table; unknown vendors fail closed.
"""

from __future__ import annotations

from typing import Dict, Optional, Union

from loguru import logger

from kivtest.drivers import BackendClient
from kivtest.errors import BackendError, UnsupportedBackend
from kivtest.suites import (
    SUITE_CLOUDANT,
    SUITE_COUCH16,
    SUITE_COUCH20,
    SUITE_KIVIK_FS,
    SUITE_KIVIK_MEMORY,
    SUITE_POUCH_LOCAL,
)

# A vendor maps either straight to a suite, or to {version: suite} where the
# None key is the fallback for versions not listed.
VendorRule = Union[str, Dict[Optional[str], str]]

VENDOR_SUITES: Dict[str, VendorRule] = {
    "PouchDB": SUITE_POUCH_LOCAL,
    "IBM Cloudant": SUITE_CLOUDANT,
    "The Apache Software Foundation": {
        "2.0": SUITE_COUCH20,
        None: SUITE_COUCH16,
    },
    "Kivik Memory Adaptor": SUITE_KIVIK_MEMORY,
    "Kivik Filesystem Adaptor": SUITE_KIVIK_FS,
}


def suite_for(vendor: str, version: str) -> str:
    """
    Look up the suite for a vendor/version pair.

    Raises:
        UnsupportedBackend: If the vendor is not in VENDOR_SUITES.
    """
    rule = VENDOR_SUITES.get(vendor)
    if rule is None:
        raise UnsupportedBackend(
            f"Unable to automatically determine the proper test suite "
            f"(vendor={vendor!r}, version={version!r})"
        )
    if isinstance(rule, str):
        return rule
    return rule.get(version, rule[None])


class CompatibilityDetector:
    """Resolves the suite for a live backend connection."""

    def detect(self, client: BackendClient) -> str:
        """
        Query the backend's server info and map it to a suite.

        Args:
            client: A connected (normally privileged) client.

        Returns:
            The detected suite identifier.

        Raises:
            UnsupportedBackend: If the vendor is unknown or the server info
                                cannot be retrieved.
        """
        logger.info("Detecting target service compatibility...")
        try:
            info = client.server_info()
        except BackendError as e:
            raise UnsupportedBackend(f"Unable to query server info: {e}") from e

        suite = suite_for(info.vendor, info.version)
        logger.info(
            f"Detected suite '{suite}' (vendor={info.vendor!r}, version={info.version!r})"
        )
        return suite
