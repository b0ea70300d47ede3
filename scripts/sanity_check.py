"""Minimal sanity checks against a running Kupo instance."""

from __future__ import annotations

import asyncio
import os
import sys

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from kupo_client.config import default_config  # noqa: E402
from kupo_client.kupo_api import NOT_MODIFIED, KupoClient  # noqa: E402
from kupo_client.logging_config import configure_logging  # noqa: E402

# Pattern to query matches for; defaults to everything the indexer tracks.
SAMPLE_PATTERN = os.getenv("KUPO_SAMPLE_PATTERN", "*")
# Optional lookups, skipped when unset.
SAMPLE_SCRIPT_HASH = os.getenv("KUPO_SAMPLE_SCRIPT_HASH")
SAMPLE_DATUM_HASH = os.getenv("KUPO_SAMPLE_DATUM_HASH")
SAMPLE_METADATA_SLOT = os.getenv("KUPO_SAMPLE_METADATA_SLOT")


async def main() -> None:
    configure_logging(default_config)
    async with KupoClient(default_config) as client:
        print("Kupo URL:", default_config.base_url)
        print("Patterns:", await client.get_all_patterns())

        matches = await client.get_matches(SAMPLE_PATTERN)
        unspent = [match for match in matches if not match.is_spent]
        print(f"Matches for {SAMPLE_PATTERN!r}: {len(matches)} ({len(unspent)} unspent)")
        if matches:
            print("First match:", matches[0])

        if SAMPLE_METADATA_SLOT:
            metadata = await client.get_metadata(int(SAMPLE_METADATA_SLOT))
            if metadata is NOT_MODIFIED:
                print("Metadata: not modified")
            else:
                print("Metadata hashes:", [item.hash for item in metadata])
        if SAMPLE_SCRIPT_HASH:
            print("Script:", await client.get_script_by_hash(SAMPLE_SCRIPT_HASH))
        if SAMPLE_DATUM_HASH:
            print("Datum:", await client.get_datum_by_hash(SAMPLE_DATUM_HASH))


if __name__ == "__main__":
    asyncio.run(main())
