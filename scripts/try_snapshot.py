#!/usr/bin/env python3
"""Quick check of extractor selectors against a saved page.

Runs the matching extractor over a snapshot without touching the store and
prints which layout it committed to plus the first few records.

Run:
  poetry run python scripts/try_snapshot.py page.html https://acme.activehosted.com/app/deals
  poetry run python scripts/try_snapshot.py page.html https://acme.activehosted.com/app/deals all
"""

import logging
import sys

from ac_extractor.detector import classify
from ac_extractor.dom import LiveDocument
from ac_extractor.extractors import ExtractorRegistry


def main() -> None:
    if len(sys.argv) < 3:
        print(__doc__)
        sys.exit(2)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    path, url = sys.argv[1], sys.argv[2]
    limit = None if len(sys.argv) > 3 and sys.argv[3] == "all" else 5

    kind = classify(url)
    if kind is None:
        print(f"Not a contacts, deals or tasks URL: {url}")
        sys.exit(1)

    document = LiveDocument.from_file(path, url=url)
    result = ExtractorRegistry.get(kind).run(document)
    print(f"{kind.value}: layout={result.strategy or 'none'} records={len(result.records)} "
          f"failed={len(result.failures)} skipped={result.skipped}")
    for i, record in enumerate(result.records[:limit], 1):
        print(f"  {i}. [{record.id}] {record.label}")
    for failure in result.failures:
        print(f"  ! {failure}")
    if result.records:
        print("\n✅ Layout recognized.")
    else:
        print("\n⚠️ No records. The page may not have rendered, or its markup changed.")


if __name__ == "__main__":
    main()
