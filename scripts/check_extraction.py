import sys
from pathlib import Path

# -------------------------------------------------------------------------
# Ensure the repository root (the folder that contains the top-level
# `services` package) is on the import search path when run as a script.
# -------------------------------------------------------------------------
repo_root = Path(__file__).resolve().parents[1]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from services.extractor import ContentExtractor, parse_document


def main(paths) -> None:
    """Run the extraction cascade over saved HTML files and report each verdict."""
    extractor = ContentExtractor()
    for path in paths:
        document = parse_document(Path(path).read_bytes())
        outcome = extractor.extract(document)
        if outcome.ok:
            content = outcome.content
            print(f"✅ {path}: {len(content)} chars via '{outcome.result.strategy}'")
            print("   " + content[:200].replace("\n", " ") + "...")
        else:
            print(f"❌ {path}: {outcome.reason.value} (HTTP {outcome.http_status})")


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: check_extraction.py PAGE.html [PAGE.html ...]")
        sys.exit(2)
    main(sys.argv[1:])
