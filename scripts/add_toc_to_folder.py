#!/usr/bin/env python3
"""
Add a ToC page to every bookmarked PDF in example_pdfs/, writing to with_toc/<name>.pdf.

Run from repo root:
    python scripts/add_toc_to_folder.py
"""
from pathlib import Path

from toc_maker import add_toc_to_pdf

REPO_ROOT = Path(__file__).resolve().parent.parent
EXAMPLE_PDFS = REPO_ROOT / "example_pdfs"
OUTPUT_DIR = REPO_ROOT / "with_toc"

# Optional: insertion page per filename (default: before page 2)
INSERT_AT_OVERRIDES = {
    "handbook.pdf": 5,
}


def main() -> None:
    if not EXAMPLE_PDFS.is_dir():
        print(f"Missing {EXAMPLE_PDFS}")
        return
    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    pdfs = sorted(EXAMPLE_PDFS.glob("*.pdf"))
    if not pdfs:
        print(f"No PDFs in {EXAMPLE_PDFS}")
        return
    for pdf in pdfs:
        out = OUTPUT_DIR / pdf.name
        print(f"Adding ToC to {pdf.name} → {out} ...")
        result = add_toc_to_pdf(pdf, None, out, insert_at=INSERT_AT_OVERRIDES.get(pdf.name))
        if result.success:
            print(f"  {result.message}")
        else:
            print(f"  Error: {result.message}")


if __name__ == "__main__":
    main()
