"""Tests that listing output matches .expect.txt golden files."""

from pathlib import Path

import pytest

from c4layout.api import render_listing

EXAMPLES_DIR = Path(__file__).parent.parent.parent / "examples"


def find_listing_pairs() -> list[tuple[str, Path, Path]]:
    """Find all .c4 files that have a matching .expect.txt file."""
    pairs = []
    for c4_file in sorted(EXAMPLES_DIR.glob("*.c4")):
        expect_txt = EXAMPLES_DIR / f"{c4_file.stem}.expect.txt"
        if expect_txt.exists():
            pairs.append((c4_file.stem, c4_file, expect_txt))
    return pairs


LISTING_PAIRS = find_listing_pairs()


@pytest.mark.parametrize("name,c4_file,expect_txt", LISTING_PAIRS, ids=[p[0] for p in LISTING_PAIRS])
def test_listing_matches_expect(name: str, c4_file: Path, expect_txt: Path) -> None:
    """Lay out a .c4 file and compare its listing against the .expect.txt golden file."""
    src = c4_file.read_text(encoding="utf-8")
    expected = expect_txt.read_text(encoding="utf-8").rstrip("\n")
    actual = render_listing(src).rstrip("\n")
    assert actual == expected, f"listing for {name} differs from .expect.txt"


def test_examples_present() -> None:
    assert LISTING_PAIRS, f"no .c4/.expect.txt pairs under {EXAMPLES_DIR}"
