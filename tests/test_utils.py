import hashlib
import random

import pytest

from carver.utils import MAX_SEED, coerce_seed, compress_rows, decompress_rows


def test_coerce_seed_int_and_digits():
    assert coerce_seed(42) == 42
    assert coerce_seed(MAX_SEED + 5) == 5
    assert coerce_seed(" 123 ") == 123


def test_coerce_seed_text_is_hashed():
    expected = int.from_bytes(hashlib.sha256(b"crypt").digest()[:8], "big") % MAX_SEED
    assert coerce_seed("crypt") == expected
    assert coerce_seed("crypt") == coerce_seed("crypt")
    assert coerce_seed("crypt") != coerce_seed("tomb")


def test_coerce_seed_missing_is_random_in_range():
    rng = random.Random(1)
    for value in (None, "", "   "):
        s = coerce_seed(value, rng)
        assert 1 <= s <= 1_000_000


def test_coerce_seed_rejects_other_types():
    with pytest.raises(ValueError):
        coerce_seed(True)
    with pytest.raises(ValueError):
        coerce_seed(1.5)


def test_compress_rows_run_length():
    rows = ["##########", "#........#", "##########"]
    data = compress_rows(rows)
    assert data == "R:10#/#8.#/10#"
    assert decompress_rows(data) == rows


def test_compress_rows_falls_back_when_not_shorter():
    rows = ["#.#", ".#."]
    assert compress_rows(rows) == "#.#/.#."
    assert decompress_rows("#.#/.#.") == rows


def test_compress_rows_rejects_digits():
    with pytest.raises(ValueError):
        compress_rows(["1111"])


def test_decompress_empty_and_bad_input():
    assert decompress_rows("") == []
    with pytest.raises(ValueError):
        decompress_rows("R:3#/4")
