from .seeds import MAX_SEED, coerce_seed  # noqa: F401
from .tile_compress import compress_rows, decompress_rows  # noqa: F401

__all__ = ["coerce_seed", "MAX_SEED", "compress_rows", "decompress_rows"]
