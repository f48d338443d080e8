"""
Benchmark suite for treejson parsing and serialization.

Compares treejson against standard JSON libraries including:
- Python standard library json
- orjson (C-optimized)
- ujson (ultra-fast JSON)

Also compares the in-memory and streaming tokenizers on speed and peak
memory.
"""
