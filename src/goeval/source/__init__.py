"""Snippet source processing.

Turns a bare Go snippet into a complete program text.

Pipeline: expand_aliases() → partition() → assemble_program()
"""

from goeval.source.aliases import expand_aliases
from goeval.source.assembler import (
    FORMAT_PACKAGE,
    assemble_program,
    has_package_clause,
)
from goeval.source.chunker import Chunk, ChunkKind, SourceReader, chunk_source, iter_chunks
from goeval.source.imports import STDLIB_PACKAGES, infer_packages, short_name
from goeval.source.partition import Partition, partition

__all__ = [
    "expand_aliases",
    "FORMAT_PACKAGE",
    "assemble_program",
    "has_package_clause",
    "Chunk",
    "ChunkKind",
    "SourceReader",
    "chunk_source",
    "iter_chunks",
    "STDLIB_PACKAGES",
    "infer_packages",
    "short_name",
    "Partition",
    "partition",
]
