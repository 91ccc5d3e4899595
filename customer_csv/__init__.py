"""Customer CSV parser.

Parses three CSV layouts (TypeA, TypeB, TypeC) into a normalized
CustomerRecord with validation, normalization, optional phone enrichment and
structured error collection.
"""

__version__ = "0.1.0"
