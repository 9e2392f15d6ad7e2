"""Utility functions and tools used across the cosmictag package.

**Core Utilities:**
- `config`: Configuration file parsing and command-line overrides
- `factory`: Generic factory pattern implementations
- `logger`: Logging utilities and configuration
- `globals`: Global constants (default margins, tag scores)
- `enums`: Enumerated cosmic tag types

**Tagging Algorithms:**
- `tagging`: Axis selection, out-of-time hit check and extent projection
- `boundary`: Detector boundary proximity flags and decision table

**Performance:**
- `stopwatch`: Wall/CPU timing utilities
"""
