"""
ProdOps Kernel

Shared plumbing for the production-management data core:
- Structured JSON logging with request-scoped context
- Typed exception hierarchy with machine-readable codes
- Injectable clock for deterministic, replayable calculations
- Decimal helpers for cent-precision money arithmetic
"""

__version__ = "0.1.0"
