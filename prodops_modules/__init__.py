"""
ProdOps domain modules.

Each module keeps pure calculations in ``helpers`` and binds them to a
clock and configuration in ``service``.
"""
