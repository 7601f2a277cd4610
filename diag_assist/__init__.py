"""diag-assist: classify build diagnostics and apply deterministic quick fixes."""

__version__ = "0.1.0"
