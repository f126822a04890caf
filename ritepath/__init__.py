# type: ignore
# pyright: reportMissingImports=false, reportGeneralTypeErrors=false
"""RitePath case & staff notification service."""
