# ABOUTME: Core package: the scan workflow that ties verification, ranking, and collaborators.
# ABOUTME: Exports ScanWorkflow and its state enumeration.

from pressmatch.core.workflow import PriceOutcome, ScanState, ScanWorkflow

__all__ = ["PriceOutcome", "ScanState", "ScanWorkflow"]
