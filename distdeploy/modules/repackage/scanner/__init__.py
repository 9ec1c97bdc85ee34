from .scanner import DistributionScanner

__all__ = ["DistributionScanner"]
