from .downloader import DistributionDownloader

__all__ = ["DistributionDownloader"]
