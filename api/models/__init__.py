# Models module
from .crawl_job import CrawlJob, CrawlJobStatus, TERMINAL_STATUSES
from .news import NewsModel

__all__ = ["CrawlJob", "CrawlJobStatus", "TERMINAL_STATUSES", "NewsModel"]
