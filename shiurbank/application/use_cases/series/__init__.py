from shiurbank.application.use_cases.series.series_operations import SeriesService

__all__ = ["SeriesService"]
