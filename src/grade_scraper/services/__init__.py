from .scrape_service import (
	GradeScrapeService,
	ScrapeResult,
	ScrapeStageError,
	run_scrape,
)

__all__ = [
	"GradeScrapeService",
	"ScrapeResult",
	"ScrapeStageError",
	"run_scrape",
]
