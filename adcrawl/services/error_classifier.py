import logging

from adcrawl.domain.failure import Failure, FailureKind
from adcrawl.exceptions import NavigationFailure, ParseFailure

logger = logging.getLogger(__name__)


class ErrorClassifier:
    """Collapse any crawl exception into a navigation or parse `Failure`.

    There is no finer taxonomy: a 404 page, a network timeout and a crashed
    tab are all navigation failures.
    """

    def classify(self, exc: Exception, url: str) -> Failure:
        if isinstance(exc, ParseFailure):
            return self._build(FailureKind.PARSE, exc.url, exc.reason, exc.field)
        if isinstance(exc, NavigationFailure):
            return self._build(FailureKind.NAVIGATION, exc.url, self._detail(exc.original))
        logger.debug("Classifying unexpected %s at %s as navigation failure", type(exc).__name__, url)
        return self._build(FailureKind.NAVIGATION, url, self._detail(exc))

    def describe(self, kind: FailureKind, url: str, detail: str, field=None) -> str:
        if kind is FailureKind.PARSE:
            target = f"{field} of {url}" if field else url
            return f"failure to parse {target}: {detail}"
        return f"navigation failure at {url}: {detail}"

    def _build(self, kind: FailureKind, url: str, detail: str, field=None) -> Failure:
        return Failure(
            kind=kind,
            url=url,
            detail=detail,
            field=field,
            message=self.describe(kind, url, detail, field),
        )

    @staticmethod
    def _detail(exc: Exception) -> str:
        return str(exc) or type(exc).__name__
