"""Concurrent HTTP prober for hosted application targets."""

from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Optional

import httpx

from appcheck.core.config import Settings
from appcheck.core.exceptions import ProbeError
from appcheck.core.logging import get_logger
from appcheck.core.models import PageCategory, ProbeReport, ProbeResult
from appcheck.prober.heuristics import ResponseClassifier

logger = get_logger("appcheck.prober")

EOF_MARKER = "EOF"

# Substrings of TLS verification failures from OpenSSL and from Go-style
# x509 messages.
CERTIFICATE_MARKERS = (
    "CERTIFICATE_VERIFY_FAILED",
    "certificate verify failed",
    "certificate is valid for",
    "x509: certificate",
)

# Certificate failures are reported with this status rather than the
# sentinel. See DESIGN.md.
CERTIFICATE_ERROR_STATUS = 200


def describe_error(error: BaseException) -> str:
    """Render an exception as text, falling back to its type name."""
    message = str(error).strip()
    return message or type(error).__name__


def classify_transport_error(message: str) -> PageCategory:
    """Map a transport error message to a failure category."""
    if EOF_MARKER in message:
        return PageCategory.CONNECTION_EOF
    if any(marker in message for marker in CERTIFICATE_MARKERS):
        return PageCategory.CERTIFICATE_ERROR
    return PageCategory.FETCH_ERROR


class ProberEngine:
    """
    Probes targets concurrently and classifies what each one serves.

    Every target gets its own task and the run is not bounded unless
    ``prober.concurrency`` is set. Each task delivers exactly one
    ProbeResult to a queue sized to the number of targets; the collector
    waits for every task before draining the queue, so reports contain one
    row per target in completion order.
    """

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.settings = settings
        self.transport = transport
        self.classifier = ResponseClassifier(
            settings.classifier.extra_signatures,
            preview_length=settings.prober.preview_length,
        )

    @property
    def sentinel_status(self) -> int:
        return self.settings.prober.sentinel_status

    def _client(self) -> httpx.AsyncClient:
        prober = self.settings.prober
        return httpx.AsyncClient(
            timeout=httpx.Timeout(prober.timeout),
            follow_redirects=prober.follow_redirects,
            max_redirects=prober.max_redirects,
            verify=prober.verify_ssl,
            limits=httpx.Limits(
                max_connections=prober.concurrency,
                max_keepalive_connections=prober.concurrency,
            ),
            headers={"User-Agent": prober.user_agent},
            transport=self.transport,
        )

    async def probe_targets(self, targets: list[str]) -> ProbeReport:
        """
        Probe every target and collect the results.

        Args:
            targets: Target identifiers; blanks and duplicates are probed
                like any other entry

        Returns:
            ProbeReport with one result per target, in completion order
        """
        report = ProbeReport()

        if not targets:
            report.finished_at = datetime.now(timezone.utc)
            return report

        logger.info("probe_run_started", targets=len(targets))

        queue: asyncio.Queue[ProbeResult] = asyncio.Queue(maxsize=len(targets))
        concurrency = self.settings.prober.concurrency
        semaphore = asyncio.Semaphore(concurrency) if concurrency else None

        async with self._client() as client:
            workers = [
                self._probe_one(client, target, queue, semaphore)
                for target in targets
            ]

            logger.info("probe_waiting", workers=len(workers))
            await asyncio.gather(*workers)

        logger.debug("probe_queue_depth", depth=queue.qsize())

        try:
            report.results = [queue.get_nowait() for _ in targets]
        except asyncio.QueueEmpty as e:
            raise ProbeError(
                f"Collected fewer results than the {len(targets)} targets probed"
            ) from e
        report.finished_at = datetime.now(timezone.utc)

        logger.info(
            "probe_run_complete",
            total=report.total,
            reachable=report.reachable_count,
            unreachable=report.unreachable_count,
            duration_seconds=round(report.duration_seconds, 3),
        )
        return report

    def probe_targets_sync(self, targets: list[str]) -> ProbeReport:
        """Run probe_targets on a fresh event loop."""
        return asyncio.run(self.probe_targets(targets))

    async def _probe_one(
        self,
        client: httpx.AsyncClient,
        target: str,
        queue: asyncio.Queue[ProbeResult],
        semaphore: Optional[asyncio.Semaphore] = None,
    ) -> None:
        """Probe one target and put exactly one result on the queue."""
        result: Optional[ProbeResult] = None
        try:
            if semaphore is None:
                result = await self.probe(client, target)
            else:
                async with semaphore:
                    result = await self.probe(client, target)
        finally:
            if result is None:
                result = self._failure(
                    target,
                    PageCategory.FETCH_ERROR,
                    "probe aborted before a result was produced",
                )
            queue.put_nowait(result)

    async def probe(self, client: httpx.AsyncClient, target: str) -> ProbeResult:
        """
        Fetch and classify a single target.

        Never raises for network failures; they are returned as
        unreachable results.
        """
        if not target:
            return self._failure(
                target, PageCategory.NO_TARGET, "no site name was provided"
            )

        url = self.settings.target_url(target)

        try:
            async with client.stream("GET", url) as response:
                try:
                    body = await response.aread()
                except httpx.HTTPError as e:
                    logger.error(
                        "probe_read_failed",
                        target=target,
                        url=url,
                        error=describe_error(e),
                    )
                    return self._failure(
                        target,
                        PageCategory.READ_ERROR,
                        f"error reading the site response: {describe_error(e)}",
                    )

                classification = self.classifier.classify(body)
                return ProbeResult.from_classification(
                    target, response.status_code, classification
                )

        except Exception as e:
            return self._transport_failure(target, url, e)

    def _transport_failure(self, target: str, url: str, error: Exception) -> ProbeResult:
        message = describe_error(error)
        category = classify_transport_error(message)

        logger.error(
            "probe_fetch_failed",
            target=target,
            url=url,
            error=message,
            category=category.value,
        )

        if category is PageCategory.CONNECTION_EOF:
            notes = f"connection closed before a response (EOF): {message}"
            status = self.sentinel_status
        elif category is PageCategory.CERTIFICATE_ERROR:
            notes = f"certificate error: {message}"
            status = CERTIFICATE_ERROR_STATUS
        else:
            notes = f"error getting site response: {message}"
            status = self.sentinel_status

        return ProbeResult(
            target=target,
            reachable=False,
            status=status,
            notes=notes,
            category=category,
        )

    def _failure(self, target: str, category: PageCategory, notes: str) -> ProbeResult:
        return ProbeResult(
            target=target,
            reachable=False,
            status=self.sentinel_status,
            notes=notes,
            category=category,
        )
