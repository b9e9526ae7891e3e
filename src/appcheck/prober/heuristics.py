"""Response body classification heuristics.

The classifier cannot know what a real application looks like, so it
positively identifies known placeholder pages and treats everything else
as genuine content. Checks run in a fixed order and the first match wins:

1. provider-specific error and soft-failure pages
2. the platform "application error" page
3. the platform "new app" welcome page
4. any HTML document
5. anything else, described by a short preview of the body

All marker checks must run before the HTML check, otherwise a placeholder
page (which is valid HTML) would be reported as a live application.
"""

from __future__ import annotations

from typing import Iterable, Optional

from appcheck.core.config import PageSignature
from appcheck.core.models import Classification, PageCategory

APPLICATION_ERROR_MARKER = b"www.herokucdn.com/error-pages/application-error.html"
WELCOME_PAGE_MARKER = b"Welcome to your new app"

HTML_OPEN_TAGS = (b"<html", b"<HTML")
HTML_BODY_TAGS = (b"<body", b"<BODY")

PREVIEW_LENGTH = 50

# Provider pages served when the name resolves but no application answers.
PLATFORM_SIGNATURES: list[PageSignature] = [
    PageSignature(
        name="Heroku no such app page",
        markers=[
            "www.herokucdn.com/error-pages/no-such-app.html",
            "There's nothing here, yet.",
            "There is no app configured at that hostname",
        ],
    ),
    PageSignature(
        name="GitHub Pages missing site",
        markers=[
            "There isn't a GitHub Pages site here.",
            "For root URLs (like http://example.com/) you must provide an index.html file",
        ],
    ),
    PageSignature(
        name="Amazon S3 missing bucket",
        markers=[
            "<Code>NoSuchBucket</Code>",
            "The specified bucket does not exist",
        ],
    ),
    PageSignature(
        name="Fastly unknown domain",
        markers=["Fastly error: unknown domain"],
    ),
    PageSignature(
        name="Shopify unavailable shop",
        markers=["Sorry, this shop is currently unavailable."],
    ),
    PageSignature(
        name="Azure App Service missing site",
        markers=[
            "404 Web Site not found.",
            "Error 404 - Web app not found.",
        ],
    ),
    PageSignature(
        name="Netlify missing site",
        markers=["Not Found - Request ID:"],
    ),
]


def is_html(body: bytes) -> bool:
    """Whether the body looks like a web page (an <html> and a <body> tag)."""
    if any(tag in body for tag in HTML_OPEN_TAGS):
        return any(tag in body for tag in HTML_BODY_TAGS)
    return False


def body_preview(body: bytes, length: int = PREVIEW_LENGTH) -> str:
    """Describe unrecognised content by quoting its first bytes."""
    size = min(length, len(body))
    text = body[:size].decode("utf-8", errors="replace")
    return f"found this (first {size} bytes): {text}..."


class ResponseClassifier:
    """
    Classifies response bodies as live content or platform placeholder pages.

    The classifier is stateless after construction and safe to share
    between concurrent probes.
    """

    def __init__(
        self,
        signatures: Optional[Iterable[PageSignature]] = None,
        preview_length: int = PREVIEW_LENGTH,
    ):
        self.signatures = list(PLATFORM_SIGNATURES)
        if signatures:
            self.signatures.extend(signatures)
        self.preview_length = preview_length

        # Encode once; bodies are matched as raw bytes.
        self._encoded = [
            (sig.name, [(marker, marker.encode("utf-8")) for marker in sig.markers])
            for sig in self.signatures
        ]

    def match_signature(self, body: bytes) -> Optional[tuple[str, str]]:
        """Return (signature name, marker) for the first signature found in body."""
        for name, markers in self._encoded:
            for marker, encoded in markers:
                if encoded in body:
                    return name, marker
        return None

    def classify(self, body: bytes) -> Classification:
        """
        Classify a response body.

        Args:
            body: Raw response body

        Returns:
            Classification with category, reachability and notes
        """
        matched = self.match_signature(body)
        if matched is not None:
            name, marker = matched
            return Classification(
                category=PageCategory.PLATFORM_ERROR,
                reachable=False,
                notes=f"{name} (matched '{marker}')",
                marker=marker,
            )

        if APPLICATION_ERROR_MARKER in body:
            return Classification(
                category=PageCategory.APPLICATION_ERROR,
                reachable=False,
                notes="Heroku application error page",
                marker=APPLICATION_ERROR_MARKER.decode(),
            )

        if WELCOME_PAGE_MARKER in body:
            return Classification(
                category=PageCategory.WELCOME_PAGE,
                reachable=False,
                notes="Heroku welcome page for a new app",
                marker=WELCOME_PAGE_MARKER.decode(),
            )

        if is_html(body):
            return Classification(
                category=PageCategory.HTML_PAGE,
                reachable=True,
                notes="HTML page",
            )

        return Classification(
            category=PageCategory.CONTENT,
            reachable=True,
            notes=body_preview(body, self.preview_length),
        )
