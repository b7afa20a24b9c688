"""
schemadoc Metadata Publisher

This module attaches the rendered descriptor to a document. The document is
passed in explicitly as a MetadataSink, anything that can append an inert
data node to its metadata region (the HTML <head>).

Usage Pattern:
    1. Wrap the target document in a sink (HtmlDocumentSink for HTML text)
    2. Call MetadataPublisher().publish(sink)
    3. Read the updated document back from the sink

Behavior Notes:
    - Each publish() call appends one node. Publishing twice into the same
      document produces two identical nodes; nothing guards against it.
    - publish() raises EnvironmentUnavailable when there is no document or
      the document has no metadata region. publish_safely() records the
      failure as a warning instead, for callers that must keep rendering.
"""

import re
from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from bs4 import BeautifulSoup, Tag, UnicodeDammit

from schemadoc.renderer import PublishOptions, render_data_element, serialize_descriptor
from schemadoc.schema import DescriptorRecord, build_descriptor

_HEAD_CLOSE = re.compile(r"</head\s*>", re.IGNORECASE)


class SchemadocError(Exception):
    """Base class for schemadoc errors."""


class EnvironmentUnavailable(SchemadocError):
    """Raised when there is no document metadata region to publish into."""


class MetadataSink(ABC):
    """
    Abstract target for published data nodes.

    Subclasses must implement:
        - has_metadata_region(): whether nodes can be appended at all
        - append_data_node(): append one inert node and return it

    Attributes:
        name: Human-readable identifier used in warnings
    """

    name: str = "Base"

    @abstractmethod
    def has_metadata_region(self) -> bool:
        """Return True if the sink can accept new data nodes."""

    @abstractmethod
    def append_data_node(self, content_type: str, payload: str) -> Any:
        """
        Append a non-executable data node to the metadata region.

        Args:
            content_type: Type tag marking the node as data (application/ld+json)
            payload: Text content of the node

        Returns:
            The appended node
        """


class HtmlDocumentSink(MetadataSink):
    """
    A sink over an HTML document, backed by BeautifulSoup.

    The metadata region is the document's <head>. Data nodes are <script>
    elements whose type attribute keeps browsers from executing them.

    BeautifulSoup is used to find the <head> and to inspect data nodes.
    When the sink was built from HTML text, render() returns that text
    with the appended elements spliced in before the closing </head>;
    nothing else in the page changes.

    Limitations:
        - A page that omits the <head> start tag (allowed by HTML5, where
          browsers create the head implicitly) has no metadata region here
        - A sink built from a BeautifulSoup tree renders the tree itself

    Usage:
        sink = HtmlDocumentSink(html)
        MetadataPublisher().publish(sink)
        html = sink.render()
    """

    name = "HTML"

    def __init__(self, document: Union[str, bytes, BeautifulSoup]):
        """
        Initialize the sink.

        Args:
            document: HTML text or an already-parsed BeautifulSoup tree
        """
        self.source: Optional[str] = None
        self._pending: list[str] = []

        if isinstance(document, BeautifulSoup):
            self.soup = document
            return

        if isinstance(document, bytes):
            document = UnicodeDammit(document, ["utf-8"]).unicode_markup
        self.source = document
        self.soup = BeautifulSoup(document, "html.parser")

    @property
    def head(self) -> Optional[Tag]:
        """The document's <head> element, or None if it has none."""
        return self.soup.head

    def has_metadata_region(self) -> bool:
        return self.head is not None

    def append_data_node(self, content_type: str, payload: str) -> Tag:
        head = self.head
        if head is None:
            raise EnvironmentUnavailable("Document has no <head> element")

        node = self.soup.new_tag("script", attrs={"type": content_type})
        node.string = payload
        head.append(node)
        self._pending.append(render_data_element(content_type, payload))
        return node

    def data_nodes(self, content_type: str) -> list[Tag]:
        """Return the <script> elements in <head> with the given type."""
        head = self.head
        if head is None:
            return []
        return head.find_all("script", attrs={"type": content_type})

    def _offset(self, tag: Optional[Tag]) -> Optional[int]:
        """Character offset of a tag's start in the source text."""
        if tag is None or tag.sourceline is None or tag.sourcepos is None:
            return None
        lines = self.source.split("\n")
        return sum(len(line) + 1 for line in lines[:tag.sourceline - 1]) + tag.sourcepos

    def _insertion_point(self) -> int:
        """Offset of the closing </head>, or where the head implicitly ends."""
        start = self._offset(self.head) or 0
        match = _HEAD_CLOSE.search(self.source, start)
        if match:
            return match.start()

        # </head> omitted: the head ends where <body> starts
        body = self._offset(self.soup.body)
        if body is not None:
            return body
        return len(self.source)

    def render(self) -> str:
        """Return the document with every appended data node in place."""
        if self.source is None:
            return str(self.soup)
        if not self._pending:
            return self.source

        point = self._insertion_point()
        return self.source[:point] + "".join(self._pending) + self.source[point:]


class MetadataPublisher:
    """
    Publishes one DescriptorRecord into a MetadataSink.

    Usage:
        publisher = MetadataPublisher()
        publisher.publish(sink)

        # Inside page rendering, where failures must not propagate
        if not publisher.publish_safely(sink):
            for warning in publisher.get_warnings():
                print(warning)
    """

    def __init__(
        self,
        record: Optional[DescriptorRecord] = None,
        options: Optional[PublishOptions] = None,
    ):
        """
        Initialize the publisher.

        Args:
            record: Descriptor to publish (defaults to build_descriptor())
            options: Rendering options (uses defaults if not provided)
        """
        self.record = record or build_descriptor()
        self.options = options or PublishOptions()
        self._warnings: list[str] = []

    def render_payload(self) -> str:
        """Return the serialized descriptor without publishing it."""
        return serialize_descriptor(self.record, self.options)

    def publish(self, sink: Optional[MetadataSink]) -> Any:
        """
        Append the serialized descriptor to the sink's metadata region.

        Args:
            sink: Target document; None means no document is available

        Returns:
            The node appended by the sink

        Raises:
            EnvironmentUnavailable: If there is no sink or it has no metadata region
        """
        if sink is None:
            raise EnvironmentUnavailable("No document available to publish into")
        if not sink.has_metadata_region():
            raise EnvironmentUnavailable(
                f"{sink.name} document has no metadata region"
            )

        payload = self.render_payload()
        return sink.append_data_node(self.options.content_type, payload)

    def publish_safely(self, sink: Optional[MetadataSink]) -> bool:
        """
        Publish, recording EnvironmentUnavailable as a warning instead of raising.

        Returns:
            True if a node was appended, False otherwise
        """
        try:
            self.publish(sink)
        except EnvironmentUnavailable as e:
            self.add_warning(f"Structured data not published: {e}")
            return False
        return True

    def add_warning(self, message: str) -> None:
        """Record a non-fatal publishing problem."""
        self._warnings.append(message)

    def get_warnings(self) -> list[str]:
        """Return a copy of all recorded warnings."""
        return self._warnings.copy()

    def clear_warnings(self) -> None:
        """Clear all recorded warnings."""
        self._warnings = []


def publish_html(
    html: Union[str, bytes],
    record: Optional[DescriptorRecord] = None,
    options: Optional[PublishOptions] = None,
) -> str:
    """
    Convenience function to publish the descriptor into HTML text.

    Args:
        html: The page to update
        record: Descriptor to publish (defaults to build_descriptor())
        options: Rendering options

    Returns:
        The updated page

    Raises:
        EnvironmentUnavailable: If the page has no <head>
    """
    sink = HtmlDocumentSink(html)
    MetadataPublisher(record, options).publish(sink)
    return sink.render()
