"""
Section selection and printing.

A metadata report has up to three sections, printed in this order:
CLUSTER, BROKERS and TOPICS. When more than one section is active every
section gets a heading, an underline and a trailing blank line.
"""

import sys
from dataclasses import dataclass
from typing import List, Optional, Sequence, TextIO, Tuple

from brokermeta.errors import error_message
from brokermeta.metadata import MetadataResponse, Topic
from brokermeta.render.brokers import render_brokers
from brokermeta.render.topics import ErrorLookup, render_topic_details, render_topic_summary
from brokermeta.utils.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SectionSelection:
    """
    Resolved sections of a metadata report.

    Attributes:
        cluster: Print the cluster section
        brokers: Print the brokers section
        topics: Print the topics section
        internal: Include internal topics
        detailed: Print per-partition topic detail
        topic_filter: Explicitly requested topic names, empty for all
    """
    cluster: bool = False
    brokers: bool = False
    topics: bool = False
    internal: bool = False
    detailed: bool = False
    topic_filter: Tuple[str, ...] = ()

    def count(self) -> int:
        """Number of active sections."""
        return sum([self.cluster, self.brokers, self.topics])

    def requested_topics(self) -> Optional[List[str]]:
        """
        Topics to ask the cluster for.

        Returns:
            The explicit topic names if any, None for all topics when the
            topics section is active, otherwise an empty list
        """
        if self.topic_filter:
            return list(self.topic_filter)
        if self.topics:
            return None
        return []


def select_sections(
    print_cluster: bool = False,
    print_brokers: bool = False,
    print_topics: bool = False,
    print_internal: bool = False,
    print_detailed: bool = False,
    topics: Sequence[str] = (),
) -> SectionSelection:
    """
    Resolve which sections to print from the requested flags.

    Explicit topics, detail and internal topics all imply the topics
    section. Only when no section ends up requested does the report
    default to every section, internal topics included.

    Args:
        print_cluster: Cluster section requested
        print_brokers: Brokers section requested
        print_topics: Topics section requested
        print_internal: Internal topics requested
        print_detailed: Per-partition detail requested
        topics: Explicit topic names

    Returns:
        Resolved selection
    """
    if topics or print_detailed or print_internal:
        print_topics = True

    if not (print_cluster or print_brokers or print_topics):
        print_cluster = print_brokers = print_topics = print_internal = True

    return SectionSelection(
        cluster=print_cluster,
        brokers=print_brokers,
        topics=print_topics,
        internal=print_internal,
        detailed=print_detailed,
        topic_filter=tuple(topics),
    )


class SectionPrinter:
    """
    Prints the selected sections of a metadata response.

    Rendering sorts the response's lists in place; see
    brokermeta.metadata.MetadataResponse.copy.
    """

    def __init__(
        self,
        selection: SectionSelection,
        out: Optional[TextIO] = None,
        error_lookup: ErrorLookup = error_message,
    ):
        """
        Initialize section printer.

        Args:
            selection: Sections to print
            out: Output stream, stdout by default
            error_lookup: Resolves partition load error codes
        """
        self.selection = selection
        self.out = out if out is not None else sys.stdout
        self.error_lookup = error_lookup

    def _section(self, name: str, body: str) -> None:
        if self.selection.count() > 1:
            self.out.write(f"{name}\n{'=' * len(name)}\n{body}\n")
        else:
            self.out.write(body)
        self.out.flush()

    def _filtered_topics(self, response: MetadataResponse) -> List[Topic]:
        if not self.selection.topic_filter:
            return response.topics
        wanted = set(self.selection.topic_filter)
        return [t for t in response.topics if t.name in wanted]

    def print(self, response: MetadataResponse) -> None:
        """
        Print the selected sections of a response.

        Args:
            response: Decoded metadata response
        """
        if self.selection.cluster:
            if response.cluster_id is not None:
                self._section("CLUSTER", f"{response.cluster_id}\n")
            else:
                logger.debug("Response carries no cluster ID, skipping cluster section")

        if self.selection.brokers:
            self._section(
                "BROKERS",
                render_brokers(response.brokers, response.controller_id),
            )

        if self.selection.topics:
            topics = self._filtered_topics(response)
            if not topics:
                logger.debug(
                    "No topics to print",
                    topic_filter=list(self.selection.topic_filter),
                )
                return
            if self.selection.detailed:
                body = render_topic_details(topics, self.selection.internal, self.error_lookup)
            else:
                body = render_topic_summary(topics, self.selection.internal)
            self._section("TOPICS", body)
