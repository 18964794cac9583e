"""
Tiered keyword search over entries.

Entries are partitioned into priority tiers and returned tier by tier:
tags first, then title or speaker, then main idea or central problem.
Entries that match none of these are dropped. List fields such as key
takeaways never surface an entry.
"""

from dataclasses import dataclass, field
from typing import Generic, Iterable, List, Optional, Protocol, Sequence, TypeVar

# Tags shorter than this only match when they contain the query, not the reverse
MIN_REVERSE_TAG_LENGTH = 3


class Searchable(Protocol):
    title: str
    speaker: str
    main_idea: str
    central_problem: str
    tags: List[str]


T = TypeVar("T", bound=Searchable)


@dataclass
class SearchResults(Generic[T]):
    """
    Ranked search output.

    Attributes:
        results: Tier-ordered matches, capped at the page size
        tag_matches: Entries matched through a tag
        title_matches: Entries matched through title or speaker
        main_idea_matches: Entries matched through main idea or central problem
        content_matches: Always empty; list fields are not searched
    """

    results: List[T] = field(default_factory=list)
    tag_matches: List[T] = field(default_factory=list)
    title_matches: List[T] = field(default_factory=list)
    main_idea_matches: List[T] = field(default_factory=list)
    content_matches: List[T] = field(default_factory=list)

    @property
    def total(self) -> int:
        return len(self.results)


class SearchRanker:
    """Domain logic for matching and ranking entries against a query."""

    @staticmethod
    def normalize_query(query: Optional[str]) -> str:
        return (query or "").strip().lower()

    @staticmethod
    def matches_tag(tags: Iterable[str], term: str) -> bool:
        """
        Check whether any tag matches a normalized query term.

        A tag matches when it contains the term, or when the term contains the
        tag and the tag is at least MIN_REVERSE_TAG_LENGTH characters long.
        """
        for tag in tags or []:
            tag_lower = tag.lower()
            if term in tag_lower:
                return True
            if len(tag_lower) >= MIN_REVERSE_TAG_LENGTH and tag_lower in term:
                return True
        return False

    @staticmethod
    def matches_title(entry: Searchable, term: str) -> bool:
        return term in (entry.title or "").lower() or term in (entry.speaker or "").lower()

    @staticmethod
    def matches_main_idea(entry: Searchable, term: str) -> bool:
        return term in (entry.main_idea or "").lower() or term in (entry.central_problem or "").lower()

    @classmethod
    def rank(cls, entries: Sequence[T], query: Optional[str], page_size: int) -> SearchResults[T]:
        """
        Rank entries against a query.

        Args:
            entries: Candidate entries, already filtered by structured predicates
            query: Free text; blank queries return the input unranked
            page_size: Maximum number of results

        Returns:
            SearchResults whose results are tag matches, then title matches,
            then main idea matches, each in input order
        """
        term = cls.normalize_query(query)
        if not term:
            return SearchResults(results=list(entries[:page_size]))

        tag_matches: List[T] = []
        title_matches: List[T] = []
        main_idea_matches: List[T] = []

        for entry in entries:
            if cls.matches_tag(entry.tags, term):
                tag_matches.append(entry)
            elif cls.matches_title(entry, term):
                title_matches.append(entry)
            elif cls.matches_main_idea(entry, term):
                main_idea_matches.append(entry)

        ranked = tag_matches + title_matches + main_idea_matches
        return SearchResults(
            results=ranked[:page_size],
            tag_matches=tag_matches,
            title_matches=title_matches,
            main_idea_matches=main_idea_matches,
        )


def rank(entries: Sequence[T], query: Optional[str], page_size: int) -> SearchResults[T]:
    """Module-level shortcut for SearchRanker.rank."""
    return SearchRanker.rank(entries, query, page_size)
