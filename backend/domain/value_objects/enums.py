"""
Domain enums for type-safe constants.
"""

from enum import Enum


class UserRole(str, Enum):
    """User authentication roles."""

    ADMIN = "admin"  # Full access to all features
    GUEST = "guest"  # Read-only access, can search and export but not modify

    def __str__(self) -> str:
        return self.value


class ExportFormat(str, Enum):
    """Downloadable export formats."""

    MARKDOWN = "md"
    PDF = "pdf"

    def __str__(self) -> str:
        return self.value


class IngestionStage(str, Enum):
    """Ingestion stages that can abort the pipeline, in execution order.

    Title backfill and tag generation never fail (tags fall back to keywords),
    so they have no stage here.
    """

    PARSE = "parse"  # Structure raw text into entry fields
    CONTENT = "content"  # Generate social hooks, topics, monetization ideas
    PERSIST = "persist"  # Save the finished entry

    def __str__(self) -> str:
        return self.value


class EntrySection(str, Enum):
    """Exportable entry sections, keyed by field name."""

    MAIN_IDEA = "main_idea"
    KEY_TAKEAWAYS = "key_takeaways"
    CENTRAL_PROBLEM = "central_problem"
    STRENGTHS = "strengths"
    WEAKNESSES = "weaknesses"
    COUNTERARGUMENTS = "counterarguments"
    PRACTICAL_LESSONS = "practical_lessons"
    TWO_MINUTE_VERSION = "two_minute_version"
    ACTION_CHECKLIST = "action_checklist"
    SOCIAL_MEDIA_HOOKS = "social_media_hooks"
    CONTENT_TOPICS = "content_topics"
    MONETIZATION_IDEAS = "monetization_ideas"
    NOTES = "notes"

    def __str__(self) -> str:
        return self.value

    @property
    def heading(self) -> str:
        """Human-readable section heading."""
        return SECTION_HEADINGS[self]


SECTION_HEADINGS = {
    EntrySection.MAIN_IDEA: "Main Idea",
    EntrySection.KEY_TAKEAWAYS: "Key Takeaways",
    EntrySection.CENTRAL_PROBLEM: "Central Problem",
    EntrySection.STRENGTHS: "Strengths",
    EntrySection.WEAKNESSES: "Weaknesses",
    EntrySection.COUNTERARGUMENTS: "Counterarguments",
    EntrySection.PRACTICAL_LESSONS: "Practical Lessons",
    EntrySection.TWO_MINUTE_VERSION: "Two-Minute Version",
    EntrySection.ACTION_CHECKLIST: "Action Checklist",
    EntrySection.SOCIAL_MEDIA_HOOKS: "Social Media Hooks",
    EntrySection.CONTENT_TOPICS: "Content Topics",
    EntrySection.MONETIZATION_IDEAS: "Monetization Ideas",
    EntrySection.NOTES: "Personal Notes",
}

# Sections rendered in the body of an export, in order
ANALYSIS_SECTIONS = (
    EntrySection.MAIN_IDEA,
    EntrySection.KEY_TAKEAWAYS,
    EntrySection.CENTRAL_PROBLEM,
    EntrySection.STRENGTHS,
    EntrySection.WEAKNESSES,
    EntrySection.COUNTERARGUMENTS,
    EntrySection.PRACTICAL_LESSONS,
    EntrySection.TWO_MINUTE_VERSION,
    EntrySection.ACTION_CHECKLIST,
)

# Sections filled by content generation
GENERATED_SECTIONS = (
    EntrySection.SOCIAL_MEDIA_HOOKS,
    EntrySection.CONTENT_TOPICS,
    EntrySection.MONETIZATION_IDEAS,
)
